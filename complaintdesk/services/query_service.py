"""
Read-side queries for complaints, feedback and users
"""

from sqlalchemy.orm import joinedload, selectinload
from complaintdesk.models.complaint import Complaint
from complaintdesk.models.escalation import Escalation
from complaintdesk.models.feedback import Feedback
from complaintdesk.models.user import User, UserRole
from complaintdesk.services.errors import NotFoundError


def _complaint_query():
    # Timelines are fetched in one batched IN query rather than per complaint
    return Complaint.query.options(
        joinedload(Complaint.user),
        joinedload(Complaint.staff),
        selectinload(Complaint.updates),
    )


class QueryService:
    """Joins and listings backing the read endpoints"""

    @staticmethod
    def complaints_for_user(user_id):
        complaints = (
            _complaint_query()
            .filter(Complaint.user_id == user_id)
            .order_by(Complaint.created_at.desc(), Complaint.id.desc())
            .all()
        )
        return [complaint.to_dict(include_timeline=True) for complaint in complaints]

    @staticmethod
    def all_complaints():
        complaints = (
            _complaint_query()
            .order_by(Complaint.created_at.desc(), Complaint.id.desc())
            .all()
        )
        return [complaint.to_dict(include_timeline=True) for complaint in complaints]

    @staticmethod
    def complaint_detail(complaint_id):
        complaint = (
            _complaint_query()
            .options(selectinload(Complaint.escalations).joinedload(Escalation.target))
            .filter(Complaint.id == complaint_id)
            .first()
        )
        if not complaint:
            raise NotFoundError('Complaint not found.')
        return complaint

    @staticmethod
    def complaint_by_filename(filename):
        return Complaint.query.filter_by(file_path=filename).first()

    @staticmethod
    def all_feedback():
        feedback = (
            Feedback.query.options(joinedload(Feedback.user))
            .join(User, Feedback.user_id == User.id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
            .all()
        )
        return [item.to_dict(include_user=True) for item in feedback]

    @staticmethod
    def all_users():
        users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
        return [user.to_dict(include_email=True) for user in users]

    @staticmethod
    def admins():
        admins = (
            User.query.filter_by(role=UserRole.ADMIN.value)
            .order_by(User.name.asc())
            .all()
        )
        return [{'id': admin.id, 'name': admin.name} for admin in admins]
