"""
Dashboard and per-user complaint statistics
"""

from sqlalchemy import case, func
from extensions import db
from complaintdesk.models.complaint import (
    Complaint,
    ComplaintStatus,
    PENDING_STATUSES,
    REVIEW_STATUSES,
)
from complaintdesk.services.errors import ValidationError

NO_AVERAGE_PLACEHOLDER = '–'


class StatsService:

    @staticmethod
    def dashboard_stats():
        """
        Status counts for the admin dashboard and the average number of
        days between creation and resolution of resolved complaints.
        """
        status = func.trim(Complaint.status)
        new, review, resolved, total = db.session.query(
            func.count(case((status == ComplaintStatus.NEW.value, 1))),
            func.count(case((status.in_(REVIEW_STATUSES), 1))),
            func.count(case((status == ComplaintStatus.RESOLVED.value, 1))),
            func.count(Complaint.id),
        ).one()

        resolved_rows = db.session.query(
            Complaint.created_at, Complaint.resolved_at
        ).filter(
            status == ComplaintStatus.RESOLVED.value,
            Complaint.resolved_at.isnot(None),
        ).all()

        # Whole calendar days, ignoring time of day
        resolution_days = [
            (resolved_at.date() - created_at.date()).days
            for created_at, resolved_at in resolved_rows
        ]

        if resolution_days:
            avg_time = f'{sum(resolution_days) / len(resolution_days):.1f}'
        else:
            avg_time = NO_AVERAGE_PLACEHOLDER

        return {
            'new': int(new or 0),
            'review': int(review or 0),
            'resolved': int(resolved or 0),
            'total': int(total or 0),
            'avgTime': avg_time,
        }

    @staticmethod
    def parse_user_id(raw_user_id):
        """Validate the user_id query parameter"""
        try:
            user_id = int(str(raw_user_id).strip())
        except (TypeError, ValueError):
            raise ValidationError('Valid user_id parameter is required for stats.')
        if user_id <= 0:
            raise ValidationError('Valid user_id parameter is required for stats.')
        return user_id

    @staticmethod
    def user_stats(user_id):
        """
        Resolved, pending and total counts for one user's complaints.
        Escalated complaints count toward total only.
        """
        status = func.trim(Complaint.status)
        resolved, pending, total = db.session.query(
            func.count(case((status == ComplaintStatus.RESOLVED.value, 1))),
            func.count(case((status.in_(PENDING_STATUSES), 1))),
            func.count(Complaint.id),
        ).filter(Complaint.user_id == user_id).one()

        return {
            'total': int(total or 0),
            'resolved': int(resolved or 0),
            'pending': int(pending or 0),
        }
