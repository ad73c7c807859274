"""
Complaint Lifecycle Service

Every state-changing operation on a complaint lives here. Each one performs
its primary write plus exactly one timeline insertion and commits them as a
single unit; any failure rolls the whole unit back.
"""

from flask import current_app
from extensions import db
from complaintdesk.models.complaint import Complaint, ComplaintStatus, ComplaintUpdate
from complaintdesk.models.escalation import Escalation
from complaintdesk.models.user import User
from complaintdesk.services.email_service import EmailService
from complaintdesk.services.errors import NotFoundError, ValidationError
from complaintdesk.services.storage_service import LocalStorageService

SUBMISSION_COMMENT = 'Complaint submitted by user.'
REQUIRED_COMPLAINT_FIELDS = ('category', 'subject', 'description')
DEFAULT_URGENCY = 'Medium'


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _as_bool(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def _parse_id(value, field):
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a numeric id')
    if parsed <= 0:
        raise ValidationError(f'{field} must be a positive id')
    return parsed


class ComplaintService:
    """Complaint lifecycle operations"""

    @staticmethod
    def get_complaint(complaint_id):
        complaint = db.session.get(Complaint, complaint_id)
        if not complaint:
            raise NotFoundError('Complaint not found.')
        return complaint

    @staticmethod
    def _get_user(user_id, label='User'):
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError(f'{label} not found.')
        return user

    @staticmethod
    def _add_timeline(complaint, status, comment, updated_by):
        update = ComplaintUpdate(
            complaint_id=complaint.id,
            status=status,
            comment=comment,
            updated_by=updated_by,
        )
        db.session.add(update)
        return update

    @staticmethod
    def submit_complaint(user_id, data, upload=None):
        """
        Create a complaint with status New and its first timeline row.

        Args:
            user_id: id of the submitting user
            data: mapping with category, subject, description and optional
                  urgency, type ("Anonymous") or is_anonymous
            upload: optional FileStorage attachment

        Returns:
            The new Complaint

        A staged attachment is removed if validation or the insert fails.
        """
        stored_filename = None

        if upload is not None and upload.filename:
            if not LocalStorageService.allowed_file(upload.filename):
                raise ValidationError('File type not allowed.')
            stored_filename = LocalStorageService.save_file(upload)

        try:
            fields = {name: _clean(data.get(name)) for name in REQUIRED_COMPLAINT_FIELDS}
            if not user_id or not all(fields.values()):
                raise ValidationError(
                    'Missing required complaint fields (user_id, category, subject, or description).'
                )

            is_anonymous = data.get('type') == 'Anonymous' or _as_bool(data.get('is_anonymous', ''))

            complaint = Complaint(
                user_id=user_id,
                is_anonymous=is_anonymous,
                category=fields['category'],
                subject=fields['subject'],
                description=fields['description'],
                file_path=stored_filename,
                urgency=_clean(data.get('urgency')) or DEFAULT_URGENCY,
                status=ComplaintStatus.NEW.value,
            )
            db.session.add(complaint)
            db.session.flush()

            ComplaintService._add_timeline(
                complaint, ComplaintStatus.NEW.value, SUBMISSION_COMMENT, user_id
            )
            db.session.commit()

        except Exception:
            db.session.rollback()
            LocalStorageService.delete_file(stored_filename)
            raise

        current_app.logger.info(f'Complaint {complaint.id} submitted by user {user_id}')
        return complaint

    @staticmethod
    def change_status(complaint_id, status, comment, updated_by):
        """
        Move a complaint to any status. Resolved stamps resolved_at, every
        other status clears it.
        """
        status = _clean(status)
        if not status:
            raise ValidationError('Status is required.')
        if status not in ComplaintStatus.values():
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(ComplaintStatus.values())}"
            )

        complaint = ComplaintService.get_complaint(complaint_id)
        previous = complaint.status

        try:
            complaint.set_status(status)
            ComplaintService._add_timeline(complaint, status, _clean(comment), updated_by)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f'Complaint {complaint.id} status {previous!r} -> {status!r} by user {updated_by}'
        )
        return complaint

    @staticmethod
    def assign(complaint_id, staff_id, updated_by):
        """Assign a complaint and force it to Under Review"""
        if staff_id in (None, ''):
            raise ValidationError('staff_id is required.')
        staff_id = _parse_id(staff_id, 'staff_id')

        complaint = ComplaintService.get_complaint(complaint_id)
        ComplaintService._get_user(staff_id, 'Staff user')

        try:
            complaint.assigned_to = staff_id
            complaint.set_status(ComplaintStatus.UNDER_REVIEW.value)
            ComplaintService._add_timeline(
                complaint,
                ComplaintStatus.UNDER_REVIEW.value,
                f'Assigned to staff ID {staff_id}',
                updated_by,
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f'Complaint {complaint.id} assigned to user {staff_id}')
        return complaint

    @staticmethod
    def reply(complaint_id, reply, updated_by):
        """
        Record a public reply on the timeline. The complaint's own status is
        left untouched.
        """
        reply = _clean(reply)
        if not reply:
            raise ValidationError('Reply text is required.')

        complaint = ComplaintService.get_complaint(complaint_id)

        try:
            update = ComplaintService._add_timeline(
                complaint, ComplaintStatus.REPLY_SENT.value, reply, updated_by
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f'Reply added to complaint {complaint.id} by user {updated_by}')
        return update

    @staticmethod
    def escalate(complaint_id, escalated_to, reason, updated_by):
        """
        Escalate a complaint: record the escalation, set status Escalated and
        log it on the timeline in one transaction, then notify the target.
        """
        reason = _clean(reason)
        if escalated_to in (None, '') or not reason:
            raise ValidationError('Missing required escalation details.')
        escalated_to = _parse_id(escalated_to, 'escalated_to')

        complaint = ComplaintService.get_complaint(complaint_id)
        target = ComplaintService._get_user(escalated_to, 'Escalation target')

        try:
            escalation = Escalation(
                complaint_id=complaint.id,
                escalated_to=escalated_to,
                escalated_by=updated_by,
                reason=reason,
            )
            db.session.add(escalation)
            complaint.set_status(ComplaintStatus.ESCALATED.value)
            ComplaintService._add_timeline(
                complaint,
                ComplaintStatus.ESCALATED.value,
                f'Escalated to user ID {escalated_to}. Reason: {reason}',
                updated_by,
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f'Complaint {complaint.id} escalated to user {escalated_to}')

        actor = db.session.get(User, updated_by) if updated_by else None
        EmailService.send_escalation_email(complaint, target, reason, escalated_by=actor)

        return escalation
