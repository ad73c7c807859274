"""
Complaint report export
"""

from datetime import date, datetime, timedelta
import csv
import io

from extensions import db
from complaintdesk.models.complaint import Complaint
from complaintdesk.models.user import User
from complaintdesk.services.errors import NotFoundError, ValidationError

REPORT_FIELDS = ['id', 'subject', 'category', 'status', 'user_name', 'created_at', 'resolved_at']
REPORT_FILENAME = 'complaints-report.csv'
ALL_CATEGORIES = 'All'


def _parse_bound(value, field):
    """Parse YYYY-MM-DD or an ISO timestamp; returns (datetime, is_date_only)"""
    value = str(value).strip()
    try:
        if len(value) == 10:
            return datetime.combine(date.fromisoformat(value), datetime.min.time()), True
        return datetime.fromisoformat(value), False
    except ValueError:
        raise ValidationError(f'{field} must be an ISO date (YYYY-MM-DD)')


def _format(value):
    if value is None:
        return ''
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class ReportService:

    @staticmethod
    def complaint_rows(start_date=None, end_date=None, category=None):
        """
        Complaints joined with submitter name, filtered by creation date
        range (only when both bounds are given) and category.
        """
        query = db.session.query(
            Complaint.id,
            Complaint.subject,
            Complaint.category,
            Complaint.status,
            User.name.label('user_name'),
            Complaint.created_at,
            Complaint.resolved_at,
        ).outerjoin(User, Complaint.user_id == User.id)

        if start_date and end_date:
            start, _ = _parse_bound(start_date, 'startDate')
            end, end_is_date = _parse_bound(end_date, 'endDate')
            query = query.filter(Complaint.created_at >= start)
            if end_is_date:
                # A bare end date covers that whole day
                query = query.filter(Complaint.created_at < end + timedelta(days=1))
            else:
                query = query.filter(Complaint.created_at <= end)

        if category and category != ALL_CATEGORIES:
            query = query.filter(Complaint.category == category)

        return query.order_by(Complaint.id.asc()).all()

    @staticmethod
    def to_csv(rows):
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
        writer.writerow(REPORT_FIELDS)
        for row in rows:
            writer.writerow([_format(getattr(row, field)) for field in REPORT_FIELDS])
        return buffer.getvalue()

    @staticmethod
    def export_complaints(start_date=None, end_date=None, category=None):
        rows = ReportService.complaint_rows(start_date, end_date, category)
        if not rows:
            raise NotFoundError('No data found for the selected criteria.')
        return ReportService.to_csv(rows)
