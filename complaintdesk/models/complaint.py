"""
Complaint and timeline models
"""

from extensions import db
from datetime import datetime
from enum import Enum


class ComplaintStatus(str, Enum):
    """Complaint status enum (values are the stored display strings)"""
    NEW = 'New'
    UNDER_REVIEW = 'Under Review'
    ASSIGNED = 'Assigned'
    REPLY_SENT = 'Reply Sent'
    RESOLVED = 'Resolved'
    ESCALATED = 'Escalated'

    @classmethod
    def values(cls):
        return [status.value for status in cls]


# Statuses counted as "pending" on the user dashboard. Escalated is in neither
# this group nor the resolved one.
PENDING_STATUSES = (
    ComplaintStatus.NEW.value,
    ComplaintStatus.UNDER_REVIEW.value,
    ComplaintStatus.ASSIGNED.value,
    ComplaintStatus.REPLY_SENT.value,
)

# Statuses counted as "in review" on the admin dashboard
REVIEW_STATUSES = (
    ComplaintStatus.UNDER_REVIEW.value,
    ComplaintStatus.ASSIGNED.value,
)


class Complaint(db.Model):
    __tablename__ = 'complaints'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    is_anonymous = db.Column(db.Boolean, default=False, nullable=False)
    category = db.Column(db.String(50), nullable=False)
    subject = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    file_path = db.Column(db.String(255), nullable=True)
    urgency = db.Column(db.String(20), default='Medium')
    status = db.Column(db.String(20), default=ComplaintStatus.NEW.value, nullable=False)
    assigned_to = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    resolved_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship('User', foreign_keys=[user_id], backref='complaints')
    staff = db.relationship('User', foreign_keys=[assigned_to])
    updates = db.relationship(
        'ComplaintUpdate',
        backref='complaint',
        lazy='select',
        order_by='[ComplaintUpdate.updated_at, ComplaintUpdate.id]',
    )
    escalations = db.relationship(
        'Escalation',
        backref='complaint',
        lazy='select',
        order_by='Escalation.created_at',
    )

    def set_status(self, status):
        """Set status and re-derive resolved_at from it"""
        self.status = status
        if status == ComplaintStatus.RESOLVED.value:
            self.resolved_at = datetime.utcnow()
        else:
            self.resolved_at = None

    def to_dict(self, include_timeline=False, include_escalations=False):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'user_name': self.user.name if self.user else None,
            'is_anonymous': self.is_anonymous,
            'category': self.category,
            'subject': self.subject,
            'description': self.description,
            'file_path': self.file_path,
            'urgency': self.urgency,
            'status': self.status,
            'assigned_to': self.assigned_to,
            'staff_name': self.staff.name if self.staff else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'resolved_at': self.resolved_at.isoformat() if self.resolved_at else None,
        }

        if include_timeline:
            data['timeline'] = [update.to_dict() for update in self.updates]

        if include_escalations:
            data['escalations'] = [escalation.to_dict() for escalation in self.escalations]

        return data

    def __repr__(self):
        return f'<Complaint {self.id} - {self.status}>'


class ComplaintUpdate(db.Model):
    """Append-only timeline entry for a complaint"""

    __tablename__ = 'complaint_updates'

    id = db.Column(db.Integer, primary_key=True)
    complaint_id = db.Column(db.Integer, db.ForeignKey('complaints.id'), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False)
    comment = db.Column(db.Text)
    updated_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'complaint_id': self.complaint_id,
            'status': self.status,
            'comment': self.comment,
            'updated_by': self.updated_by,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<ComplaintUpdate {self.id} - Complaint {self.complaint_id}>'
