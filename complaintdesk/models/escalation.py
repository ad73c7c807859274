"""
Escalation Model
"""

from extensions import db
from datetime import datetime


class Escalation(db.Model):
    """A recorded hand-off of a complaint to a higher-authority user"""

    __tablename__ = 'escalations'

    id = db.Column(db.Integer, primary_key=True)
    complaint_id = db.Column(db.Integer, db.ForeignKey('complaints.id'), nullable=False, index=True)
    escalated_to = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    escalated_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    reason = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    target = db.relationship('User', foreign_keys=[escalated_to])

    def to_dict(self):
        return {
            'id': self.id,
            'complaint_id': self.complaint_id,
            'escalated_to': self.escalated_to,
            'escalated_to_name': self.target.name if self.target else None,
            'escalated_by': self.escalated_by,
            'reason': self.reason,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Escalation {self.id} - Complaint {self.complaint_id}>'
