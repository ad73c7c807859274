"""
Feedback Model
"""

from extensions import db
from datetime import datetime


class Feedback(db.Model):
    """General service feedback, independent of complaints"""

    __tablename__ = 'feedback'

    MIN_RATING = 1
    MAX_RATING = 5

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    rating = db.Column(db.Integer, nullable=False)  # 1-5 stars
    comment = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship('User', backref='feedback')

    def to_dict(self, include_user=False):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'rating': self.rating,
            'comment': self.comment,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

        if include_user:
            data['user_name'] = self.user.name if self.user else None
            data['user_email'] = self.user.email if self.user else None

        return data

    def __repr__(self):
        return f'<Feedback {self.id} - {self.rating}/5>'
