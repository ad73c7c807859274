"""
User Model
"""

from extensions import db, bcrypt
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """User roles enum"""
    USER = 'user'
    STAFF = 'staff'
    ADMIN = 'admin'

    @classmethod
    def values(cls):
        return [role.value for role in cls]


class User(db.Model):
    """User model for authentication and role-based access"""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(10), default=UserRole.USER.value, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __init__(self, name, email, password, **kwargs):
        """Initialize user with hashed password"""
        self.name = name
        self.email = email
        self.set_password(password)

        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Verify password against hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @property
    def is_staff(self):
        """Staff and admins can triage complaints"""
        return self.role in (UserRole.STAFF.value, UserRole.ADMIN.value)

    def to_dict(self, include_email=True):
        """Convert user to dictionary (never includes the password hash)"""
        data = {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

        if include_email:
            data['email'] = self.email

        return data

    def __repr__(self):
        return f'<User {self.email}>'
