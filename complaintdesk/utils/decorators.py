"""
Role-based access decorators

Roles are read from the database row of the token's user on every request,
never from claims or request bodies.
"""

from functools import wraps
from flask import jsonify
from flask_jwt_extended import current_user, verify_jwt_in_request
from complaintdesk.models.user import UserRole


def roles_required(*roles):
    """Allow the request only if the current user holds one of roles"""
    allowed = {role.value if isinstance(role, UserRole) else role for role in roles}

    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            if current_user.role not in allowed:
                return jsonify({'error': 'Insufficient permissions'}), 403
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def admin_required():
    return roles_required(UserRole.ADMIN)


def staff_required():
    """Staff or admin"""
    return roles_required(UserRole.STAFF, UserRole.ADMIN)


def can_access_user(user_id):
    """A user may read their own records; staff and admins may read anyone's"""
    return current_user.is_staff or current_user.id == user_id
