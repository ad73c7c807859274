"""
JWT user loading callbacks
"""

from flask import jsonify
from extensions import db, jwt
from complaintdesk.models.user import User


@jwt.user_identity_loader
def user_identity_lookup(user):
    if isinstance(user, User):
        return str(user.id)
    return str(user)


@jwt.user_lookup_loader
def user_lookup_callback(_jwt_header, jwt_data):
    identity = jwt_data['sub']
    try:
        return db.session.get(User, int(identity))
    except (TypeError, ValueError):
        return None


@jwt.user_lookup_error_loader
def user_lookup_error_callback(_jwt_header, jwt_data):
    return jsonify({'error': 'Unauthorized', 'message': 'User no longer exists'}), 401


@jwt.unauthorized_loader
def missing_token_callback(reason):
    return jsonify({'error': 'Unauthorized', 'message': reason}), 401


@jwt.invalid_token_loader
def invalid_token_callback(reason):
    return jsonify({'error': 'Unauthorized', 'message': reason}), 401


@jwt.expired_token_loader
def expired_token_callback(_jwt_header, _jwt_data):
    return jsonify({'error': 'Unauthorized', 'message': 'Token has expired'}), 401
