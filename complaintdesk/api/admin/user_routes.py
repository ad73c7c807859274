"""
Admin User Management Routes
"""

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import jwt_required, current_user
from extensions import db
from complaintdesk.models.user import User, UserRole
from complaintdesk.services.errors import ServiceError
from complaintdesk.services.query_service import QueryService
from complaintdesk.utils.decorators import admin_required, staff_required
from complaintdesk.utils.request_data import get_json_body

admin_users_bp = Blueprint('admin_users', __name__)


@admin_users_bp.route('/', methods=['GET'])
@jwt_required()
@admin_required()
def get_all_users():
    """Get all users (admin only)"""
    try:
        return jsonify(QueryService.all_users()), 200

    except Exception as e:
        current_app.logger.error(f'Error fetching all users: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_users_bp.route('/admins', methods=['GET'])
@jwt_required()
@staff_required()
def get_admins():
    """Admins available as escalation targets"""
    try:
        return jsonify(QueryService.admins()), 200

    except Exception as e:
        current_app.logger.error(f'Error fetching admins: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_users_bp.route('/role/<int:user_id>', methods=['PATCH'])
@jwt_required()
@admin_required()
def update_user_role(user_id):
    """
    Change a user's role.

    Deliberate hardening: an admin changing their own role gets a 403, so
    an admin cannot demote themselves out of administration.
    """
    try:
        data = get_json_body()
        role = data.get('role')

        if role is None or role == '':
            return jsonify({'error': 'Role is required.'}), 400

        if isinstance(role, str):
            role = role.strip().lower()

        if not isinstance(role, str) or role not in UserRole.values():
            return jsonify({
                'error': f"Invalid role specified. Must be one of: {', '.join(UserRole.values())}"
            }), 400

        user = db.session.get(User, user_id)

        if not user:
            return jsonify({'error': 'User not found.'}), 404

        # Prevent self-demotion
        if current_user.id == user_id:
            return jsonify({'error': 'Cannot change your own role'}), 403

        user.role = role
        db.session.commit()

        current_app.logger.info(f'User {user_id} role set to {role} by user {current_user.id}')

        return jsonify({
            'message': f'Role updated to {role} for user {user_id}',
            'user': user.to_dict(include_email=True)
        }), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500
