"""
Authentication Routes
"""

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity,
    current_user,
)
from extensions import db, limiter
from complaintdesk.models.user import User, UserRole
from complaintdesk.services.errors import ServiceError
from complaintdesk.utils.request_data import get_json_body, get_str_field

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/signup', methods=['POST'])
@limiter.limit("10 per hour")
def signup():
    """Register a new user (always with the 'user' role)"""
    try:
        data = get_json_body()

        name = get_str_field(data, 'name')
        email = get_str_field(data, 'email').lower()
        password = get_str_field(data, 'password', strip=False)

        if not name or not email or not password:
            return jsonify({'error': 'Provide name, email, and password'}), 400

        if User.query.filter_by(email=email).first():
            return jsonify({'error': 'Email already registered'}), 400

        user = User(
            name=name,
            email=email,
            password=password,
            role=UserRole.USER.value,
        )

        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f'User {user.id} registered')

        return jsonify({
            'message': 'User registered',
            'userId': user.id
        }), 201

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Signup error: {str(e)}')
        return jsonify({'error': str(e)}), 500


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("50 per hour")
def login():
    """Login user"""
    try:
        data = get_json_body()

        email = get_str_field(data, 'email').lower()
        password = get_str_field(data, 'password', strip=False)

        if not email or not password:
            return jsonify({'error': 'Provide email and password'}), 400

        user = User.query.filter_by(email=email).first()

        if not user or not user.check_password(password):
            return jsonify({'error': 'Invalid email or password'}), 401

        access_token = create_access_token(identity=user, additional_claims={'role': user.role})
        refresh_token = create_refresh_token(identity=user)

        return jsonify({
            'message': 'Login successful',
            'user': user.to_dict(include_email=True),
            'access_token': access_token,
            'refresh_token': refresh_token
        }), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        current_app.logger.error(f'Login error: {str(e)}')
        return jsonify({'error': str(e)}), 500


@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    """Refresh access token"""
    try:
        access_token = create_access_token(
            identity=get_jwt_identity(),
            additional_claims={'role': current_user.role}
        )

        return jsonify({
            'access_token': access_token
        }), 200

    except Exception as e:
        return jsonify({'error': str(e)}), 500


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    """Get current authenticated user"""
    return jsonify({
        'user': current_user.to_dict(include_email=True)
    }), 200
