"""
Feedback Routes
"""

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import jwt_required, current_user
from extensions import db
from complaintdesk.models.feedback import Feedback
from complaintdesk.services.errors import ServiceError
from complaintdesk.utils.request_data import get_json_body, get_str_field

feedback_bp = Blueprint('feedback', __name__)


@feedback_bp.route('', methods=['POST'])
@jwt_required()
def submit_feedback():
    """Submit a 1-5 rating with an optional comment"""
    try:
        data = get_json_body()

        rating = data.get('rating')
        if rating in (None, ''):
            return jsonify({'error': 'Rating is required.'}), 400

        try:
            rating = int(rating)
        except (TypeError, ValueError):
            return jsonify({'error': 'Rating must be a number between 1 and 5.'}), 400

        if not Feedback.MIN_RATING <= rating <= Feedback.MAX_RATING:
            return jsonify({'error': 'Rating must be a number between 1 and 5.'}), 400

        feedback = Feedback(
            user_id=current_user.id,
            rating=rating,
            comment=get_str_field(data, 'comment') or None,
        )

        db.session.add(feedback)
        db.session.commit()

        return jsonify({
            'message': 'Thank you for your feedback!',
            'feedback': feedback.to_dict()
        }), 201

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Feedback submission error: {str(e)}')
        return jsonify({'error': str(e)}), 500
