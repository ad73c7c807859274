from flask import Blueprint, request, jsonify, current_app, send_from_directory
from flask_jwt_extended import jwt_required, current_user
from extensions import db
from complaintdesk.services.complaint_service import ComplaintService
from complaintdesk.services.errors import ServiceError
from complaintdesk.services.query_service import QueryService
from complaintdesk.services.stats_service import StatsService
from complaintdesk.services.storage_service import LocalStorageService
from complaintdesk.utils.decorators import can_access_user

complaints_bp = Blueprint('complaints', __name__)


@complaints_bp.route('', methods=['POST'])
@jwt_required()
def submit_complaint():
    """Submit a new complaint (multipart form, optional attachment)"""
    try:
        upload = request.files.get('file') or request.files.get('file_path')

        complaint = ComplaintService.submit_complaint(
            current_user.id,
            request.form,
            upload=upload,
        )

        return jsonify({
            'message': 'Complaint submitted successfully!',
            'complaintId': complaint.id,
            'complaint': complaint.to_dict(include_timeline=True)
        }), 201

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Complaint submission error: {str(e)}')
        return jsonify({'error': str(e)}), 500


@complaints_bp.route('/stats', methods=['GET'])
@jwt_required()
def get_user_stats():
    """Resolved / pending / total counts for one user"""
    try:
        user_id = StatsService.parse_user_id(request.args.get('user_id'))

        if not can_access_user(user_id):
            return jsonify({'error': 'Insufficient permissions'}), 403

        stats = StatsService.user_stats(user_id)
        current_app.logger.debug(f'Stats fetched for user {user_id}: {stats}')
        return jsonify(stats), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        current_app.logger.error(f'Error fetching stats: {str(e)}')
        return jsonify({'error': str(e)}), 500


@complaints_bp.route('/user/<int:user_id>', methods=['GET'])
@jwt_required()
def get_user_complaints(user_id):
    """All complaints of a user, newest first, each with its timeline"""
    try:
        if not can_access_user(user_id):
            return jsonify({'error': 'Insufficient permissions'}), 403

        return jsonify(QueryService.complaints_for_user(user_id)), 200

    except Exception as e:
        current_app.logger.error(f'Error fetching user complaints: {str(e)}')
        return jsonify({'error': str(e)}), 500


@complaints_bp.route('/<int:complaint_id>', methods=['GET'])
@jwt_required()
def get_complaint(complaint_id):
    """Single complaint with its full timeline"""
    try:
        complaint = QueryService.complaint_detail(complaint_id)

        if not can_access_user(complaint.user_id):
            return jsonify({'error': 'Insufficient permissions'}), 403

        return jsonify(complaint.to_dict(include_timeline=True, include_escalations=True)), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        current_app.logger.error(f'Error fetching complaint {complaint_id}: {str(e)}')
        return jsonify({'error': str(e)}), 500


@complaints_bp.route('/download/<filename>', methods=['GET'])
@jwt_required()
def download_attachment(filename):
    """Download a complaint attachment"""
    complaint = QueryService.complaint_by_filename(filename)

    if not LocalStorageService.exists(filename):
        return jsonify({'error': 'File not found.'}), 404

    if complaint is None:
        if not current_user.is_staff:
            return jsonify({'error': 'File not found.'}), 404
    elif not can_access_user(complaint.user_id):
        return jsonify({'error': 'Insufficient permissions'}), 403

    return send_from_directory(
        LocalStorageService.upload_folder(),
        filename,
        as_attachment=True,
        download_name=filename,
    )
