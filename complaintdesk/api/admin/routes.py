"""
Admin Routes

Complaint triage, dashboard, feedback, settings and reports.
"""

from flask import Blueprint, Response, jsonify, request, current_app
from flask_jwt_extended import jwt_required, current_user
from extensions import db
from complaintdesk.models.system_config import SystemConfig
from complaintdesk.services.complaint_service import ComplaintService
from complaintdesk.services.errors import ServiceError
from complaintdesk.services.query_service import QueryService
from complaintdesk.services.report_service import ReportService, REPORT_FILENAME
from complaintdesk.services.stats_service import StatsService
from complaintdesk.utils.decorators import admin_required, staff_required
from complaintdesk.utils.request_data import get_json_body, get_str_field

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/dashboard-stats', methods=['GET'])
@jwt_required()
@staff_required()
def dashboard_stats():
    """Get complaint statistics for the dashboard"""
    try:
        return jsonify(StatsService.dashboard_stats()), 200

    except Exception as e:
        current_app.logger.error(f'Error fetching dashboard stats: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/complaints', methods=['GET'])
@jwt_required()
@staff_required()
def get_all_complaints():
    """All complaints with submitter, assignee and timeline"""
    try:
        return jsonify(QueryService.all_complaints()), 200

    except Exception as e:
        current_app.logger.error(f'Error fetching admin complaints: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/complaints/<int:complaint_id>/assign', methods=['POST'])
@jwt_required()
@staff_required()
def assign_complaint(complaint_id):
    """Assign a staff member to a complaint"""
    try:
        data = get_json_body()

        complaint = ComplaintService.assign(complaint_id, data.get('staff_id'), current_user.id)

        return jsonify({
            'message': 'Complaint assigned successfully',
            'complaint': complaint.to_dict()
        }), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error assigning complaint: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/complaints/<int:complaint_id>/reply', methods=['POST'])
@jwt_required()
@staff_required()
def reply_to_complaint(complaint_id):
    """Add a public reply to the complaint timeline"""
    try:
        data = get_json_body()

        update = ComplaintService.reply(complaint_id, data.get('reply'), current_user.id)

        return jsonify({
            'message': 'Reply sent successfully',
            'update': update.to_dict()
        }), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error sending reply: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/complaints/status/<int:complaint_id>', methods=['PATCH'])
@jwt_required()
@staff_required()
def update_complaint_status(complaint_id):
    """Change a complaint's status and log it on the timeline"""
    try:
        data = get_json_body()

        complaint = ComplaintService.change_status(
            complaint_id,
            data.get('status'),
            data.get('comment'),
            current_user.id,
        )

        return jsonify({
            'message': 'Complaint status and timeline updated successfully',
            'complaint': complaint.to_dict()
        }), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error updating complaint status: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/complaints/<int:complaint_id>/escalate', methods=['POST'])
@jwt_required()
@staff_required()
def escalate_complaint(complaint_id):
    """Escalate a complaint to another user"""
    try:
        data = get_json_body()

        escalation = ComplaintService.escalate(
            complaint_id,
            data.get('escalated_to'),
            data.get('reason'),
            current_user.id,
        )

        return jsonify({
            'message': 'Complaint escalated successfully',
            'escalation': escalation.to_dict()
        }), 200

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error escalating complaint: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/feedback', methods=['GET'])
@jwt_required()
@admin_required()
def get_all_feedback():
    """All feedback with submitter name and email, newest first"""
    try:
        return jsonify(QueryService.all_feedback()), 200

    except Exception as e:
        current_app.logger.error(f'Error fetching feedback: {str(e)}')
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/config', methods=['GET'])
@jwt_required()
@admin_required()
def get_config():
    """System settings as a single key/value object"""
    try:
        return jsonify(SystemConfig.as_dict()), 200

    except Exception as e:
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/config', methods=['PUT'])
@jwt_required()
@admin_required()
def update_config():
    """Upsert every key/value pair in the request body"""
    try:
        data = request.get_json(silent=True)

        if not isinstance(data, dict) or not data:
            return jsonify({'error': 'Provide at least one setting to update'}), 400

        for key, value in data.items():
            if not str(key).strip():
                return jsonify({'error': 'Setting keys cannot be empty'}), 400
            SystemConfig.upsert(str(key).strip(), None if value is None else str(value))

        db.session.commit()
        current_app.logger.info(f'System settings updated by user {current_user.id}: {sorted(data)}')

        return jsonify({
            'message': 'Settings updated successfully',
            'config': SystemConfig.as_dict()
        }), 200

    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500


@admin_bp.route('/reports/export', methods=['POST'])
@jwt_required()
@admin_required()
def export_report():
    """Export filtered complaints as a CSV attachment"""
    try:
        data = get_json_body()

        csv_body = ReportService.export_complaints(
            start_date=data.get('startDate'),
            end_date=data.get('endDate'),
            category=get_str_field(data, 'category') or None,
        )

        return Response(
            csv_body,
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={REPORT_FILENAME}'}
        )

    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
    except Exception as e:
        current_app.logger.error(f'Error exporting report: {str(e)}')
        return jsonify({'error': str(e)}), 500
