import io

import pytest
from werkzeug.datastructures import FileStorage

from extensions import db
from complaintdesk.models.complaint import Complaint, ComplaintUpdate
from complaintdesk.models.escalation import Escalation
from complaintdesk.services.complaint_service import ComplaintService
from complaintdesk.services.errors import NotFoundError, ValidationError

FIELDS = {'category': 'Maintenance', 'subject': 'Leak', 'description': 'Pipe leaking'}


def _fail(*args, **kwargs):
    raise RuntimeError('database unavailable')


def test_failed_commit_rolls_back_and_removes_attachment(app, users, upload_dir, monkeypatch):
    with app.app_context():
        monkeypatch.setattr(db.session, 'commit', _fail)
        upload = FileStorage(stream=io.BytesIO(b'evidence'), filename='photo.png')

        with pytest.raises(RuntimeError):
            ComplaintService.submit_complaint(users['user'], FIELDS, upload=upload)

        monkeypatch.undo()
        assert Complaint.query.count() == 0
        assert ComplaintUpdate.query.count() == 0
        assert list(upload_dir.iterdir()) == []


def test_failed_timeline_insert_undoes_complaint_row(app, client, auth_headers, upload_dir, monkeypatch):
    monkeypatch.setattr(ComplaintService, '_add_timeline', staticmethod(_fail))

    response = client.post(
        '/api/complaints',
        data={**FIELDS, 'file': (io.BytesIO(b'evidence'), 'photo.png')},
        headers=auth_headers('user'),
        content_type='multipart/form-data',
    )

    assert response.status_code == 500
    assert response.get_json()['error'] == 'database unavailable'
    with app.app_context():
        assert Complaint.query.count() == 0
    assert list(upload_dir.iterdir()) == []


def test_failed_status_timeline_leaves_complaint_unchanged(app, client, complaint_id, auth_headers, monkeypatch):
    monkeypatch.setattr(ComplaintService, '_add_timeline', staticmethod(_fail))

    response = client.patch(
        f'/api/admin/complaints/status/{complaint_id}',
        json={'status': 'Resolved'},
        headers=auth_headers('staff'),
    )

    assert response.status_code == 500
    with app.app_context():
        complaint = db.session.get(Complaint, complaint_id)
        assert complaint.status == 'New'
        assert complaint.resolved_at is None


def test_failed_escalation_writes_nothing(app, client, complaint_id, users, auth_headers, monkeypatch):
    monkeypatch.setattr(ComplaintService, '_add_timeline', staticmethod(_fail))

    response = client.post(
        f'/api/admin/complaints/{complaint_id}/escalate',
        json={'escalated_to': users['admin'], 'reason': 'stuck'},
        headers=auth_headers('staff'),
    )

    assert response.status_code == 500
    with app.app_context():
        assert Escalation.query.count() == 0
        assert db.session.get(Complaint, complaint_id).status == 'New'


def test_service_validation_errors(app, users):
    with app.app_context():
        with pytest.raises(ValidationError):
            ComplaintService.submit_complaint(users['user'], {'category': 'Noise'})

        complaint = ComplaintService.submit_complaint(users['user'], FIELDS)

        with pytest.raises(ValidationError):
            ComplaintService.change_status(complaint.id, 'Closed', None, users['staff'])
        with pytest.raises(NotFoundError):
            ComplaintService.change_status(complaint.id + 100, 'Resolved', None, users['staff'])
        with pytest.raises(ValidationError):
            ComplaintService.reply(complaint.id, '   ', users['staff'])


def test_change_status_derives_resolved_at(app, users):
    with app.app_context():
        complaint = ComplaintService.submit_complaint(users['user'], FIELDS)

        ComplaintService.change_status(complaint.id, 'Resolved', 'done', users['staff'])
        assert db.session.get(Complaint, complaint.id).resolved_at is not None

        ComplaintService.change_status(complaint.id, 'Reply Sent', None, users['staff'])
        assert db.session.get(Complaint, complaint.id).resolved_at is None


def test_escalation_clears_resolved_at(app, users):
    with app.app_context():
        complaint = ComplaintService.submit_complaint(users['user'], FIELDS)
        ComplaintService.change_status(complaint.id, 'Resolved', None, users['staff'])

        ComplaintService.escalate(complaint.id, users['admin'], 'reopened by customer', users['staff'])

        refreshed = db.session.get(Complaint, complaint.id)
        assert refreshed.status == 'Escalated'
        assert refreshed.resolved_at is None
