from extensions import db, mail
from complaintdesk.models.complaint import Complaint, ComplaintUpdate
from complaintdesk.models.escalation import Escalation


def _detail(client, complaint_id, headers):
    return client.get(f'/api/complaints/{complaint_id}', headers=headers).get_json()


def test_resolve_then_reopen_resets_resolved_at(client, submit_complaint, auth_headers):
    response = submit_complaint(category='Maintenance', subject='Leak', description='Pipe leaking')
    assert response.status_code == 201
    complaint_id = response.get_json()['complaintId']
    staff = auth_headers('staff')

    response = client.patch(
        f'/api/admin/complaints/status/{complaint_id}',
        json={'status': 'Resolved', 'comment': 'Fixed the pipe'},
        headers=staff,
    )
    assert response.status_code == 200
    detail = _detail(client, complaint_id, staff)
    assert detail['status'] == 'Resolved'
    assert detail['resolved_at'] is not None

    response = client.patch(
        f'/api/admin/complaints/status/{complaint_id}',
        json={'status': 'New', 'comment': 'Leak is back'},
        headers=staff,
    )
    assert response.status_code == 200
    detail = _detail(client, complaint_id, staff)
    assert detail['status'] == 'New'
    assert detail['resolved_at'] is None
    assert [entry['status'] for entry in detail['timeline']] == ['New', 'Resolved', 'New']
    assert detail['timeline'][1]['comment'] == 'Fixed the pipe'


def test_any_status_may_follow_any_other(client, complaint_id, auth_headers):
    staff = auth_headers('staff')
    for status in ('Escalated', 'Assigned', 'Resolved', 'Reply Sent', 'Under Review', 'Resolved'):
        response = client.patch(
            f'/api/admin/complaints/status/{complaint_id}', json={'status': status}, headers=staff
        )
        assert response.status_code == 200
        assert response.get_json()['complaint']['status'] == status


def test_status_update_validates_input(client, complaint_id, auth_headers):
    staff = auth_headers('staff')

    missing = client.patch(f'/api/admin/complaints/status/{complaint_id}', json={}, headers=staff)
    assert missing.status_code == 400

    unknown = client.patch(
        f'/api/admin/complaints/status/{complaint_id}', json={'status': 'Closed'}, headers=staff
    )
    assert unknown.status_code == 400


def test_triage_endpoints_reject_non_object_bodies(client, complaint_id, auth_headers):
    staff = auth_headers('staff')

    calls = (
        (client.patch, f'/api/admin/complaints/status/{complaint_id}', ['Resolved']),
        (client.post, f'/api/admin/complaints/{complaint_id}/assign', [1]),
        (client.post, f'/api/admin/complaints/{complaint_id}/reply', ['Thanks']),
        (client.post, f'/api/admin/complaints/{complaint_id}/escalate', [1, 'Urgent']),
    )
    for send, url, body in calls:
        response = send(url, json=body, headers=staff)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Request body must be a JSON object.'

    detail = _detail(client, complaint_id, staff)
    assert detail['status'] == 'New'
    assert len(detail['timeline']) == 1


def test_status_update_unknown_complaint_is_not_found(app, client, users, auth_headers):
    response = client.patch(
        '/api/admin/complaints/status/404', json={'status': 'Resolved'}, headers=auth_headers('staff')
    )

    assert response.status_code == 404
    with app.app_context():
        assert ComplaintUpdate.query.count() == 0


def test_status_update_records_acting_user_from_token(app, client, complaint_id, users, auth_headers):
    client.patch(
        f'/api/admin/complaints/status/{complaint_id}',
        json={'status': 'Under Review', 'updated_by': users['user']},
        headers=auth_headers('admin'),
    )

    with app.app_context():
        latest = ComplaintUpdate.query.order_by(ComplaintUpdate.id.desc()).first()
        assert latest.updated_by == users['admin']


def test_assign_forces_under_review(client, complaint_id, users, auth_headers):
    staff = auth_headers('staff')
    client.patch(f'/api/admin/complaints/status/{complaint_id}', json={'status': 'Resolved'}, headers=staff)

    response = client.post(
        f'/api/admin/complaints/{complaint_id}/assign', json={'staff_id': users['staff']}, headers=staff
    )

    assert response.status_code == 200
    detail = _detail(client, complaint_id, staff)
    assert detail['status'] == 'Under Review'
    assert detail['assigned_to'] == users['staff']
    assert detail['staff_name'] == 'Sam Staff'
    assert detail['resolved_at'] is None
    last = detail['timeline'][-1]
    assert last['status'] == 'Under Review'
    assert last['comment'] == f"Assigned to staff ID {users['staff']}"


def test_assign_validation_and_not_found(client, complaint_id, auth_headers):
    staff = auth_headers('staff')

    assert client.post(
        f'/api/admin/complaints/{complaint_id}/assign', json={}, headers=staff
    ).status_code == 400
    assert client.post(
        f'/api/admin/complaints/{complaint_id}/assign', json={'staff_id': 'abc'}, headers=staff
    ).status_code == 400
    assert client.post(
        f'/api/admin/complaints/{complaint_id}/assign', json={'staff_id': 9999}, headers=staff
    ).status_code == 404
    assert client.post(
        '/api/admin/complaints/9999/assign', json={'staff_id': 1}, headers=staff
    ).status_code == 404


def test_reply_appends_timeline_without_touching_status(client, complaint_id, auth_headers):
    staff = auth_headers('staff')

    response = client.post(
        f'/api/admin/complaints/{complaint_id}/reply', json={'reply': 'We are on it'}, headers=staff
    )

    assert response.status_code == 200
    detail = _detail(client, complaint_id, staff)
    assert detail['status'] == 'New'
    assert detail['timeline'][-1]['status'] == 'Reply Sent'
    assert detail['timeline'][-1]['comment'] == 'We are on it'


def test_reply_requires_text(client, complaint_id, auth_headers):
    response = client.post(
        f'/api/admin/complaints/{complaint_id}/reply', json={'reply': ''}, headers=auth_headers('staff')
    )
    assert response.status_code == 400


def test_escalate_records_escalation_status_and_timeline(app, client, complaint_id, users, auth_headers):
    staff = auth_headers('staff')

    with mail.record_messages() as outbox:
        response = client.post(
            f'/api/admin/complaints/{complaint_id}/escalate',
            json={'escalated_to': users['senior'], 'reason': 'needs senior review'},
            headers=staff,
        )

    assert response.status_code == 200
    with app.app_context():
        escalations = Escalation.query.filter_by(complaint_id=complaint_id).all()
        assert len(escalations) == 1
        assert escalations[0].escalated_to == users['senior']
        assert escalations[0].escalated_by == users['staff']
        assert db.session.get(Complaint, complaint_id).status == 'Escalated'
        updates = ComplaintUpdate.query.filter_by(complaint_id=complaint_id, status='Escalated').all()
        assert len(updates) == 1
        assert str(users['senior']) in updates[0].comment
        assert 'needs senior review' in updates[0].comment

    assert len(outbox) == 1
    assert outbox[0].recipients == ['senior@example.com']

    detail = _detail(client, complaint_id, staff)
    assert detail['escalations'][0]['escalated_to_name'] == 'Bea Senior'


def test_escalate_requires_target_and_reason(app, client, complaint_id, users, auth_headers):
    staff = auth_headers('staff')

    response = client.post(
        f'/api/admin/complaints/{complaint_id}/escalate', json={'reason': 'why'}, headers=staff
    )
    assert response.status_code == 400

    response = client.post(
        f'/api/admin/complaints/{complaint_id}/escalate',
        json={'escalated_to': users['senior']},
        headers=staff,
    )
    assert response.status_code == 400

    response = client.post(
        f'/api/admin/complaints/{complaint_id}/escalate',
        json={'escalated_to': 9999, 'reason': 'why'},
        headers=staff,
    )
    assert response.status_code == 404

    with app.app_context():
        assert Escalation.query.count() == 0
        assert db.session.get(Complaint, complaint_id).status == 'New'


def test_timeline_has_one_row_per_operation_in_time_order(client, complaint_id, users, auth_headers):
    staff = auth_headers('staff')
    operations = [
        lambda: client.post(f'/api/admin/complaints/{complaint_id}/assign',
                            json={'staff_id': users['staff']}, headers=staff),
        lambda: client.post(f'/api/admin/complaints/{complaint_id}/reply',
                            json={'reply': 'Looking into it'}, headers=staff),
        lambda: client.patch(f'/api/admin/complaints/status/{complaint_id}',
                             json={'status': 'Assigned'}, headers=staff),
        lambda: client.post(f'/api/admin/complaints/{complaint_id}/escalate',
                            json={'escalated_to': users['admin'], 'reason': 'stuck'}, headers=staff),
        lambda: client.patch(f'/api/admin/complaints/status/{complaint_id}',
                             json={'status': 'Resolved'}, headers=staff),
    ]

    for operation in operations:
        assert operation().status_code == 200

    timeline = _detail(client, complaint_id, staff)['timeline']
    assert len(timeline) == len(operations) + 1
    timestamps = [entry['updated_at'] for entry in timeline]
    assert timestamps == sorted(timestamps)
    assert [entry['status'] for entry in timeline] == [
        'New', 'Under Review', 'Reply Sent', 'Assigned', 'Escalated', 'Resolved'
    ]


def test_triage_endpoints_require_staff(client, complaint_id, users, auth_headers):
    user = auth_headers('user')

    assert client.patch(
        f'/api/admin/complaints/status/{complaint_id}', json={'status': 'Resolved'}, headers=user
    ).status_code == 403
    assert client.post(
        f'/api/admin/complaints/{complaint_id}/assign', json={'staff_id': users['staff']}, headers=user
    ).status_code == 403
    assert client.post(
        f'/api/admin/complaints/{complaint_id}/reply', json={'reply': 'hi'}, headers=user
    ).status_code == 403
    assert client.post(
        f'/api/admin/complaints/{complaint_id}/escalate',
        json={'escalated_to': users['admin'], 'reason': 'x'},
        headers=user,
    ).status_code == 403
    assert client.patch(
        f'/api/admin/complaints/status/{complaint_id}', json={'status': 'Resolved'}
    ).status_code == 401
