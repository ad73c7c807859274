from extensions import db
from complaintdesk.models.feedback import Feedback


def test_submit_feedback(app, client, users, auth_headers):
    response = client.post(
        '/api/feedback', json={'rating': 5, 'comment': 'Great support'}, headers=auth_headers('user')
    )

    assert response.status_code == 201
    with app.app_context():
        feedback = Feedback.query.one()
        assert feedback.user_id == users['user']
        assert feedback.rating == 5
        assert feedback.comment == 'Great support'


def test_feedback_comment_is_optional(client, auth_headers):
    response = client.post('/api/feedback', json={'rating': '3'}, headers=auth_headers('user'))
    assert response.status_code == 201
    assert response.get_json()['feedback']['comment'] is None


def test_feedback_rating_is_validated(app, client, auth_headers):
    headers = auth_headers('user')

    for body in ({}, {'rating': 0}, {'rating': 6}, {'rating': 'great'}):
        response = client.post('/api/feedback', json=body, headers=headers)
        assert response.status_code == 400

    with app.app_context():
        assert db.session.query(Feedback).count() == 0


def test_feedback_requires_authentication(client):
    assert client.post('/api/feedback', json={'rating': 5}).status_code == 401


def test_feedback_rejects_non_object_body_and_non_string_comment(app, client, auth_headers):
    headers = auth_headers('user')

    listed = client.post('/api/feedback', json=[5], headers=headers)
    assert listed.status_code == 400

    comment = client.post('/api/feedback', json={'rating': 5, 'comment': ['fine']}, headers=headers)
    assert comment.status_code == 400

    with app.app_context():
        assert db.session.query(Feedback).count() == 0
