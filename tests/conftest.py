import io

import pytest
from flask_jwt_extended import create_access_token

from complaintdesk import create_app
from extensions import db
from complaintdesk.models.user import User, UserRole


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload_dir(app, tmp_path):
    return tmp_path / 'uploads'


def _create_user(app, name, email, role, password='secret123'):
    with app.app_context():
        user = User(name=name, email=email, password=password, role=role)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def users(app):
    """User ids keyed by a short label"""
    return {
        'user': _create_user(app, 'Uma User', 'user@example.com', UserRole.USER.value),
        'other': _create_user(app, 'Otto Other', 'other@example.com', UserRole.USER.value),
        'staff': _create_user(app, 'Sam Staff', 'staff@example.com', UserRole.STAFF.value),
        'admin': _create_user(app, 'Ada Admin', 'admin@example.com', UserRole.ADMIN.value),
        'senior': _create_user(app, 'Bea Senior', 'senior@example.com', UserRole.ADMIN.value),
    }


@pytest.fixture
def auth_headers(app, users):
    def _headers(label):
        with app.app_context():
            token = create_access_token(identity=str(users[label]))
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def submit_complaint(client, auth_headers):
    """POST a complaint as the given user; None values are left out of the form"""
    def _submit(label='user', file=None, **fields):
        data = {
            'category': 'Maintenance',
            'subject': 'Leak',
            'description': 'Pipe leaking',
            'urgency': 'High',
        }
        data.update(fields)
        data = {key: value for key, value in data.items() if value is not None}
        if file is not None:
            content, filename = file
            data['file'] = (io.BytesIO(content), filename)
        return client.post(
            '/api/complaints',
            data=data,
            headers=auth_headers(label),
            content_type='multipart/form-data',
        )
    return _submit


@pytest.fixture
def complaint_id(submit_complaint):
    response = submit_complaint()
    assert response.status_code == 201
    return response.get_json()['complaintId']
