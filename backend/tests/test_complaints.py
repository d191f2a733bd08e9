import io
import os
from datetime import datetime, timedelta
from campusfix.constants.roles import ROLE_FACULTY, ROLE_STUDENT
from campusfix.models.complaint import Complaint
from tests.test_utils_seed import ensure_user, ensure_admin, ensure_technician, jwt_headers, create_complaint


def test_create_complaint_json_starts_pending(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    resp = client.post('/api/complaints', json={'category': 'Plumbing', 'title': 'Leak', 'description': 'Sink'},
                       headers=jwt_headers(student))
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    assert body['status'] == 'Pending'
    assert body['assignedTo'] is None
    assert body['userId'] == student.id
    assert body['imagePath'] is None
    assert body['createdAt'].endswith('Z')
    assert body['updatedAt'] is None


def test_create_complaint_with_image_upload(client, app_instance):
    faculty = ensure_user(ROLE_FACULTY, email='f@campus.test')
    data = {'category': 'Electrical', 'title': 'Flicker', 'image': (io.BytesIO(b'\x89PNG fake'), 'lamp photo.png')}
    resp = client.post('/api/complaints', data=data, headers=jwt_headers(faculty), content_type='multipart/form-data')
    assert resp.status_code == 201, resp.get_json()
    image_path = resp.get_json()['imagePath']
    assert image_path.startswith('/uploads/') and image_path.endswith('-lamp_photo.png')
    stored = os.path.join(app_instance.config['UPLOAD_FOLDER'], image_path.rsplit('/', 1)[1])
    assert os.path.exists(stored)
    served = client.get(image_path)
    assert served.status_code == 200
    assert served.data == b'\x89PNG fake'


def test_create_complaint_rejects_disallowed_image_type(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    data = {'category': 'Electrical', 'title': 'Flicker', 'image': (io.BytesIO(b'#!/bin/sh'), 'evil.sh')}
    resp = client.post('/api/complaints', data=data, headers=jwt_headers(student), content_type='multipart/form-data')
    assert resp.status_code == 400
    assert resp.get_json()['error']['detail'] == 'image type not allowed'


def test_create_complaint_rejects_oversized_upload(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    big = io.BytesIO(b'0' * (5 * 1024 * 1024 + 1))
    data = {'category': 'Electrical', 'title': 'Flicker', 'image': (big, 'big.png')}
    resp = client.post('/api/complaints', data=data, headers=jwt_headers(student), content_type='multipart/form-data')
    assert resp.status_code == 413


def test_create_complaint_requires_category_and_title(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    resp = client.post('/api/complaints', json={'category': 'Plumbing'}, headers=jwt_headers(student))
    assert resp.status_code == 400
    assert resp.get_json()['error']['type'] == 'ValidationError'


def test_admin_cannot_file_complaints(client):
    admin = ensure_admin()
    resp = client.post('/api/complaints', json={'category': 'Plumbing', 'title': 'Leak'}, headers=jwt_headers(admin))
    assert resp.status_code == 403


def test_create_complaint_requires_token(client):
    resp = client.post('/api/complaints', json={'category': 'Plumbing', 'title': 'Leak'})
    assert resp.status_code == 401


def test_user_complaints_newest_first_with_assignee_name(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    tech = ensure_technician('Mike Tech')
    now = datetime(2026, 1, 10, 12, 0, 0)
    old = create_complaint(student, title='Old', created_at=now - timedelta(days=2))
    new = create_complaint(student, title='New', created_at=now, status=Complaint.STATUS_IN_PROGRESS, assigned_to=tech)
    resp = client.get(f'/api/complaints/user/{student.id}', headers=jwt_headers(student))
    assert resp.status_code == 200
    rows = resp.get_json()
    assert [r['id'] for r in rows] == [new.id, old.id]
    assert rows[0]['assignedTo'] == {'id': tech.id, 'name': 'Mike Tech'}
    assert rows[1]['assignedTo'] is None


def test_user_complaints_only_visible_to_owner_or_admin(client):
    owner = ensure_user(ROLE_STUDENT, email='owner@campus.test')
    other = ensure_user(ROLE_STUDENT, email='other@campus.test')
    create_complaint(owner)
    assert client.get(f'/api/complaints/user/{owner.id}', headers=jwt_headers(other)).status_code == 403
    resp = client.get(f'/api/complaints/user/{owner.id}', headers=jwt_headers(ensure_admin()))
    assert resp.status_code == 200
    assert len(resp.get_json()) == 1


def test_list_all_admin_only_with_owner_and_assignee(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test', name='Sam')
    tech = ensure_technician('Sarah Fix')
    create_complaint(student, title='A', created_at=datetime(2026, 1, 1))
    create_complaint(student, title='B', created_at=datetime(2026, 1, 2), status=Complaint.STATUS_IN_PROGRESS, assigned_to=tech)
    assert client.get('/api/complaints', headers=jwt_headers(student)).status_code == 403
    resp = client.get('/api/complaints', headers=jwt_headers(ensure_admin()))
    assert resp.status_code == 200
    rows = resp.get_json()
    assert [r['title'] for r in rows] == ['B', 'A']
    assert rows[0]['userId'] == {'id': student.id, 'name': 'Sam', 'email': 's@campus.test'}
    assert rows[0]['assignedTo'] == {'id': tech.id, 'name': 'Sarah Fix'}


def test_technicians_listing(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    sarah = ensure_technician('Sarah Fix')
    mike = ensure_technician('Mike Tech')
    resp = client.get('/api/technicians', headers=jwt_headers(student))
    assert resp.status_code == 200
    assert resp.get_json() == [{'id': mike.id, 'name': 'Mike Tech'}, {'id': sarah.id, 'name': 'Sarah Fix'}]


def test_create_complaint_rejects_non_string_fields_and_array_body(client):
    student = ensure_user(ROLE_STUDENT, email='s@campus.test')
    resp = client.post('/api/complaints', json={'category': ['Plumbing'], 'title': 'Leak'}, headers=jwt_headers(student))
    assert resp.status_code == 400
    assert resp.get_json()['error']['detail'] == 'category must be a string'
    assert client.post('/api/complaints', json=['Leak'], headers=jwt_headers(student)).status_code == 400
