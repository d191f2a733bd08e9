from __future__ import annotations
from flask import Blueprint, request, jsonify
from campusfix.constants.roles import ROLE_ADMIN, ROLE_TECHNICIAN, SUBMITTER_ROLES
from campusfix.decorators.auth import require_roles
from campusfix.errors import Forbidden
from campusfix.services import complaints as complaint_service
from campusfix.services.policy import current_identity, assert_self_or_admin
from campusfix.utils.uploads import save_image
from campusfix.utils.validation import json_object, require_fields, require_strings

complaints_bp = Blueprint('complaints', __name__)


@complaints_bp.post('')
@require_roles(*SUBMITTER_ROLES)
def create_complaint():
    # multipart/form-data when a photo is attached, plain JSON otherwise
    if request.mimetype == 'multipart/form-data':
        data = request.form
    else:
        data = json_object()
    require_strings(data, 'category', 'title', 'description')
    require_fields(data, 'category', 'title')
    image_path = save_image(request.files.get('image'))
    c = complaint_service.create_complaint(
        current_identity(),
        category=data.get('category'),
        title=data.get('title'),
        description=data.get('description'),
        image_path=image_path,
    )
    return c.to_json(), 201


@complaints_bp.get('/user/<int:user_id>')
@require_roles()
def list_user_complaints(user_id: int):
    assert_self_or_admin(current_identity(), user_id)
    rows = complaint_service.list_for_user(user_id)
    return jsonify([c.to_json(with_assignee=True) for c in rows])


@complaints_bp.get('')
@require_roles(ROLE_ADMIN)
def list_complaints():
    rows = complaint_service.list_all()
    return jsonify([c.to_json(with_owner=True, with_assignee=True) for c in rows])


@complaints_bp.get('/assigned/<int:tech_id>')
@require_roles(ROLE_TECHNICIAN)
def list_assigned(tech_id: int):
    if current_identity().user_id != tech_id:
        raise Forbidden(description='Technicians can only list their own assignments')
    rows = complaint_service.list_assigned_open(tech_id)
    return jsonify([c.to_json(with_owner=True) for c in rows])


@complaints_bp.put('/<int:complaint_id>/assign')
@require_roles(ROLE_ADMIN)
def assign(complaint_id: int):
    data = json_object()
    c = complaint_service.assign_technician(complaint_id, data.get('technicianId'))
    return c.to_json(with_assignee=True)


@complaints_bp.put('/<int:complaint_id>/status')
@require_roles(ROLE_ADMIN, ROLE_TECHNICIAN)
def set_status(complaint_id: int):
    data = json_object()
    require_strings(data, 'repairNotes')
    c = complaint_service.update_status(current_identity(), complaint_id, data.get('status'), data.get('repairNotes'))
    return c.to_json()
