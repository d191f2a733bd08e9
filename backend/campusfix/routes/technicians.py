from flask import Blueprint, jsonify
from campusfix.decorators.auth import require_roles
from campusfix.services.complaints import list_technicians

tech_bp = Blueprint('technicians', __name__)


@tech_bp.get('')
@require_roles()
def technicians():
    return jsonify([{'id': t.id, 'name': t.name} for t in list_technicians()])
