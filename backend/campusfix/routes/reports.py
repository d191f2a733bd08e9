from flask import Blueprint
from campusfix.constants.roles import ROLE_ADMIN
from campusfix.decorators.auth import require_roles
from campusfix.services.reports import build_report

reports_bp = Blueprint('reports', __name__)


@reports_bp.get('')
@require_roles(ROLE_ADMIN)
def report():
    return build_report()
