from flask import Blueprint
from campusfix.decorators.auth import require_roles
from campusfix.services.feedback import submit_feedback
from campusfix.services.policy import current_identity
from campusfix.utils.validation import json_object, require_strings

feedback_bp = Blueprint('feedback', __name__)


@feedback_bp.post('')
@require_roles()
def create_feedback():
    data = json_object()
    require_strings(data, 'comments')
    fb = submit_feedback(data.get('complaintId'), current_identity().user_id, data.get('rating'), data.get('comments'))
    return fb.to_json(), 201
