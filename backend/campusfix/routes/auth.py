from flask import Blueprint
from campusfix.services import auth as auth_service
from campusfix.utils.validation import json_object

auth_bp = Blueprint('auth', __name__)


@auth_bp.post('/register')
def register():
    data = json_object()
    token, user = auth_service.register(data)
    return {'token': token, 'user': user}, 201


@auth_bp.post('/login')
def login():
    data = json_object()
    token, user = auth_service.login(data)
    return {'token': token, 'user': user}
