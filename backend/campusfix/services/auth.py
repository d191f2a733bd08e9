"""Registration, login and token validation.

Registration payloads are parsed into one of two request variants before
anything touches the database:

    TechnicianRegistration   name + password; email/department are discarded
    MemberRegistration       student or faculty; name, email, password and
                             department are all mandatory

Admins never come through here; see ``scripts/seed_admin.py``.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from campusfix import get_db
from campusfix.constants.roles import ROLE_ADMIN, ROLE_TECHNICIAN, SELF_REGISTER_ROLES
from campusfix.errors import Conflict, Forbidden, InvalidCredentials, Unauthorized, ValidationError
from campusfix.models.user import User
from campusfix.services.policy import Identity, identity_from_claims
from campusfix.utils.validation import require_strings


@dataclass(frozen=True)
class TechnicianRegistration:
    name: str
    password: str
    role: str = ROLE_TECHNICIAN

    def validate(self):
        if not self.name or not self.password:
            raise ValidationError(description='Name and password required for technician')


@dataclass(frozen=True)
class MemberRegistration:
    name: str
    email: str
    password: str
    role: str
    department: str

    def validate(self):
        if not all([self.name, self.email, self.password, self.department]):
            raise ValidationError(description='All fields required')


Registration = Union[TechnicianRegistration, MemberRegistration]


def parse_registration(data: Dict[str, Any]) -> Registration:
    role = data.get('role')
    require_strings(data, 'role', 'name', 'email', 'password', 'department')
    if role == ROLE_ADMIN:
        raise Forbidden(description='Admin cannot be registered. Use the seed_admin script.')
    if role not in SELF_REGISTER_ROLES:
        raise ValidationError(description=f"role must be one of {', '.join(SELF_REGISTER_ROLES)}")
    if role == ROLE_TECHNICIAN:
        reg = TechnicianRegistration(name=data.get('name'), password=data.get('password'))
    else:
        reg = MemberRegistration(
            name=data.get('name'),
            email=data.get('email'),
            password=data.get('password'),
            role=role,
            department=data.get('department'),
        )
    reg.validate()
    return reg


def issue_token(user: User) -> str:
    return create_access_token(identity=str(user.id), additional_claims={'role': user.role})


def register(data: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    reg = parse_registration(data)
    session = get_db()
    if isinstance(reg, MemberRegistration):
        if session.execute(select(User).where(User.email==reg.email)).scalar_one_or_none():
            raise Conflict(description='Email already exists')
        user = User(name=reg.name, email=reg.email, role=reg.role, department=reg.department, password_hash='')
    else:
        user = User(name=reg.name, role=reg.role, password_hash='')
    user.set_password(reg.password)
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # a concurrent registration took the email between the check and the insert
        session.rollback()
        raise Conflict(description='Email already exists')
    current_app.logger.info('Registered %s user %s', user.role, user.id)
    return issue_token(user), user.to_public()


def _find_login_candidates(session, role: str, email: Optional[str], name: Optional[str]):
    q = select(User).where(User.role==role)
    if role == ROLE_TECHNICIAN:
        # Technicians rarely have an email; their name identifies them
        if email:
            q = q.where(User.email==email)
        elif name:
            q = q.where(User.name==name)
        else:
            raise ValidationError(description='name or email required for technician login')
    else:
        if not email:
            raise ValidationError(description='email & password required')
        q = q.where(User.email==email)
    return session.execute(q.order_by(User.id.asc())).scalars().all()


def login(data: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    require_strings(data, 'role', 'name', 'email', 'password')
    role = data.get('role')
    password = data.get('password')
    if not role or not password:
        raise ValidationError(description='role & password required')
    session = get_db()
    candidates = _find_login_candidates(session, role, data.get('email'), data.get('name'))
    # Technician names are not unique; accept only the record whose own hash matches
    user = next((u for u in candidates if u.verify_password(password)), None)
    if user is None:
        current_app.logger.warning('Failed login for role %s', role)
        raise InvalidCredentials()
    current_app.logger.info('User %s logged in as %s', user.id, user.role)
    return issue_token(user), user.to_public()


def authenticate(token: Optional[str]) -> Identity:
    """Decode a bearer token into an Identity; any defect is Unauthorized."""
    if not token:
        raise Unauthorized(description='No token')
    try:
        decoded = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        raise Unauthorized(description=f'Invalid token: {e}')
    return identity_from_claims(decoded['sub'], decoded)
