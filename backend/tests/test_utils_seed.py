"""Test seeding utilities to reduce duplication.

Rows are inserted straight through the ORM so tests can set up any lifecycle
state (including back-dated timestamps) without going through the API.
"""
from datetime import datetime
from typing import Optional
from flask_jwt_extended import create_access_token
from campusfix import get_db
from campusfix.constants.roles import ROLE_ADMIN, ROLE_STUDENT, ROLE_TECHNICIAN
from campusfix.models.complaint import Complaint
from campusfix.models.user import User


def ensure_user(role: str = ROLE_STUDENT, email: Optional[str] = None, name: Optional[str] = None,
                password: str = 'pw', department: Optional[str] = 'Engineering') -> User:
    session = get_db()
    if email:
        u = session.query(User).filter_by(email=email).one_or_none()
        if u:
            return u
    u = User(name=name or (email.split('@')[0] if email else role.title()), email=email, role=role,
             department=None if role == ROLE_TECHNICIAN else department, password_hash='')
    u.set_password(password)
    session.add(u); session.commit(); session.refresh(u)
    return u


def ensure_admin(email: str = 'admin@campus.test') -> User:
    return ensure_user(ROLE_ADMIN, email=email, name='Facility Manager', department='Facility')


def ensure_technician(name: str = 'Mike Tech', password: str = 'tech-pw') -> User:
    return ensure_user(ROLE_TECHNICIAN, name=name, password=password)


def jwt_headers(user: User):
    token = create_access_token(identity=str(user.id), additional_claims={'role': user.role})
    return {'Authorization': f'Bearer {token}'}


def create_complaint(owner: User, category: str = 'Plumbing', title: str = 'Leak', status: str = Complaint.STATUS_PENDING,
                     assigned_to: Optional[User] = None, created_at: Optional[datetime] = None,
                     updated_at: Optional[datetime] = None) -> Complaint:
    """Create a Complaint (non-idempotent). Returns the Complaint."""
    session = get_db()
    c = Complaint(user_id=owner.id, category=category, title=title, description=f'{title} report', status=status,
                  assigned_to=assigned_to.id if assigned_to else None, updated_at=updated_at)
    if created_at is not None:
        c.created_at = created_at
    session.add(c); session.commit(); session.refresh(c)
    return c


__all__ = ['ensure_user', 'ensure_admin', 'ensure_technician', 'jwt_headers', 'create_complaint']
