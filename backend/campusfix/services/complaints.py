from __future__ import annotations
from typing import List, Optional
from flask import current_app
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from campusfix import get_db
from campusfix.constants.roles import ROLE_TECHNICIAN
from campusfix.errors import Forbidden, NotFound, ValidationError
from campusfix.models.complaint import Complaint
from campusfix.models.user import User, utcnow
from campusfix.services.policy import Identity
from campusfix.utils.validation import coerce_int, validate_status


def get_complaint(complaint_id: int) -> Complaint:
    session = get_db()
    c = session.execute(select(Complaint).where(Complaint.id==complaint_id)).scalar_one_or_none()
    if not c:
        raise NotFound(description='Complaint not found')
    return c


def create_complaint(identity: Identity, category: Optional[str], title: Optional[str],
                     description: Optional[str] = None, image_path: Optional[str] = None) -> Complaint:
    if not category or not title:
        raise ValidationError(description='category, title required')
    session = get_db()
    c = Complaint(
        user_id=identity.user_id,
        category=category,
        title=title,
        description=description,
        image_path=image_path,
        status=Complaint.STATUS_PENDING,
    )
    session.add(c)
    session.commit()
    current_app.logger.info('Complaint %s filed by user %s', c.id, identity.user_id)
    return c


def _technician(technician_id) -> User:
    tech_id = coerce_int(technician_id, 'technicianId')
    session = get_db()
    tech = session.execute(select(User).where(User.id==tech_id)).scalar_one_or_none()
    if not tech or tech.role != ROLE_TECHNICIAN:
        raise ValidationError(description='technicianId must reference a technician')
    return tech


def assign_technician(complaint_id: int, technician_id) -> Complaint:
    """Bind a technician (status In Progress) or clear the binding with None (status Pending)."""
    c = get_complaint(complaint_id)
    if technician_id in (None, ''):
        c.assignee = None
        c.status = Complaint.STATUS_PENDING
    else:
        c.assignee = _technician(technician_id)
        c.status = Complaint.STATUS_IN_PROGRESS
    c.updated_at = utcnow()
    get_db().commit()
    current_app.logger.info('Complaint %s assigned to %s', c.id, c.assigned_to)
    return c


def update_status(identity: Identity, complaint_id: int, status: Optional[str], repair_notes: Optional[str] = None) -> Complaint:
    """Set any status from any status; technicians may only touch complaints assigned to them."""
    c = get_complaint(complaint_id)
    if not identity.is_admin and c.assigned_to != identity.user_id:
        current_app.logger.warning('User %s tried to update complaint %s not assigned to them', identity.user_id, c.id)
        raise Forbidden(description='Complaint not assigned to you')
    c.status = validate_status(status, Complaint.ALL_STATUSES)
    if repair_notes:
        c.repair_notes = repair_notes
    c.updated_at = utcnow()
    get_db().commit()
    current_app.logger.info('Complaint %s moved to %s by user %s', c.id, c.status, identity.user_id)
    return c


def list_for_user(user_id: int) -> List[Complaint]:
    session = get_db()
    q = (
        select(Complaint)
        .where(Complaint.user_id==user_id)
        .options(selectinload(Complaint.assignee))
        .order_by(Complaint.created_at.desc(), Complaint.id.desc())
    )
    return list(session.execute(q).scalars())


def list_all() -> List[Complaint]:
    session = get_db()
    q = (
        select(Complaint)
        .options(selectinload(Complaint.owner), selectinload(Complaint.assignee))
        .order_by(Complaint.created_at.desc(), Complaint.id.desc())
    )
    return list(session.execute(q).scalars())


def list_assigned_open(technician_id: int) -> List[Complaint]:
    session = get_db()
    q = (
        select(Complaint)
        .where(Complaint.assigned_to==technician_id, Complaint.status.in_(Complaint.OPEN_STATUSES))
        .options(selectinload(Complaint.owner))
        .order_by(Complaint.created_at.desc(), Complaint.id.desc())
    )
    return list(session.execute(q).scalars())


def list_technicians() -> List[User]:
    session = get_db()
    return list(session.execute(select(User).where(User.role==ROLE_TECHNICIAN).order_by(User.name.asc(), User.id.asc())).scalars())
