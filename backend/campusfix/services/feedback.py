from __future__ import annotations
from typing import Optional
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from campusfix import get_db
from campusfix.errors import Conflict, Forbidden, ValidationError
from campusfix.models.complaint import Complaint
from campusfix.models.feedback import Feedback
from campusfix.services.complaints import get_complaint
from campusfix.utils.validation import coerce_int, validate_range


def submit_feedback(complaint_id, user_id: int, rating, comments: Optional[str] = None) -> Feedback:
    """Record the submitter's rating of a resolved complaint (once per complaint)."""
    if complaint_id in (None, ''):
        raise ValidationError(description='complaintId required')
    if rating in (None, ''):
        raise ValidationError(description='rating required')
    rating = validate_range(coerce_int(rating, 'rating'), Feedback.MIN_RATING, Feedback.MAX_RATING, 'rating')
    c = get_complaint(coerce_int(complaint_id, 'complaintId'))
    if c.user_id != user_id:
        raise Forbidden(description='Only the submitter can rate this complaint')
    if c.status != Complaint.STATUS_RESOLVED:
        raise ValidationError(description='Feedback is accepted only for resolved complaints')
    session = get_db()
    if session.execute(select(Feedback).where(Feedback.complaint_id==c.id)).scalar_one_or_none():
        raise Conflict(description='Feedback already submitted for this complaint')
    fb = Feedback(complaint_id=c.id, user_id=user_id, rating=rating, comments=comments or None)
    session.add(fb)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict(description='Feedback already submitted for this complaint')
    current_app.logger.info('Feedback %s (rating %s) recorded for complaint %s', fb.id, rating, c.id)
    return fb
