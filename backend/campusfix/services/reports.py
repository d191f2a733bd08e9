from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from sqlalchemy import func, select
from campusfix import get_db
from campusfix.models.complaint import Complaint


def _naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _count(session, *criteria) -> int:
    q = select(func.count(Complaint.id))
    if criteria:
        q = q.where(*criteria)
    return int(session.execute(q).scalar_one())


def average_resolution_millis(session) -> float:
    """Mean of updated_at - created_at over Resolved complaints, in milliseconds (0 when none).

    Computed in Python; date subtraction is not portable across SQLite and Postgres.
    """
    rows = session.execute(
        select(Complaint.created_at, Complaint.updated_at)
        .where(Complaint.status==Complaint.STATUS_RESOLVED, Complaint.updated_at.is_not(None))
    ).all()
    if not rows:
        return 0
    total = sum(
        (_naive_utc(updated) - _naive_utc(created)) / timedelta(milliseconds=1)
        for created, updated in rows
    )
    return total / len(rows)


def build_report() -> Dict[str, Any]:
    session = get_db()
    per_category = session.execute(
        select(Complaint.category, func.count(Complaint.id))
        .group_by(Complaint.category)
    ).all()
    # None sorts first so uncategorised rows come out at a stable position
    per_category = sorted(per_category, key=lambda row: (row[0] is not None, row[0] or ''))
    return {
        'total': _count(session),
        'pending': _count(session, Complaint.status==Complaint.STATUS_PENDING),
        'inProgress': _count(session, Complaint.status==Complaint.STATUS_IN_PROGRESS),
        'resolved': _count(session, Complaint.status==Complaint.STATUS_RESOLVED),
        'perCategoryCounts': [{'category': cat, 'count': int(n)} for cat, n in per_category],
        'avgResolutionMillis': average_resolution_millis(session),
    }
