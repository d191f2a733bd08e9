from __future__ import annotations
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, ForeignKey, DateTime
from .user import Base, User, utcnow, isoformat_utc


class Complaint(Base):
    __tablename__ = 'complaints'
    # Status constants
    STATUS_PENDING = 'Pending'
    STATUS_IN_PROGRESS = 'In Progress'
    STATUS_RESOLVED = 'Resolved'
    ALL_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_RESOLVED)
    OPEN_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_PENDING, index=True)
    assigned_to: Mapped[Optional[int]] = mapped_column(ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)
    repair_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    owner = relationship('User', foreign_keys=[user_id])
    assignee = relationship('User', foreign_keys=[assigned_to])

    def to_json(self, with_owner: bool = False, with_assignee: bool = False):
        """Serialize with the front-end's field names.

        with_owner / with_assignee replace the bare ids with ``{id, name}`` objects
        (plus ``email`` for the owner), mirroring the populated list views.
        """
        body = {
            'id': self.id,
            'userId': self.user_id,
            'category': self.category,
            'title': self.title,
            'description': self.description,
            'imagePath': self.image_path,
            'status': self.status,
            'assignedTo': self.assigned_to,
            'repairNotes': self.repair_notes,
            'createdAt': isoformat_utc(self.created_at),
            'updatedAt': isoformat_utc(self.updated_at),
        }
        if with_owner and self.owner is not None:
            body['userId'] = {'id': self.owner.id, 'name': self.owner.name, 'email': self.owner.email}
        if with_assignee and self.assignee is not None:
            body['assignedTo'] = {'id': self.assignee.id, 'name': self.assignee.name}
        return body

# Status flow: Pending -> In Progress (assignment) -> Resolved.
# Status updates are unrestricted: any status may follow any other.
