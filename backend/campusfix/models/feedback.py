from __future__ import annotations
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, Text, ForeignKey, DateTime, UniqueConstraint, CheckConstraint
from .user import Base, utcnow, isoformat_utc


class Feedback(Base):
    __tablename__ = 'feedback'
    MIN_RATING = 1
    MAX_RATING = 5
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    complaint_id: Mapped[int] = mapped_column(ForeignKey('complaints.id', ondelete='CASCADE'), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint('complaint_id', name='uq_feedback_complaint'),
        CheckConstraint('rating BETWEEN 1 AND 5', name='ck_feedback_rating'),
    )

    def to_json(self):
        return {
            'id': self.id,
            'complaintId': self.complaint_id,
            'userId': self.user_id,
            'rating': self.rating,
            'comments': self.comments,
            'createdAt': isoformat_utc(self.created_at),
        }
