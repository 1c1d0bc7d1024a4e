"""Journal entry model."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moodlog.extensions import db
from moodlog.models.base import BaseModel

if TYPE_CHECKING:
    from moodlog.auth.models import User

MIN_RATING = 0
MAX_RATING = 10


class JournalEntry(BaseModel):
    """One dated journal entry written by a user."""

    __tablename__ = "journals"
    __table_args__ = (
        CheckConstraint(f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}", name="ck_journals_rating_range"),
    )

    uid: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Owning user",
    )
    date: Mapped[datetime.date] = mapped_column(db.Date, nullable=False, comment="Day the entry is about")
    exercise: Mapped[bool] = mapped_column(db.Boolean, default=False, nullable=False)
    outdoors: Mapped[bool] = mapped_column(db.Boolean, default=False, nullable=False)
    entry: Mapped[str] = mapped_column(db.Text, nullable=False, comment="Free-text journal body")
    rating: Mapped[int] = mapped_column(db.Integer, nullable=False, comment="Mood rating from 0 to 10")

    user: Mapped["User"] = relationship("User", back_populates="journals")

    def __repr__(self) -> str:
        return f"<JournalEntry(id={self.id}, uid={self.uid}, date={self.date})>"
