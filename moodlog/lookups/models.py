"""Stored geocoding results."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Mapped, mapped_column

from moodlog.extensions import db
from moodlog.models.base import BaseModel


class Location(BaseModel):
    """A geocoded place, kept so repeat searches skip the upstream API."""

    __tablename__ = "locations"

    search_query: Mapped[str] = mapped_column(
        db.String(255), nullable=False, index=True, comment="Normalized text that was searched for"
    )
    formatted_query: Mapped[str] = mapped_column(db.String(255), nullable=False, comment="Formatted address")
    latitude: Mapped[float] = mapped_column(db.Float, nullable=False)
    longitude: Mapped[float] = mapped_column(db.Float, nullable=False)
    short_name: Mapped[Optional[str]] = mapped_column(db.String(128), nullable=True)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, formatted_query='{self.formatted_query}')>"
