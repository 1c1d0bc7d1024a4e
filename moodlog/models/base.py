"""Base model class with SQLAlchemy type hints."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, cast

from flask_sqlalchemy.model import DefaultMeta
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ..extensions import db as _db

if TYPE_CHECKING:
    Model = _db.Model
else:
    Model = cast(DefaultMeta, _db.Model)


class BaseModel(Model):  # type: ignore
    """Base model class with common functionality for all models.

    Adds an integer primary key and creation/update timestamps.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        _db.DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        _db.DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="Timestamp when the record was last updated",
    )

