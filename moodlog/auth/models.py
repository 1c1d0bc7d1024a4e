from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from flask_login import UserMixin
from sqlalchemy.orm import Mapped, mapped_column, relationship
from werkzeug.security import check_password_hash, generate_password_hash

from moodlog.extensions import db
from moodlog.models.base import BaseModel

if TYPE_CHECKING:
    from moodlog.journal.models import JournalEntry

USERNAME_MAX_LENGTH = 64


def hash_password(password: str) -> str:
    """Return a salted hash of ``password``.

    Raises:
        ValueError: If password is empty or None
    """
    if not password:
        raise ValueError("Password cannot be empty")

    return generate_password_hash(password, method="pbkdf2:sha256", salt_length=16)


class User(BaseModel, UserMixin):
    """Account that owns journal entries.

    Attributes:
        username: Unique, case-sensitive username
        password_hash: Salted password hash (never store plaintext passwords!)
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        db.String(USERNAME_MAX_LENGTH),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique username",
    )
    password_hash: Mapped[Optional[str]] = mapped_column(db.String(256), nullable=True, comment="Hashed password")

    journals: Mapped[List["JournalEntry"]] = relationship(
        "JournalEntry",
        back_populates="user",
    )

    def check_password(self, password: str) -> bool:
        """Check if the provided password matches the stored hash.

        Returns False if the user has no password set.
        """
        if not password or not self.password_hash:
            return False

        return check_password_hash(self.password_hash, password)

    def get_id(self) -> str:
        """Return the user ID as a string for Flask-Login."""
        return str(self.id)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
