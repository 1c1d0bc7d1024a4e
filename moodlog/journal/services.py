"""Journal service functions."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.engine import RowMapping

from moodlog.auth.models import User
from moodlog.database import execute, fetch_all
from moodlog.journal import rating
from moodlog.journal.models import JournalEntry

logger = logging.getLogger(__name__)


@dataclass
class Profile:
    """What the profile page shows for one user."""

    uid: int
    username: str
    journals: Optional[list[RowMapping]]


def create_entry(
    uid: int,
    entry_date: datetime.date,
    exercise: bool,
    outdoors: bool,
    text: str,
) -> int:
    """Rate and store a new journal entry for ``uid``.

    Returns:
        The id of the new entry
    """
    statement = insert(JournalEntry.__table__).values(
        uid=uid,
        date=entry_date,
        exercise=bool(exercise),
        outdoors=bool(outdoors),
        entry=text,
        rating=rating.get_rating(text),
    )
    entry_id = execute(statement).inserted_primary_key[0]
    logger.info(f"User {uid} added journal entry {entry_id} for {entry_date}")
    return entry_id


def get_profile(uid: int) -> Optional[Profile]:
    """Load a user's name and journal entries with a single left join.

    Returns:
        None when no user has this id. A user with no entries gets a profile
        whose ``journals`` is None.
    """
    statement = (
        select(
            User.username,
            JournalEntry.id,
            JournalEntry.uid,
            JournalEntry.date,
            JournalEntry.exercise,
            JournalEntry.outdoors,
            JournalEntry.entry,
            JournalEntry.rating,
        )
        .select_from(User)
        .outerjoin(JournalEntry, User.id == JournalEntry.uid)
        .where(User.id == uid)
        .order_by(JournalEntry.date, JournalEntry.id)
    )
    rows = fetch_all(statement)
    if not rows:
        return None

    first = rows[0]
    return Profile(
        uid=uid,
        username=first["username"],
        journals=None if first["id"] is None else rows,
    )
