"""Authentication-related service functions."""

import logging
from typing import Optional, Tuple

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from moodlog.auth.models import User, hash_password
from moodlog.database import execute
from moodlog.extensions import db
from moodlog.utils.messages import FlashMessages

logger = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    """Raised when registering a username that already belongs to an account."""

    def __init__(self, username: str):
        self.username = username
        self.message = FlashMessages.USERNAME_EXISTS
        super().__init__(self.message)


def find_user_by_username(username: str) -> Optional[User]:
    """Return the user with exactly this username, if any."""
    return db.session.scalar(select(User).where(User.username == username))


def register_user(username: str, password: str) -> User:
    """Create a new account.

    The unique constraint on ``users.username`` is what decides a clash; the
    lookup beforehand only saves a failed insert in the common case.

    Raises:
        UsernameTakenError: If the username is already registered
        ValueError: If the password is empty
    """
    if find_user_by_username(username) is not None:
        raise UsernameTakenError(username)

    statement = insert(User.__table__).values(username=username, password_hash=hash_password(password))
    try:
        result = execute(statement)
    except IntegrityError as e:
        logger.info(f"Username '{username}' was registered concurrently: {e.orig}")
        raise UsernameTakenError(username) from e

    user = db.session.get(User, result.inserted_primary_key[0])
    logger.info(f"Registered user {user.id} ({username})")
    return user


def authenticate_user(username: str, password: str) -> Tuple[Optional[User], Optional[str]]:
    """Check a username/password pair.

    Returns:
        The matching user and no message on success, otherwise no user and
        the message to show on the login page
    """
    user = find_user_by_username(username)
    if user is None:
        return None, FlashMessages.USERNAME_NOT_FOUND

    if not user.check_password(password):
        logger.warning(f"Failed login attempt for username: {username}")
        return None, FlashMessages.PASSWORD_INCORRECT

    return user, None
