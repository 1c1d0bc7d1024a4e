"""Tests for user and database CLI commands."""

import datetime

from sqlalchemy import select

from moodlog.auth.models import User
from moodlog.extensions import db
from moodlog.journal.models import JournalEntry


class TestUserCLI:
    """Test the ``flask user`` command group."""

    def test_create_user(self, runner, app):
        result = runner.invoke(args=["user", "create", "--username", "bob", "--password", "pw"])

        assert result.exit_code == 0
        assert "Created user bob with ID 1" in result.output
        with app.app_context():
            user = db.session.scalar(select(User).filter_by(username="bob"))
            assert user.check_password("pw")

    def test_create_existing_user(self, runner, test_user):
        result = runner.invoke(args=["user", "create", "--username", test_user.username, "--password", "pw"])

        assert result.exit_code == 0
        assert "Error: Username already exists" in result.output

    def test_list_users_empty(self, runner):
        result = runner.invoke(args=["user", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output

    def test_list_users_with_entry_counts(self, runner, app, test_user, test_user2):
        with app.app_context():
            db.session.add(
                JournalEntry(
                    uid=test_user.id,
                    date=datetime.date(2019, 1, 1),
                    exercise=False,
                    outdoors=True,
                    entry="Lake day.",
                    rating=3,
                )
            )
            db.session.commit()

        result = runner.invoke(args=["user", "list", "--entries"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["ID", "Username", "Entries"]
        assert lines[2].split() == [str(test_user.id), test_user.username, "1"]
        assert lines[3].split() == [str(test_user2.id), test_user2.username, "0"]


class TestDatabaseCLI:
    """Test database maintenance commands."""

    def test_init_db(self, runner):
        result = runner.invoke(args=["init-db"])

        assert result.exit_code == 0
        assert "Initialized the database." in result.output

    def test_drop_db_requires_confirmation(self, runner, test_user, app):
        result = runner.invoke(args=["drop-db"], input="n\n")

        assert result.exit_code != 0
        with app.app_context():
            assert db.session.get(User, test_user.id) is not None
