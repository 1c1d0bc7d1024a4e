from __future__ import annotations

from typing import Optional

from flask import current_app, redirect, render_template, request, session, url_for
from flask_login import current_user, login_user, logout_user

from moodlog.auth import bp, services
from moodlog.auth.models import User

from .forms import LoginForm


def _render_login(form: LoginForm, error_message: Optional[str] = None) -> str:
    return render_template("auth/login.html", form=form, title="Login", error_message=error_message)


def _start_session(user: User):
    """Log the user in and send them to their profile."""
    login_user(user)
    session.permanent = True
    return redirect(url_for("journal.profile", uid=user.id))


@bp.route("/login", methods=["GET", "POST"])
def login():
    """Show the login form or check submitted credentials."""
    if request.method == "GET":
        if current_user.is_authenticated:
            return redirect(url_for("journal.profile", uid=current_user.id))
        return _render_login(LoginForm())

    form = LoginForm()
    if not form.validate_on_submit():
        return _render_login(form, form.first_error())

    user, error_message = services.authenticate_user(form.username.data, form.password.data)
    if user is None:
        return _render_login(form, error_message)

    current_app.logger.info(f"User {user.id} logged in")
    return _start_session(user)


@bp.route("/create", methods=["POST"])
def create():
    """Register a new account and log it in."""
    form = LoginForm()
    if not form.validate_on_submit():
        return _render_login(form, form.first_error())

    try:
        user = services.register_user(form.username.data, form.password.data)
    except services.UsernameTakenError as e:
        return _render_login(form, e.message)

    return _start_session(user)


@bp.route("/logout")
def logout():
    """End the session, if there is one, and return to the login page."""
    if current_user.is_authenticated:
        current_app.logger.info(f"User {current_user.id} logged out")
        logout_user()
    return redirect(url_for("auth.login"))
