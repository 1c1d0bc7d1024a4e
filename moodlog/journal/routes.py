"""Journal blueprint routes."""

from datetime import date

from flask import abort, current_app, flash, redirect, render_template, url_for
from flask_login import current_user, login_required

from moodlog.utils.messages import FlashMessages

from . import bp, services
from .forms import JournalEntryForm


@bp.route("/profile/<int:uid>")
@login_required
def profile(uid: int):
    """Show a user's journal.

    Only the logged-in user's own profile exists from their point of view;
    any other id is answered with 404.
    """
    if uid != current_user.id:
        abort(404)

    user_profile = services.get_profile(uid)
    if user_profile is None:
        abort(404)

    form = JournalEntryForm(uid=uid, date=date.today())
    return render_template(
        "journal/profile.html",
        title=f"{user_profile.username}'s Journal",
        journals=user_profile.journals,
        uid=user_profile.uid,
        username=user_profile.username,
        form=form,
    )


@bp.route("/new", methods=["POST"])
@login_required
def new_entry():
    """Save a journal entry for the logged-in user."""
    form = JournalEntryForm()

    if form.uid.data and form.uid.data != str(current_user.id):
        current_app.logger.warning(f"User {current_user.id} tried to write to journal of user {form.uid.data}")
        abort(403)

    if not form.validate_on_submit():
        flash(FlashMessages.ENTRY_INVALID, "error")
        return redirect(url_for("journal.profile", uid=current_user.id))

    services.create_entry(
        uid=current_user.id,
        entry_date=form.date.data,
        exercise=form.exercise.data,
        outdoors=form.outdoors.data,
        text=form.entry.data,
    )
    flash(FlashMessages.ENTRY_ADDED, "success")
    return redirect(url_for("journal.profile", uid=current_user.id))
