from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, HiddenField, SubmitField, TextAreaField
from wtforms.validators import DataRequired


class JournalEntryForm(FlaskForm):
    """New journal entry form.

    The checkboxes count as ticked whenever the field is submitted at all,
    whatever its value, so ``false_values`` is empty.
    """

    uid = HiddenField("User")
    date = DateField("Date", validators=[DataRequired()])
    exercise = BooleanField("Exercised", false_values=())
    outdoors = BooleanField("Went outdoors", false_values=())
    entry = TextAreaField("Entry", validators=[DataRequired()])
    submit = SubmitField("Save Entry")
