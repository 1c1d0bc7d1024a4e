from flask_wtf import FlaskForm
from wtforms import PasswordField, StringField, SubmitField
from wtforms.validators import DataRequired, Length

from moodlog.auth.models import USERNAME_MAX_LENGTH
from moodlog.utils.messages import FlashMessages


class LoginForm(FlaskForm):
    """Credentials form shared by the login and create-account actions."""

    username = StringField(
        "Username",
        validators=[
            DataRequired(message=FlashMessages.CREDENTIALS_REQUIRED),
            Length(max=USERNAME_MAX_LENGTH, message=FlashMessages.USERNAME_TOO_LONG),
        ],
    )
    password = PasswordField("Password", validators=[DataRequired(message=FlashMessages.CREDENTIALS_REQUIRED)])
    submit = SubmitField("Sign In")

    def first_error(self) -> str:
        """Return the message to show for a form that failed validation."""
        for errors in self.errors.values():
            if errors:
                return errors[0]
        return FlashMessages.CREDENTIALS_REQUIRED
