"""Message constants for the application."""


class FlashMessages:
    """Container for user-facing message constants."""

    # Authentication messages
    USERNAME_EXISTS = "Username already exists"
    USERNAME_NOT_FOUND = "Username does not exist"
    PASSWORD_INCORRECT = "Password incorrect"  # nosec B105
    CREDENTIALS_REQUIRED = "Username and password are required"
    USERNAME_TOO_LONG = "Username must be at most 64 characters"
    LOGGED_OUT = "You have been logged out."

    # Journal messages
    ENTRY_ADDED = "Journal entry saved."
    ENTRY_INVALID = "A journal entry needs a valid date and some text."

    # Lookup messages
    LOOKUP_UNAVAILABLE = "That lookup is unavailable right now. Please try again later."

    # Error pages
    NOT_FOUND = "This page does not exist"
    NOT_FOUND_DETAIL = "Not all those who wander are lost"
    SERVER_ERROR = "Server Error"
