"""Custom exceptions for third-party lookups."""

from typing import Optional


class LookupServiceError(Exception):
    """Raised when an upstream lookup API call fails."""

    def __init__(self, message: str, service: str, status_code: Optional[int] = None):
        self.message = message
        self.service = service
        self.status_code = status_code
        super().__init__(self.message)


class LookupNotConfiguredError(LookupServiceError):
    """Raised when a lookup is attempted without its API credentials."""

    def __init__(self, service: str):
        super().__init__(f"{service} credentials are not configured", service=service)
