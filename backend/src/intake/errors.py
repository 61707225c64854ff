"""Errors raised by the email-intake pipeline.

Every intake error is terminal for its request and maps to HTTP 400 with the
error message as the response body.
"""


class IntakeError(Exception):
    """Base class for intake failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IntakeValidationError(IntakeError):
    """Webhook payload rejected before any write (sender, type, size)."""
    pass


class DownstreamError(IntakeError):
    """Consultation-creation call failed or returned a non-2xx status."""

    def __init__(self, message: str = "Failed to process consultation", status_code=None):
        super().__init__(message)
        self.status_code = status_code
