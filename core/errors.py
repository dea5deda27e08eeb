"""
core/errors.py -- Application error taxonomy.

Every failure a route can report to a client is one of these classes. The
api/ layer registers a single exception handler for AppError that renders
{"error": message} with the class's status_code, so route code only has to
raise.

The message is client-facing. Never put SQL text, stack traces, or anything
derived from an internal exception into it.

Layer rule: core/ is the kernel and imports nothing from the other packages.
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed client input."""

    status_code = 400


class Conflict(AppError):
    """A unique key (e.g. user email) is already taken."""

    status_code = 400


class InvalidCredentials(AppError):
    """Login failed. Deliberately generic: unknown email and wrong password look the same."""

    status_code = 400


class Unauthorized(AppError):
    """Missing, malformed, forged, or expired session token."""

    status_code = 401


class NotFound(AppError):
    status_code = 404


class InternalError(AppError):
    """Store or hashing failure."""

    status_code = 500
