"""
core/errors.py -- Error taxonomy shared by every layer.

Stores, services and usecases raise these; api/main.py maps each code to an
HTTP status. Anything that is not a HomeroomError (SQLAlchemyError, bugs) is
an opaque failure and is reported as a generic 500.

Layer rule: core/ is the kernel. No imports from api/, auth/, tasks/, or
timetables/.
"""

from __future__ import annotations


class HomeroomError(Exception):
    """Base class for errors that carry a stable, client-visible code."""

    code: str = "internal_error"
    message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidToken(HomeroomError):
    code = "invalid_token"
    message = "Invalid token."


class InvalidID(HomeroomError):
    code = "invalid_id"
    message = "Invalid ID."


class IDIsNotZero(HomeroomError):
    code = "id_is_not_zero"
    message = "ID must not be zero."


class TimetablesNotFound(HomeroomError):
    code = "timetables_not_found"
    message = "Timetables not found."


class InvalidUsername(HomeroomError):
    code = "invalid_username"
    message = "Invalid username."
