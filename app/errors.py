# app/errors.py
"""
Errors raised by the member service.

Each error carries the HTTP status the API reports for it and a message
that is safe to show to the user.
"""


class MemberError(Exception):
    """Base class for member service failures."""

    status_code = 500
    default_message = 'Unexpected error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(MemberError):
    """Required input is missing or malformed (user-correctable)."""

    status_code = 400
    default_message = 'All fields except part-time job and avatar are required'

    def __init__(self, message=None, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class PayloadTooLarge(MemberError):
    """Avatar file is at or above the size limit (user-correctable)."""

    status_code = 400
    default_message = 'Avatar file size must be less than 4MB'


class NotFound(MemberError):
    """No member exists with the requested id."""

    status_code = 404
    default_message = 'Team member not found'


class StorageFailure(MemberError):
    """Record store or blob store failed; the cause is logged, not shown."""

    status_code = 500
    default_message = 'Storage is currently unavailable'
