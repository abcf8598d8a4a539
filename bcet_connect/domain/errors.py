"""Errors raised by the application layer.

Each error carries the HTTP status the API boundary should answer with.
``NotFound`` is used both for missing records and for records owned by a
different user so callers cannot probe for the existence of other people's
data.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for expected application errors."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str = "Internal Server Error") -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(AppError):
    status_code = 400
    code = "invalid_argument"


class Unauthenticated(AppError):
    status_code = 401
    code = "unauthenticated"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"

    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(message)


class NotFound(AppError):
    status_code = 404
    code = "not_found"


class PersistenceFailure(AppError):
    """The durable store rejected or failed an operation."""

    status_code = 500
    code = "persistence_failure"


class DeliveryUnavailable(AppError):
    """The realtime transport cannot deliver right now.

    Never propagated to API callers; the delivery layer logs it and moves on.
    """

    status_code = 503
    code = "delivery_unavailable"

    def __init__(self, message: str = "Realtime delivery is not available") -> None:
        super().__init__(message)


__all__ = [
    "AppError",
    "InvalidArgument",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "PersistenceFailure",
    "DeliveryUnavailable",
]
