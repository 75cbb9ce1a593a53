"""Error taxonomy shared by services and the JSON API."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ReferentialConflict(ApiError):
    """A delete was blocked by records that still depend on the target."""

    status_code = 400


class Unauthorized(ApiError):
    status_code = 401

    def __init__(self, message: str = 'Unauthorized'):
        super().__init__(message)


class Forbidden(ApiError):
    status_code = 403

    def __init__(self, message: str = 'Forbidden'):
        super().__init__(message)


__all__ = [
    'ApiError',
    'ValidationError',
    'NotFoundError',
    'ReferentialConflict',
    'Unauthorized',
    'Forbidden',
]
