"""Domain errors mapped to HTTP statuses by the app error handler."""

from __future__ import annotations


class DiaryError(Exception):
    """Base error for expected failures in the diary services."""

    status_code = 400


class InvalidInputError(DiaryError, ValueError):
    status_code = 400


class NotFoundError(DiaryError, LookupError):
    status_code = 404


class ConflictError(DiaryError, ValueError):
    status_code = 409
