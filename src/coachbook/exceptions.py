"""Scheduling error taxonomy.

Services raise these; the API layer maps each class to an HTTP status via
``status_code`` (see ``coachbook.api.errors``).
"""

from typing import Any


class SchedulingError(Exception):
    """Base class for every failure the scheduling engine reports to a caller."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(SchedulingError):
    """Malformed input: bad time range, unsupported duration, past date."""

    status_code = 422


class AvailabilityError(SchedulingError):
    """Requested time is not covered by any of the coach's slots."""

    status_code = 409


class ConflictError(SchedulingError):
    """Requested time overlaps an existing non-cancelled booking."""

    status_code = 409


class InvalidTransitionError(SchedulingError):
    status_code = 409


class AuthzError(SchedulingError):
    """Role or ownership check failed."""

    status_code = 403


class UnauthenticatedError(SchedulingError):
    status_code = 401


class NotFoundError(SchedulingError):
    status_code = 404


class StorageError(SchedulingError):
    """Underlying persistence failure. Transient; eligible for retry at the HTTP boundary."""

    status_code = 503
