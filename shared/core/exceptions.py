"""
Typed errors raised by the housekeeping core.

Each error carries the HTTP status and application status code used when the
exception handlers render it as a ``JsonOutResult`` envelope.
"""
from fastapi import status

from shared.utils.app_status_code import AppStatusCode


class HousekeepingError(Exception):
    http_status = status.HTTP_400_BAD_REQUEST
    status_code = AppStatusCode.OPERATION_FAILED
    retryable = False

    def __init__(self, message: str, status_code: str = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(HousekeepingError):
    """Referenced hotel, room or task does not exist."""
    http_status = status.HTTP_404_NOT_FOUND


class ValidationError(HousekeepingError):
    """Malformed input such as a bad date or an unknown shift/status."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    status_code = AppStatusCode.INVALID_INPUT


class ForbiddenError(HousekeepingError):
    http_status = status.HTTP_403_FORBIDDEN
    status_code = AppStatusCode.UNAUTHORIZED_ACTION


class InvalidTransitionError(HousekeepingError):
    http_status = status.HTTP_409_CONFLICT
    status_code = AppStatusCode.INVALID_STATUS_TRANSITION


class ConflictError(HousekeepingError):
    """A concurrent write won the race; refresh and retry if still wanted."""
    http_status = status.HTTP_409_CONFLICT
    status_code = AppStatusCode.STALE_TASK_STATE
    retryable = True
