from typing import Optional

from shared.utils.app_status_code import AppStatusCode


class LeasingError(Exception):
    """Base class for recoverable leasing failures surfaced to the caller."""

    status_code: str = AppStatusCode.OPERATION_FAILED
    http_status: int = 400

    def __init__(self, message: str, status_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(LeasingError):
    status_code = AppStatusCode.INVALID_INPUT
    http_status = 400


class ResourceNotFoundError(LeasingError):
    status_code = AppStatusCode.NOT_FOUND
    http_status = 404


class ConflictError(LeasingError):
    status_code = AppStatusCode.CONFLICT
    http_status = 409


class DuplicateResourceError(ConflictError):
    status_code = AppStatusCode.DUPLICATE_ADD_ERROR


class CapacityExceededError(ConflictError):
    status_code = AppStatusCode.CAPACITY_EXCEEDED


class InvalidStateTransitionError(ConflictError):
    status_code = AppStatusCode.INVALID_STATE_TRANSITION


class BusinessError(LeasingError):
    """Unexpected failure in a multi-step use case; wraps the original cause."""

    status_code = AppStatusCode.BUSINESS_ERROR
    http_status = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
