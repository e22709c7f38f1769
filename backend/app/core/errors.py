from __future__ import annotations

from enum import Enum


class ErrorType(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFLICT: 409,
    ErrorType.INTERNAL_ERROR: 500,
}


class AppException(Exception):
    """Exception that services raise for expected failures."""

    def __init__(self, error_type: ErrorType, message: str) -> None:
        self.error_type = error_type
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_MAP.get(self.error_type, 500)


def not_found(message: str) -> AppException:
    return AppException(ErrorType.NOT_FOUND, message)


def conflict(message: str) -> AppException:
    return AppException(ErrorType.CONFLICT, message)


