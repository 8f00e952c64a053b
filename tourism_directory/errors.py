"""Error types raised inside the directory core.

Services convert these to failed results at their public boundary, so callers
only ever see ``ServiceResult(success=False, error=..., error_type=...)``.
"""

from enum import Enum
from typing import Optional

from tourism_directory.core.constants import INCOMPLETE_REGISTRATION_MESSAGE


class ErrorType(str, Enum):
    """Failure categories reported in ``ServiceResult.error_type``."""
    INCOMPLETE_REGISTRATION = "incomplete_registration"
    INVALID_PASSION_TYPE = "invalid_passion_type"
    STORE_ERROR = "store_error"
    NOT_FOUND = "not_found"


class DirectoryError(Exception):
    """Base for failures the core reports as results."""
    error_type: ErrorType = ErrorType.STORE_ERROR

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class StoreError(DirectoryError):
    """Any record-store failure; carries the store's raw message."""
    error_type = ErrorType.STORE_ERROR


class IncompleteRegistrationError(DirectoryError):
    error_type = ErrorType.INCOMPLETE_REGISTRATION

    def __init__(self, message: str = INCOMPLETE_REGISTRATION_MESSAGE):
        super().__init__(message)


class InvalidPassionTypeError(DirectoryError):
    error_type = ErrorType.INVALID_PASSION_TYPE

    def __init__(self, passion_type: str):
        self.passion_type = passion_type
        super().__init__(f"Invalid passion type: {passion_type}")


class NotFoundError(DirectoryError):
    error_type = ErrorType.NOT_FOUND
