"""Mapping of failed service results to HTTP errors."""

from fastapi import HTTPException, status

from tourism_directory.errors import ErrorType

_STATUS_BY_ERROR = {
    ErrorType.INCOMPLETE_REGISTRATION: status.HTTP_400_BAD_REQUEST,
    ErrorType.INVALID_PASSION_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.STORE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def raise_for_failure(result) -> None:
    if result.success:
        return
    code = _STATUS_BY_ERROR.get(result.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=code, detail=result.error or "Directory operation failed")


def unwrap(result):
    """Data of a successful ServiceResult; HTTPException otherwise."""
    raise_for_failure(result)
    return result.data
