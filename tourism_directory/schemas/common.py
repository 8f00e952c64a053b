"""Result envelopes returned by every directory service operation."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from tourism_directory.errors import DirectoryError, ErrorType

T = TypeVar("T")


class ServiceResult(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None

    @classmethod
    def ok(cls, data: T = None) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: DirectoryError) -> "ServiceResult[T]":
        return cls(success=False, error=exc.message, error_type=exc.error_type)


class SearchResponse(BaseModel, Generic[T]):
    """One page of search results plus paging metadata."""

    success: bool
    data: list[T] = []
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None
    total_count: int = 0
    page: int = 1
    has_more: bool = False

    @classmethod
    def empty(cls, page: int = 1) -> "SearchResponse[T]":
        return cls(success=True, data=[], total_count=0, page=page, has_more=False)

    @classmethod
    def fail(cls, exc: DirectoryError, page: int = 1) -> "SearchResponse[T]":
        return cls(success=False, error=exc.message, error_type=exc.error_type, page=page)


class SyncReport(BaseModel):
    synced: int = 0
    errors: list[str] = []


class CountResponse(BaseModel):
    updated: int = 0
