from typing import Optional

from pydantic import BaseModel

from tourism_directory.domain import PassionType


class CreateListingRequest(BaseModel):
    keywords: Optional[list[str]] = None


class ListingUpdate(BaseModel):
    """Partial listing update; only fields explicitly sent are written."""

    is_visible: Optional[bool] = None
    is_featured: Optional[bool] = None
    listing_priority: Optional[int] = None
    search_keywords: Optional[list[str]] = None


class PatchListingRequest(BaseModel):
    passion_type: Optional[PassionType] = None
    is_visible: Optional[bool] = None
    search_keywords: Optional[list[str]] = None


class EligibilityResponse(BaseModel):
    user_id: str
    passion_type: PassionType
    complete: bool


class RemovedListingsResponse(BaseModel):
    removed: int
