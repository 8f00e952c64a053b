from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tourism_directory.core.config import get_settings

SortOption = Literal[
    "rating",
    "distance",
    "price-low",
    "price-high",
    "newest",
    "experience",
    "popularity",
]


class Coordinates(BaseModel):
    lat: float
    lng: float


class LocationFilter(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    radius: Optional[float] = None  # km; distances are supplied by the caller
    coordinates: Optional[Coordinates] = None


class PriceRange(BaseModel):
    min: float = 0
    max: float

    @model_validator(mode="after")
    def _validate_bounds(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError("price_range.min must be <= price_range.max")
        return self


class SearchFilters(BaseModel):
    min_rating: Optional[float] = None
    max_distance: Optional[float] = None
    is_verified: Optional[bool] = None

    # tour_guide
    languages: list[str] = []
    specialties: list[str] = []
    max_hourly_rate: Optional[float] = None
    min_experience: Optional[int] = None

    # hotel_partner
    hotel_types: list[str] = []
    amenities: list[str] = []
    price_range: Optional[PriceRange] = None


def _default_limit() -> int:
    return get_settings().default_page_size


class Pagination(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(default_factory=_default_limit, ge=1)

    @field_validator("limit")
    @classmethod
    def _cap_limit(cls, v: int) -> int:
        cap = get_settings().max_page_size
        if v > cap:
            raise ValueError(f"limit must be <= {cap}")
        return v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SearchQuery(BaseModel):
    text: Optional[str] = None
    location: Optional[LocationFilter] = None
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort: Optional[SortOption] = None
    pagination: Pagination = Field(default_factory=Pagination)


class SearchRequest(SearchQuery):
    """HTTP body: the query plus caller-computed distances (km) keyed by user id."""

    distances: dict[str, float] = {}


class PriceRangeOut(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class _SearchResult(BaseModel):
    id: str
    user_id: str
    name: Optional[str] = None
    company_name: Optional[str] = None
    bio: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    is_verified: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    # Stubbed until review aggregation exists; None when the owner hides reviews.
    rating: Optional[float] = 0
    review_count: Optional[int] = 0
    relevance_score: int = 0
    distance: Optional[float] = None
    featured_images: list[str] = []


class GuideSearchResult(_SearchResult):
    specialties: list[str] = []
    languages_spoken: list[str] = []
    certifications: list[str] = []
    experience_years: Optional[int] = None
    hourly_rate: Optional[float] = None


class HotelSearchResult(_SearchResult):
    hotel_type: Optional[str] = None
    amenities: list[str] = []
    room_types: list[str] = []
    images: list[str] = []
    price_range: Optional[PriceRangeOut] = None


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class PopularSearchesResponse(BaseModel):
    searches: list[str]
