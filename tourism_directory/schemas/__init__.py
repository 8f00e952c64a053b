"""Pydantic request/response schemas."""

from tourism_directory.schemas.common import ServiceResult, SearchResponse, SyncReport, CountResponse
from tourism_directory.schemas.directory import (
    CreateListingRequest,
    ListingUpdate,
    PatchListingRequest,
    EligibilityResponse,
    RemovedListingsResponse,
)
from tourism_directory.schemas.visibility import (
    FIELD_FLAGS,
    PreferencesUpdate,
    FieldVisibility,
    FieldVisibilityRequest,
    ListingVisibilityRequest,
    ListingVisibilityResponse,
    PublicLocation,
    PublicContactInfo,
    PublicPricing,
    PublicReviews,
    PublicProfile,
    VerificationStatus,
    VerificationUpdate,
    AccountStatus,
)
from tourism_directory.schemas.search import (
    SortOption,
    Coordinates,
    LocationFilter,
    PriceRange,
    SearchFilters,
    Pagination,
    SearchQuery,
    SearchRequest,
    PriceRangeOut,
    GuideSearchResult,
    HotelSearchResult,
    SuggestionsResponse,
    PopularSearchesResponse,
)
from tourism_directory.schemas.registration import (
    TouristRegistration,
    TourGuideRegistration,
    HotelPartnerRegistration,
    RegistrationStatus,
    RegistrationOutcome,
)

__all__ = [
    "ServiceResult",
    "SearchResponse",
    "SyncReport",
    "CountResponse",
    "CreateListingRequest",
    "ListingUpdate",
    "PatchListingRequest",
    "EligibilityResponse",
    "RemovedListingsResponse",
    "FIELD_FLAGS",
    "PreferencesUpdate",
    "FieldVisibility",
    "FieldVisibilityRequest",
    "ListingVisibilityRequest",
    "ListingVisibilityResponse",
    "PublicLocation",
    "PublicContactInfo",
    "PublicPricing",
    "PublicReviews",
    "PublicProfile",
    "VerificationStatus",
    "VerificationUpdate",
    "AccountStatus",
    "SortOption",
    "Coordinates",
    "LocationFilter",
    "PriceRange",
    "SearchFilters",
    "Pagination",
    "SearchQuery",
    "SearchRequest",
    "PriceRangeOut",
    "GuideSearchResult",
    "HotelSearchResult",
    "SuggestionsResponse",
    "PopularSearchesResponse",
    "TouristRegistration",
    "TourGuideRegistration",
    "HotelPartnerRegistration",
    "RegistrationStatus",
    "RegistrationOutcome",
]
