from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from tourism_directory.domain import PassionType

# Symbolic field names accepted by set_field_visibility
FIELD_FLAGS = {
    "contact_info": "show_contact_info",
    "pricing": "show_pricing",
    "location": "show_location",
    "reviews": "show_reviews",
}


class PreferencesUpdate(BaseModel):
    """Partial preferences; unset fields keep their stored (or default) value."""

    show_contact_info: Optional[bool] = None
    show_pricing: Optional[bool] = None
    show_location: Optional[bool] = None
    show_reviews: Optional[bool] = None
    custom_bio: Optional[str] = None
    featured_images: Optional[list[str]] = None


class FieldVisibility(BaseModel):
    field: str
    visible: bool


class FieldVisibilityRequest(BaseModel):
    fields: list[FieldVisibility]


class ListingVisibilityRequest(BaseModel):
    visible: bool
    passion_type: Optional[PassionType] = None


class ListingVisibilityResponse(BaseModel):
    user_id: str
    is_visible: bool


class PublicLocation(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None


class PublicContactInfo(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class PublicPricing(BaseModel):
    hourly_rate: Optional[float] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None


class PublicReviews(BaseModel):
    # Review aggregation is not part of this service; both stay 0.
    rating: float = 0
    review_count: int = 0


class PublicProfile(BaseModel):
    """Role profile with each sub-object present only when its preference flag is on."""

    id: str
    user_id: str
    passion_type: PassionType
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[PublicLocation] = None
    contact_info: Optional[PublicContactInfo] = None
    pricing: Optional[PublicPricing] = None
    reviews: Optional[PublicReviews] = None
    is_verified: bool = False
    is_active: bool = True
    last_active: Optional[datetime] = None
    created_at: Optional[datetime] = None
    featured_images: list[str] = []

    # tour_guide
    specialties: list[str] = []
    languages_spoken: list[str] = []
    certifications: list[str] = []
    experience_years: Optional[int] = None

    # hotel_partner
    hotel_type: Optional[str] = None
    amenities: list[str] = []
    room_types: list[str] = []
    images: list[str] = []


class VerificationStatus(BaseModel):
    user_id: str
    passion_type: Optional[PassionType] = None
    is_verified: bool = False


class VerificationUpdate(BaseModel):
    is_verified: bool
    passion_type: Optional[PassionType] = None


class AccountStatus(BaseModel):
    user_id: str
    is_active: bool
    listings_updated: int = 0
    profiles_updated: int = 0
