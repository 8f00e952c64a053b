"""Validated record types for rows crossing the record-store boundary.

Both store implementations return these models; services never touch ORM
objects or raw dicts. Numeric columns come back as Decimal from Postgres and
are coerced to float here.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

PassionType = Literal["tour_guide", "hotel_partner"]
UserRole = Literal["tourist", "tour_guide", "hotel_partner"]


def _list_or_empty(v):
    if v is None:
        return []
    return list(v)


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProfileRecord(_Record):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    user_role: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TouristRecord(_Record):
    id: str
    user_id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    travel_preferences: list[str] = []
    preferred_language: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("travel_preferences", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return _list_or_empty(v)


class _ProviderRecord(_Record):
    """Columns shared by the two listable role tables."""
    id: str
    user_id: str
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    bio: Optional[str] = None
    license_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    is_active: Optional[bool] = True
    last_active: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TourGuideRecord(_ProviderRecord):
    specialties: list[str] = []
    languages_spoken: list[str] = []
    certifications: list[str] = []
    experience_years: Optional[int] = None
    hourly_rate: Optional[float] = None
    verified: bool = False

    @field_validator("specialties", "languages_spoken", "certifications", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return _list_or_empty(v)

    @property
    def is_verified(self) -> bool:
        return bool(self.verified)


class HotelPartnerRecord(_ProviderRecord):
    hotel_type: Optional[str] = None
    amenities: list[str] = []
    room_types: list[str] = []
    images: list[str] = []
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    is_verified: bool = False

    @field_validator("amenities", "room_types", "images", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return _list_or_empty(v)


class UserPassionRecord(_Record):
    id: str
    user_id: str
    passion: str
    created_at: Optional[datetime] = None


class DirectoryListingRecord(_Record):
    id: str
    user_id: str
    passion_type: PassionType
    is_visible: bool = True
    is_featured: bool = False
    listing_priority: int = 0
    search_keywords: list[str] = []
    last_updated: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("search_keywords", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return _list_or_empty(v)


class VisibilityPreferencesRecord(_Record):
    """Stored preferences. ``id`` is empty for read-time defaults that were never saved."""
    id: str = ""
    user_id: str
    show_contact_info: bool = True
    show_pricing: bool = True
    show_location: bool = True
    show_reviews: bool = True
    custom_bio: Optional[str] = None
    featured_images: list[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("featured_images", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return _list_or_empty(v)


ProviderRecord = TourGuideRecord | HotelPartnerRecord
