from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from tourism_directory.domain import UserRole


class _RegistrationBase(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None


class TouristRegistration(_RegistrationBase):
    travel_preferences: list[str] = []
    preferred_language: Optional[str] = "en"


class _ProviderRegistration(_RegistrationBase):
    company_name: Optional[str] = None
    website: Optional[str] = None
    license_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


class TourGuideRegistration(_ProviderRegistration):
    specialties: list[str] = []
    languages_spoken: list[str] = ["en"]
    certifications: list[str] = []
    experience_years: Optional[int] = None
    hourly_rate: Optional[float] = None


class HotelPartnerRegistration(_ProviderRegistration):
    hotel_type: Optional[str] = None
    amenities: list[str] = []
    room_types: list[str] = []
    images: list[str] = []
    price_min: Optional[float] = None
    price_max: Optional[float] = None


class RegistrationStatus(BaseModel):
    role: UserRole
    status: Literal["pending", "completed"]
    registered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegistrationOutcome(BaseModel):
    role: UserRole
    message: str = "Registration submitted successfully!"
    listed: bool = False
