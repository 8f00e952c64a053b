"""Registration completeness rules that gate directory listings."""

from typing import Optional

from tourism_directory.core.constants import HOTEL_PARTNER, LISTABLE_PASSION_TYPES, TOUR_GUIDE
from tourism_directory.domain import HotelPartnerRecord, ProviderRecord, TourGuideRecord
from tourism_directory.errors import InvalidPassionTypeError


def _filled(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def validate_passion_type(passion_type: str) -> str:
    if passion_type not in LISTABLE_PASSION_TYPES:
        raise InvalidPassionTypeError(passion_type)
    return passion_type


def guide_is_complete(guide: Optional[TourGuideRecord]) -> bool:
    if guide is None:
        return False
    return (
        _filled(guide.full_name)
        and _filled(guide.phone)
        and guide.experience_years is not None
        and guide.hourly_rate is not None
        and len(guide.specialties) > 0
        and _filled(guide.address)
    )


def hotel_is_complete(hotel: Optional[HotelPartnerRecord]) -> bool:
    if hotel is None:
        return False
    return (
        _filled(hotel.company_name)
        and _filled(hotel.hotel_type)
        and _filled(hotel.address)
        and len(hotel.amenities) > 0
    )


def is_complete(record: Optional[ProviderRecord], passion_type: str) -> bool:
    validate_passion_type(passion_type)
    if passion_type == TOUR_GUIDE:
        return guide_is_complete(record)
    return hotel_is_complete(record)


def listing_keywords(record: ProviderRecord, passion_type: str) -> list[str]:
    """Search keywords stored on a listing; empty values are dropped."""
    if passion_type == HOTEL_PARTNER:
        values = [record.company_name, record.city, record.state, record.hotel_type, *record.amenities]
    else:
        values = [record.full_name, record.city, record.state, *record.specialties]
    return [v for v in values if v]
