"""Structured profile filters shared by both record-store implementations.

``SqlRecordStore`` translates a criteria object to SQL; ``InMemoryRecordStore``
evaluates it with the predicates below. Every populated field is an AND-ed
condition; text matching is OR-ed across the searchable fields.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from tourism_directory.domain import HotelPartnerRecord, TourGuideRecord


@dataclass(frozen=True)
class GuideCriteria:
    user_ids: Optional[tuple[str, ...]] = None
    text: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    specialties: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    max_hourly_rate: Optional[float] = None
    min_experience: Optional[int] = None
    is_verified: Optional[bool] = None


@dataclass(frozen=True)
class HotelCriteria:
    user_ids: Optional[tuple[str, ...]] = None
    text: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    hotel_types: tuple[str, ...] = ()
    amenities: tuple[str, ...] = ()
    is_verified: Optional[bool] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None


def normalize_text(value: Optional[str]) -> Optional[str]:
    """Lowercased, trimmed search text; None when blank."""
    if value is None:
        return None
    t = value.strip().lower()
    return t or None


def contains_ci(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Case-insensitive substring test; missing haystack never matches."""
    if not haystack or not needle:
        return False
    return needle.strip().lower() in haystack.lower()


def any_contains_ci(values: Iterable[str], needle: Optional[str]) -> bool:
    return any(contains_ci(v, needle) for v in values or [])


def overlaps(candidate: Iterable[str], wanted: Iterable[str]) -> bool:
    """Array overlap (Postgres ``&&``): exact element equality."""
    wanted_set = set(wanted)
    return any(v in wanted_set for v in candidate or [])


def guide_text_fields(guide: TourGuideRecord) -> list[Optional[str]]:
    return [guide.full_name, guide.company_name, guide.bio, *guide.specialties]


def hotel_text_fields(hotel: HotelPartnerRecord) -> list[Optional[str]]:
    return [hotel.company_name, hotel.bio, hotel.hotel_type, *hotel.amenities]


def guide_matches(guide: TourGuideRecord, c: GuideCriteria) -> bool:
    if c.user_ids is not None and guide.user_id not in c.user_ids:
        return False
    text = normalize_text(c.text)
    if text and not any(contains_ci(f, text) for f in guide_text_fields(guide)):
        return False
    if c.city and not contains_ci(guide.city, c.city):
        return False
    if c.state and not contains_ci(guide.state, c.state):
        return False
    if c.specialties and not overlaps(guide.specialties, c.specialties):
        return False
    if c.languages and not overlaps(guide.languages_spoken, c.languages):
        return False
    if c.max_hourly_rate is not None:
        if guide.hourly_rate is None or guide.hourly_rate > c.max_hourly_rate:
            return False
    if c.min_experience is not None:
        if guide.experience_years is None or guide.experience_years < c.min_experience:
            return False
    if c.is_verified is not None and guide.is_verified != c.is_verified:
        return False
    return True


def hotel_matches(hotel: HotelPartnerRecord, c: HotelCriteria) -> bool:
    if c.user_ids is not None and hotel.user_id not in c.user_ids:
        return False
    text = normalize_text(c.text)
    if text and not any(contains_ci(f, text) for f in hotel_text_fields(hotel)):
        return False
    if c.city and not contains_ci(hotel.city, c.city):
        return False
    if c.state and not contains_ci(hotel.state, c.state):
        return False
    if c.hotel_types and hotel.hotel_type not in c.hotel_types:
        return False
    if c.amenities and not overlaps(hotel.amenities, c.amenities):
        return False
    if c.is_verified is not None and hotel.is_verified != c.is_verified:
        return False
    if c.price_min is not None:
        if hotel.price_min is None or hotel.price_min < c.price_min:
            return False
    if c.price_max is not None:
        if hotel.price_max is None or hotel.price_max > c.price_max:
            return False
    return True


def guide_suggestion_values(guide: TourGuideRecord) -> list[Optional[str]]:
    """Fields offered as autocomplete values, in display order."""
    return [guide.full_name, guide.company_name, guide.city, guide.state, *guide.specialties]


def hotel_suggestion_values(hotel: HotelPartnerRecord) -> list[Optional[str]]:
    return [hotel.company_name, hotel.city, hotel.state, hotel.hotel_type, *hotel.amenities]
