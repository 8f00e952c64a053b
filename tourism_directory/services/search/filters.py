"""Query-to-criteria translation and the result-level filters the store cannot apply."""

from typing import TypeVar

from tourism_directory.schemas.search import SearchFilters, SearchQuery
from tourism_directory.store.criteria import GuideCriteria, HotelCriteria

R = TypeVar("R")


def _location(query: SearchQuery) -> tuple:
    loc = query.location
    if loc is None:
        return None, None
    return loc.city or None, loc.state or None


def guide_criteria(query: SearchQuery, user_ids: list[str]) -> GuideCriteria:
    f = query.filters
    city, state = _location(query)
    return GuideCriteria(
        user_ids=tuple(user_ids),
        text=query.text,
        city=city,
        state=state,
        specialties=tuple(f.specialties),
        languages=tuple(f.languages),
        max_hourly_rate=f.max_hourly_rate,
        min_experience=f.min_experience,
        is_verified=f.is_verified,
    )


def hotel_criteria(query: SearchQuery, user_ids: list[str]) -> HotelCriteria:
    f = query.filters
    city, state = _location(query)
    return HotelCriteria(
        user_ids=tuple(user_ids),
        text=query.text,
        city=city,
        state=state,
        hotel_types=tuple(f.hotel_types),
        amenities=tuple(f.amenities),
        is_verified=f.is_verified,
        price_min=f.price_range.min if f.price_range else None,
        price_max=f.price_range.max if f.price_range else None,
    )


def apply_filters(results: list[R], filters: SearchFilters) -> list[R]:
    """Filter scored results on rating and caller-supplied distance.

    Results without a distance pass the distance filter.
    """
    out = []
    for r in results:
        if filters.min_rating is not None and (r.rating or 0) < filters.min_rating:
            continue
        if (
            filters.max_distance is not None
            and r.distance is not None
            and r.distance > filters.max_distance
        ):
            continue
        out.append(r)
    return out
