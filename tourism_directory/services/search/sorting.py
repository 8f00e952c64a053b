"""Result ordering; relevance score breaks every tie, descending."""

import math
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from tourism_directory.schemas.search import HotelSearchResult
from tourism_directory.utils import as_aware

R = TypeVar("R")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _low_price(r) -> float:
    if isinstance(r, HotelSearchResult):
        v = r.price_range.min if r.price_range else None
    else:
        v = r.hourly_rate
    return math.inf if v is None else v


def _high_price(r) -> float:
    if isinstance(r, HotelSearchResult):
        v = r.price_range.max if r.price_range else None
    else:
        v = r.hourly_rate
    return 0 if v is None else v


def _experience(r) -> int:
    if isinstance(r, HotelSearchResult):
        return 0
    return r.experience_years or 0


# sort option -> (key, descending)
SORT_KEYS: dict[str, tuple[Callable, bool]] = {
    "rating": (lambda r: r.rating or 0, True),
    "distance": (lambda r: math.inf if r.distance is None else r.distance, False),
    "price-low": (_low_price, False),
    "price-high": (_high_price, True),
    "newest": (lambda r: as_aware(r.created_at) or _EPOCH, True),
    "experience": (_experience, True),
    "popularity": (lambda r: r.review_count or 0, True),
}


def sort_results(results: list[R], sort: Optional[str]) -> list[R]:
    ranked = sorted(results, key=lambda r: r.relevance_score, reverse=True)
    if sort is None:
        return ranked
    key, descending = SORT_KEYS[sort]
    # Stable: equal primary keys keep the relevance order from the first pass.
    return sorted(ranked, key=key, reverse=descending)
