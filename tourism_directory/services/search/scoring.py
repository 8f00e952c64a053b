"""Additive relevance score; transient, never persisted."""

from datetime import datetime, timedelta
from typing import Optional

from tourism_directory.domain import HotelPartnerRecord, ProviderRecord
from tourism_directory.schemas.search import SearchQuery
from tourism_directory.store.criteria import any_contains_ci, contains_ci, normalize_text
from tourism_directory.utils import as_aware

VERIFIED_POINTS = 10
NAME_MATCH_POINTS = 20
BIO_MATCH_POINTS = 10
ARRAY_MATCH_POINTS = 15
CITY_MATCH_POINTS = 15
STATE_MATCH_POINTS = 10
EXPERIENCE_CAP = 10
RECENT_WINDOW = (timedelta(days=30), 5)
NEWISH_WINDOW = (timedelta(days=90), 2)


def _array_values(record: ProviderRecord) -> list[str]:
    if isinstance(record, HotelPartnerRecord):
        return record.amenities
    return [*record.specialties, *record.languages_spoken]


def _recency_points(created_at: Optional[datetime], now: datetime) -> int:
    created = as_aware(created_at)
    if created is None:
        return 0
    age = now - created
    for window, points in (RECENT_WINDOW, NEWISH_WINDOW):
        if age < window:
            return points
    return 0


def relevance_score(record: ProviderRecord, query: SearchQuery, now: datetime) -> int:
    score = 0
    if record.is_verified:
        score += VERIFIED_POINTS

    text = normalize_text(query.text)
    if text:
        if contains_ci(record.full_name, text) or contains_ci(record.company_name, text):
            score += NAME_MATCH_POINTS
        if contains_ci(record.bio, text):
            score += BIO_MATCH_POINTS
        if any_contains_ci(_array_values(record), text):
            score += ARRAY_MATCH_POINTS

    loc = query.location
    if loc is not None:
        if loc.city and contains_ci(record.city, loc.city):
            score += CITY_MATCH_POINTS
        if loc.state and contains_ci(record.state, loc.state):
            score += STATE_MATCH_POINTS

    if not isinstance(record, HotelPartnerRecord) and record.experience_years:
        score += min(record.experience_years, EXPERIENCE_CAP)

    score += _recency_points(record.created_at, now)
    return score
