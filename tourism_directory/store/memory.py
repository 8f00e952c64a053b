"""Process-local record store.

Used by the test-suite and selectable with ``STORE_BACKEND=memory`` for demos.
Evaluates criteria with the same predicates the SQL store mirrors.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE, TOURIST
from tourism_directory.domain import (
    DirectoryListingRecord,
    HotelPartnerRecord,
    ProfileRecord,
    TourGuideRecord,
    TouristRecord,
    UserPassionRecord,
    VisibilityPreferencesRecord,
)
from tourism_directory.errors import StoreError
from tourism_directory.store.base import RecordStore
from tourism_directory.store.criteria import (
    GuideCriteria,
    HotelCriteria,
    contains_ci,
    guide_matches,
    guide_suggestion_values,
    hotel_matches,
    hotel_suggestion_values,
)
from tourism_directory.utils import as_aware, utcnow, uuid4_str

_ROLE_RECORDS = {
    TOURIST: TouristRecord,
    TOUR_GUIDE: TourGuideRecord,
    HOTEL_PARTNER: HotelPartnerRecord,
}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _ts(dt: Optional[datetime]) -> datetime:
    return as_aware(dt) or _EPOCH


class InMemoryRecordStore(RecordStore):
    """Dict-backed store; rows are kept as validated records keyed by user id."""

    def __init__(self) -> None:
        self._profiles: dict[str, ProfileRecord] = {}
        self._roles: dict[str, dict[str, Any]] = {role: {} for role in _ROLE_RECORDS}
        self._passions: dict[tuple[str, str], UserPassionRecord] = {}
        self._listings: dict[tuple[str, str], DirectoryListingRecord] = {}
        self._preferences: dict[str, VisibilityPreferencesRecord] = {}

    def _table(self, role: str) -> dict[str, Any]:
        try:
            return self._roles[role]
        except KeyError:
            raise StoreError(f'relation for role "{role}" does not exist') from None

    # --- Accounts and role profiles ---

    async def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        return self._profiles.get(user_id)

    async def set_profile_role(self, user_id: str, role: str) -> ProfileRecord:
        now = utcnow()
        existing = self._profiles.get(user_id)
        if existing is None:
            record = ProfileRecord(id=user_id, user_role=role, created_at=now)
        else:
            record = existing.model_copy(update={"user_role": role, "updated_at": now})
        self._profiles[user_id] = record
        return record

    async def get_role_profile(self, role: str, user_id: str):
        return self._table(role).get(user_id)

    async def upsert_role_profile(self, role: str, user_id: str, fields: dict[str, Any]):
        table = self._table(role)
        now = utcnow()
        existing = table.get(user_id)
        if existing is None:
            data = {"id": uuid4_str(), "user_id": user_id, "created_at": now, **fields}
        else:
            data = {**existing.model_dump(), **fields, "updated_at": now}
        record = _ROLE_RECORDS[role].model_validate(data)
        table[user_id] = record
        return record

    async def update_role_profile(self, role: str, user_id: str, fields: dict[str, Any]):
        table = self._table(role)
        existing = table.get(user_id)
        if existing is None:
            return None
        record = _ROLE_RECORDS[role].model_validate(
            {**existing.model_dump(), **fields, "updated_at": utcnow()}
        )
        table[user_id] = record
        return record

    async def list_role_profiles(self, role: str) -> list:
        return sorted(self._table(role).values(), key=lambda r: _ts(r.created_at))

    async def query_guides(self, criteria: GuideCriteria) -> list[TourGuideRecord]:
        return [g for g in self._table(TOUR_GUIDE).values() if guide_matches(g, criteria)]

    async def query_hotels(self, criteria: HotelCriteria) -> list[HotelPartnerRecord]:
        return [h for h in self._table(HOTEL_PARTNER).values() if hotel_matches(h, criteria)]

    async def match_guide_terms(self, text: str, user_ids: list[str], limit: int) -> list[TourGuideRecord]:
        wanted = set(user_ids)
        out = [
            g
            for g in self._table(TOUR_GUIDE).values()
            if g.user_id in wanted and any(contains_ci(v, text) for v in guide_suggestion_values(g))
        ]
        return out[:limit]

    async def match_hotel_terms(self, text: str, user_ids: list[str], limit: int) -> list[HotelPartnerRecord]:
        wanted = set(user_ids)
        out = [
            h
            for h in self._table(HOTEL_PARTNER).values()
            if h.user_id in wanted and any(contains_ci(v, text) for v in hotel_suggestion_values(h))
        ]
        return out[:limit]

    # --- Passions ---

    async def list_passions(self, user_id: str) -> list[UserPassionRecord]:
        return [p for (uid, _), p in self._passions.items() if uid == user_id]

    async def add_passion(self, user_id: str, passion: str) -> UserPassionRecord:
        key = (user_id, passion)
        if key not in self._passions:
            self._passions[key] = UserPassionRecord(
                id=uuid4_str(), user_id=user_id, passion=passion, created_at=utcnow()
            )
        return self._passions[key]

    # --- Directory listings ---

    async def get_listing(self, user_id: str, passion_type: str) -> Optional[DirectoryListingRecord]:
        return self._listings.get((user_id, passion_type))

    async def list_user_listings(self, user_id: str) -> list[DirectoryListingRecord]:
        rows = [r for (uid, _), r in self._listings.items() if uid == user_id]
        return sorted(rows, key=lambda r: _ts(r.created_at))

    async def list_listings(
        self,
        passion_type: Optional[str] = None,
        is_visible: Optional[bool] = None,
    ) -> list[DirectoryListingRecord]:
        rows = [
            r
            for r in self._listings.values()
            if (passion_type is None or r.passion_type == passion_type)
            and (is_visible is None or r.is_visible == is_visible)
        ]
        rows.sort(key=lambda r: _ts(r.last_updated), reverse=True)
        rows.sort(key=lambda r: r.listing_priority, reverse=True)
        return rows

    async def visible_listing_user_ids(self, passion_type: str) -> list[str]:
        return [
            r.user_id
            for r in self._listings.values()
            if r.passion_type == passion_type and r.is_visible
        ]

    async def upsert_listing(
        self, user_id: str, passion_type: str, fields: dict[str, Any]
    ) -> DirectoryListingRecord:
        key = (user_id, passion_type)
        now = utcnow()
        existing = self._listings.get(key)
        if existing is None:
            data = {
                "id": uuid4_str(),
                "user_id": user_id,
                "passion_type": passion_type,
                "created_at": now,
                "last_updated": now,
                **fields,
            }
        else:
            data = {**existing.model_dump(), **fields, "last_updated": now}
        try:
            record = DirectoryListingRecord.model_validate(data)
        except ValueError as e:
            raise StoreError(f"listing rejected: {e}") from e
        self._listings[key] = record
        return record

    async def update_listings(
        self, user_id: str, fields: dict[str, Any], passion_type: Optional[str] = None
    ) -> list[DirectoryListingRecord]:
        now = utcnow()
        updated = []
        for key, row in self._listings.items():
            if key[0] != user_id or (passion_type is not None and key[1] != passion_type):
                continue
            try:
                record = DirectoryListingRecord.model_validate(
                    {**row.model_dump(), **fields, "last_updated": now}
                )
            except ValueError as e:
                raise StoreError(f"listing rejected: {e}") from e
            self._listings[key] = record
            updated.append(record)
        return updated

    async def delete_listings(self, user_id: str, passion_type: Optional[str] = None) -> int:
        keys = [
            k
            for k in self._listings
            if k[0] == user_id and (passion_type is None or k[1] == passion_type)
        ]
        for k in keys:
            del self._listings[k]
        return len(keys)

    async def touch_visible_listings(self, now: datetime) -> int:
        count = 0
        for key, row in self._listings.items():
            if row.is_visible:
                self._listings[key] = row.model_copy(update={"last_updated": now})
                count += 1
        return count

    # --- Visibility preferences ---

    async def get_preferences(self, user_id: str) -> Optional[VisibilityPreferencesRecord]:
        return self._preferences.get(user_id)

    async def list_preferences(self, user_ids: list[str]) -> dict[str, VisibilityPreferencesRecord]:
        return {uid: self._preferences[uid] for uid in user_ids if uid in self._preferences}

    async def upsert_preferences(
        self, user_id: str, fields: dict[str, Any]
    ) -> VisibilityPreferencesRecord:
        now = utcnow()
        existing = self._preferences.get(user_id)
        if existing is None:
            data = {"id": uuid4_str(), "user_id": user_id, "created_at": now, "updated_at": now, **fields}
        else:
            data = {**existing.model_dump(), "updated_at": now, **fields}
        record = VisibilityPreferencesRecord.model_validate(data)
        self._preferences[user_id] = record
        return record
