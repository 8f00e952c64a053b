"""Record-store interface the directory services are written against.

Implementations return validated records from ``tourism_directory.domain`` and
raise ``StoreError`` for any backend failure.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from tourism_directory.domain import (
    DirectoryListingRecord,
    HotelPartnerRecord,
    ProfileRecord,
    TourGuideRecord,
    UserPassionRecord,
    VisibilityPreferencesRecord,
)
from tourism_directory.store.criteria import GuideCriteria, HotelCriteria


class RecordStore(ABC):
    # --- Accounts and role profiles ---

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[ProfileRecord]: ...

    @abstractmethod
    async def set_profile_role(self, user_id: str, role: str) -> ProfileRecord:
        """Set ``profiles.user_role``, creating the account row when missing."""

    @abstractmethod
    async def get_role_profile(self, role: str, user_id: str):
        """Row of ``role``'s table owned by ``user_id``, or None."""

    @abstractmethod
    async def upsert_role_profile(self, role: str, user_id: str, fields: dict[str, Any]):
        """Insert or update the user's row in ``role``'s table; returns the stored record."""

    @abstractmethod
    async def update_role_profile(self, role: str, user_id: str, fields: dict[str, Any]):
        """Update an existing row only; None when the user has no row for ``role``."""

    @abstractmethod
    async def list_role_profiles(self, role: str) -> list:
        """Every row of ``role``'s table, oldest first."""

    @abstractmethod
    async def query_guides(self, criteria: GuideCriteria) -> list[TourGuideRecord]: ...

    @abstractmethod
    async def query_hotels(self, criteria: HotelCriteria) -> list[HotelPartnerRecord]: ...

    @abstractmethod
    async def match_guide_terms(
        self, text: str, user_ids: list[str], limit: int
    ) -> list[TourGuideRecord]:
        """Guides among ``user_ids`` with name, company, city, state or a specialty containing ``text``."""

    @abstractmethod
    async def match_hotel_terms(
        self, text: str, user_ids: list[str], limit: int
    ) -> list[HotelPartnerRecord]:
        """Hotels among ``user_ids`` with company, city, state, type or an amenity containing ``text``."""

    # --- Passions ---

    @abstractmethod
    async def list_passions(self, user_id: str) -> list[UserPassionRecord]: ...

    @abstractmethod
    async def add_passion(self, user_id: str, passion: str) -> UserPassionRecord:
        """Idempotent on (user_id, passion)."""

    # --- Directory listings ---

    @abstractmethod
    async def get_listing(self, user_id: str, passion_type: str) -> Optional[DirectoryListingRecord]: ...

    @abstractmethod
    async def list_user_listings(self, user_id: str) -> list[DirectoryListingRecord]:
        """All listings of one user, oldest first."""

    @abstractmethod
    async def list_listings(
        self,
        passion_type: Optional[str] = None,
        is_visible: Optional[bool] = None,
    ) -> list[DirectoryListingRecord]:
        """Listings ordered by priority desc, then last_updated desc."""

    @abstractmethod
    async def visible_listing_user_ids(self, passion_type: str) -> list[str]: ...

    @abstractmethod
    async def upsert_listing(
        self, user_id: str, passion_type: str, fields: dict[str, Any]
    ) -> DirectoryListingRecord:
        """Conflict target is (user_id, passion_type)."""

    @abstractmethod
    async def update_listings(
        self, user_id: str, fields: dict[str, Any], passion_type: Optional[str] = None
    ) -> list[DirectoryListingRecord]:
        """Apply ``fields`` to all of the user's listings, or only ``passion_type``'s."""

    @abstractmethod
    async def delete_listings(self, user_id: str, passion_type: Optional[str] = None) -> int: ...

    @abstractmethod
    async def touch_visible_listings(self, now: datetime) -> int:
        """Set ``last_updated`` on every visible listing; returns the count."""

    # --- Visibility preferences ---

    @abstractmethod
    async def get_preferences(self, user_id: str) -> Optional[VisibilityPreferencesRecord]: ...

    @abstractmethod
    async def list_preferences(self, user_ids: list[str]) -> dict[str, VisibilityPreferencesRecord]:
        """Stored preferences keyed by user id; users without a row are absent."""

    @abstractmethod
    async def upsert_preferences(
        self, user_id: str, fields: dict[str, Any]
    ) -> VisibilityPreferencesRecord:
        """Merge ``fields`` into the user's row, creating it with defaults when missing."""
