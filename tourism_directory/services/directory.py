"""Public directory listings: eligibility-gated creation, maintenance and batch sync."""

import logging
from datetime import datetime
from typing import Callable, Optional

from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE
from tourism_directory.domain import DirectoryListingRecord
from tourism_directory.errors import DirectoryError, IncompleteRegistrationError
from tourism_directory.schemas.common import CountResponse, ServiceResult, SyncReport
from tourism_directory.schemas.directory import ListingUpdate
from tourism_directory.services.eligibility import is_complete, listing_keywords, validate_passion_type
from tourism_directory.services.results import as_result
from tourism_directory.store.base import RecordStore
from tourism_directory.utils import utcnow

logger = logging.getLogger(__name__)


# Listing columns that must never be written as NULL
_NON_NULL_LISTING = ("is_visible", "is_featured", "listing_priority")


def new_listing_fields(keywords: Optional[list[str]] = None) -> dict:
    """Column values written when a listing is first created."""
    return {
        "is_visible": True,
        "is_featured": False,
        "listing_priority": 0,
        "search_keywords": list(keywords or []),
    }


async def certify_listing(
    store: RecordStore, user_id: str, passion_type: str, keywords: list[str]
) -> DirectoryListingRecord:
    """Create the listing of a complete profile, or refresh the keywords of an existing one.

    An existing listing keeps its visibility, priority and featured flag.
    """
    if await store.get_listing(user_id, passion_type) is None:
        return await store.upsert_listing(user_id, passion_type, new_listing_fields(keywords))
    updated = await store.update_listings(user_id, {"search_keywords": keywords}, passion_type)
    if updated:
        return updated[0]
    return await store.upsert_listing(user_id, passion_type, new_listing_fields(keywords))


class DirectoryService:
    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    # -------------------------------------------------------------------------
    # Internal operations (raise DirectoryError)
    # -------------------------------------------------------------------------

    async def _check_complete(self, user_id: str, passion_type: str) -> bool:
        validate_passion_type(passion_type)
        record = await self.store.get_role_profile(passion_type, user_id)
        return is_complete(record, passion_type)

    async def _create_listing(
        self,
        user_id: str,
        passion_type: str,
        keywords: Optional[list[str]] = None,
    ) -> DirectoryListingRecord:
        if not await self._check_complete(user_id, passion_type):
            raise IncompleteRegistrationError()
        listing = await self.store.upsert_listing(user_id, passion_type, new_listing_fields(keywords))
        logger.info("Listing upserted user_id=%s passion_type=%s", user_id, passion_type)
        return listing

    async def _sync_all(self) -> SyncReport:
        report = SyncReport()
        for passion_type in (TOUR_GUIDE, HOTEL_PARTNER):
            try:
                records = await self.store.list_role_profiles(passion_type)
            except DirectoryError as e:
                report.errors.append(f"{passion_type} sync error: {e.message}")
                continue
            for record in records:
                # Deactivated accounts stay out of the directory until reactivated.
                if record.is_active is False or not is_complete(record, passion_type):
                    continue
                try:
                    await certify_listing(
                        self.store, record.user_id, passion_type, listing_keywords(record, passion_type)
                    )
                except DirectoryError as e:
                    report.errors.append(f"{passion_type} {record.user_id}: {e.message}")
                    continue
                report.synced += 1
        logger.info("Listing sync finished synced=%d errors=%d", report.synced, len(report.errors))
        return report

    async def _refresh(self) -> CountResponse:
        updated = await self.store.touch_visible_listings(self.clock())
        return CountResponse(updated=updated)

    # -------------------------------------------------------------------------
    # Public operations (return ServiceResult)
    # -------------------------------------------------------------------------

    async def check_complete(self, user_id: str, passion_type: str) -> ServiceResult[bool]:
        return await as_result("check_complete", self._check_complete(user_id, passion_type))

    async def create_listing(
        self,
        user_id: str,
        passion_type: str,
        keywords: Optional[list[str]] = None,
    ) -> ServiceResult[DirectoryListingRecord]:
        return await as_result(
            "create_listing", self._create_listing(user_id, passion_type, keywords)
        )

    async def update_listing(
        self,
        user_id: str,
        updates: ListingUpdate,
        passion_type: Optional[str] = None,
    ) -> ServiceResult[list[DirectoryListingRecord]]:
        async def run():
            if passion_type is not None:
                validate_passion_type(passion_type)
            fields = {
                k: v
                for k, v in updates.model_dump(exclude_unset=True).items()
                if not (k in _NON_NULL_LISTING and v is None)
            }
            return await self.store.update_listings(user_id, fields, passion_type)

        return await as_result("update_listing", run())

    async def remove_listing(
        self, user_id: str, passion_type: Optional[str] = None
    ) -> ServiceResult[int]:
        async def run():
            if passion_type is not None:
                validate_passion_type(passion_type)
            return await self.store.delete_listings(user_id, passion_type)

        return await as_result("remove_listing", run())

    async def get_visibility_status(self, user_id: str) -> ServiceResult[list[DirectoryListingRecord]]:
        return await as_result("get_visibility_status", self.store.list_user_listings(user_id))

    async def get_public_listings(
        self,
        passion_type: Optional[str] = None,
        is_visible: bool = True,
    ) -> ServiceResult[list[DirectoryListingRecord]]:
        async def run():
            if passion_type is not None:
                validate_passion_type(passion_type)
            return await self.store.list_listings(passion_type=passion_type, is_visible=is_visible)

        return await as_result("get_public_listings", run())

    async def sync_all_listings(self) -> ServiceResult[SyncReport]:
        return await as_result("sync_all_listings", self._sync_all())

    async def refresh_listing_cache(self) -> ServiceResult[CountResponse]:
        return await as_result("refresh_listing_cache", self._refresh())
