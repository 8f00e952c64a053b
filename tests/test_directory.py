"""Tests for directory listing maintenance and batch sync."""

import pytest

from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE
from tourism_directory.errors import ErrorType, StoreError
from tourism_directory.schemas import ListingUpdate
from tourism_directory.schemas.search import SearchQuery
from tourism_directory.services import DirectoryService
from tourism_directory.store import InMemoryRecordStore
from tests.conftest import NOW, OLD, add_guide, add_hotel, complete_guide, complete_hotel


class TestSyncAllListings:
    @pytest.mark.asyncio
    async def test_lists_only_complete_profiles(self, store, directory):
        await store.upsert_role_profile(TOUR_GUIDE, "g1", complete_guide())
        await store.upsert_role_profile(TOUR_GUIDE, "g2", complete_guide(phone=None))
        await store.upsert_role_profile(HOTEL_PARTNER, "h1", complete_hotel())
        await store.upsert_role_profile(HOTEL_PARTNER, "h2", complete_hotel(amenities=[]))

        result = await directory.sync_all_listings()

        assert result.success is True
        assert result.data.synced == 2
        assert result.data.errors == []
        assert await store.get_listing("g1", TOUR_GUIDE) is not None
        assert await store.get_listing("g2", TOUR_GUIDE) is None
        hotel_listing = await store.get_listing("h1", HOTEL_PARTNER)
        assert hotel_listing.search_keywords[0] == "Lake Palace Stays"

    @pytest.mark.asyncio
    async def test_per_record_failures_are_collected(self):
        class FlakyStore(InMemoryRecordStore):
            async def upsert_listing(self, user_id, passion_type, fields):
                if user_id == "g2":
                    raise StoreError("deadlock detected")
                return await super().upsert_listing(user_id, passion_type, fields)

        flaky = FlakyStore()
        for uid in ("g1", "g2", "g3"):
            await flaky.upsert_role_profile(TOUR_GUIDE, uid, complete_guide())

        result = await DirectoryService(flaky).sync_all_listings()

        assert result.success is True
        assert result.data.synced == 2
        assert len(result.data.errors) == 1
        assert "g2" in result.data.errors[0]
        assert "deadlock detected" in result.data.errors[0]
        assert await flaky.get_listing("g1", TOUR_GUIDE) is not None
        assert await flaky.get_listing("g3", TOUR_GUIDE) is not None

    @pytest.mark.asyncio
    async def test_deactivated_account_stays_hidden(self, store, directory, visibility, engine):
        await add_guide(store, "gone")
        await visibility.deactivate_account("gone")

        result = await directory.sync_all_listings()

        assert result.data.synced == 0
        assert (await store.get_listing("gone", TOUR_GUIDE)).is_visible is False
        assert (await engine.search_guides(SearchQuery())).data == []

    @pytest.mark.asyncio
    async def test_existing_listing_keeps_owner_settings(self, store, directory):
        await add_guide(store, "g1", visible=False)
        await store.update_listings("g1", {"listing_priority": 7, "is_featured": True})

        await directory.sync_all_listings()

        listing = await store.get_listing("g1", TOUR_GUIDE)
        assert listing.is_visible is False
        assert listing.listing_priority == 7
        assert listing.is_featured is True
        assert listing.search_keywords == ["John Doe", "Jaipur", "Rajasthan", "Historical Tours"]

    @pytest.mark.asyncio
    async def test_rerun_is_idempotent(self, store, directory):
        await store.upsert_role_profile(TOUR_GUIDE, "g1", complete_guide())
        await directory.sync_all_listings()
        await directory.sync_all_listings()
        assert len(await store.list_user_listings("g1")) == 1


class TestListingMaintenance:
    @pytest.mark.asyncio
    async def test_refresh_touches_visible_listings_only(self, store, directory):
        await add_guide(store, "g1")
        await add_guide(store, "g2", visible=False)
        await add_hotel(store, "h1")

        result = await directory.refresh_listing_cache()

        assert result.success is True
        assert result.data.updated == 2
        assert (await store.get_listing("g1", TOUR_GUIDE)).last_updated == NOW
        assert (await store.get_listing("g2", TOUR_GUIDE)).last_updated != NOW

    @pytest.mark.asyncio
    async def test_update_listing_writes_only_sent_fields(self, store, directory):
        await add_guide(store, "g1")
        await store.update_listings("g1", {"search_keywords": ["keep"]})

        result = await directory.update_listing("g1", ListingUpdate(listing_priority=5))

        assert result.success is True
        listing = result.data[0]
        assert listing.listing_priority == 5
        assert listing.search_keywords == ["keep"]
        assert listing.is_visible is True

    @pytest.mark.asyncio
    async def test_update_listing_ignores_null_for_required_columns(self, store, directory):
        await add_guide(store, "g1")

        result = await directory.update_listing(
            "g1", ListingUpdate(is_visible=None, listing_priority=None, search_keywords=["tours"])
        )

        assert result.success is True
        listing = result.data[0]
        assert listing.is_visible is True
        assert listing.listing_priority == 0
        assert listing.search_keywords == ["tours"]

    @pytest.mark.asyncio
    async def test_remove_listing_by_passion_type(self, store, directory):
        await add_guide(store, "u1")
        await add_hotel(store, "u1")

        result = await directory.remove_listing("u1", HOTEL_PARTNER)

        assert result.data == 1
        remaining = await directory.get_visibility_status("u1")
        assert [listing.passion_type for listing in remaining.data] == [TOUR_GUIDE]

    @pytest.mark.asyncio
    async def test_remove_listing_rejects_unknown_type(self, directory):
        result = await directory.remove_listing("u1", "tourist")
        assert result.success is False
        assert result.error_type == ErrorType.INVALID_PASSION_TYPE

    @pytest.mark.asyncio
    async def test_public_listings_ordered_by_priority_then_recency(self, store, directory):
        await add_guide(store, "low")
        await add_guide(store, "high")
        await store.update_listings("high", {"listing_priority": 10})
        await store.touch_visible_listings(OLD)
        await add_guide(store, "fresh")
        await add_guide(store, "hidden", visible=False)

        result = await directory.get_public_listings(TOUR_GUIDE)

        assert [listing.user_id for listing in result.data] == ["high", "fresh", "low"]

    @pytest.mark.asyncio
    async def test_public_listings_can_show_hidden(self, store, directory):
        await add_guide(store, "g1", visible=False)
        await add_hotel(store, "h1")
        result = await directory.get_public_listings(is_visible=False)
        assert [listing.user_id for listing in result.data] == ["g1"]
