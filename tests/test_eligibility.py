"""Tests for the listing eligibility gate."""

import pytest

from tourism_directory.core.constants import HOTEL_PARTNER, INCOMPLETE_REGISTRATION_MESSAGE, TOUR_GUIDE
from tourism_directory.errors import ErrorType, StoreError
from tourism_directory.services import DirectoryService
from tourism_directory.services.eligibility import listing_keywords
from tourism_directory.store import InMemoryRecordStore
from tests.conftest import complete_guide, complete_hotel

GUIDE_GAPS = [
    {"full_name": None},
    {"full_name": "   "},
    {"phone": ""},
    {"phone": None},
    {"experience_years": None},
    {"hourly_rate": None},
    {"specialties": []},
    {"address": None},
    {"address": "  "},
]

HOTEL_GAPS = [
    {"company_name": None},
    {"company_name": " "},
    {"hotel_type": None},
    {"address": ""},
    {"amenities": []},
]


class TestCheckComplete:
    @pytest.mark.asyncio
    async def test_complete_guide(self, store, directory):
        await store.upsert_role_profile(TOUR_GUIDE, "u1", complete_guide())
        result = await directory.check_complete("u1", TOUR_GUIDE)
        assert result.success is True
        assert result.data is True

    @pytest.mark.asyncio
    async def test_zero_experience_still_counts(self, store, directory):
        await store.upsert_role_profile(TOUR_GUIDE, "u1", complete_guide(experience_years=0, hourly_rate=0))
        result = await directory.check_complete("u1", TOUR_GUIDE)
        assert result.data is True

    @pytest.mark.asyncio
    async def test_missing_row_is_incomplete(self, directory):
        result = await directory.check_complete("nobody", HOTEL_PARTNER)
        assert result.success is True
        assert result.data is False

    @pytest.mark.asyncio
    async def test_unknown_passion_type(self, directory):
        result = await directory.check_complete("u1", "tourist")
        assert result.success is False
        assert result.error_type == ErrorType.INVALID_PASSION_TYPE


class TestCreateListing:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("gap", GUIDE_GAPS)
    async def test_incomplete_guide_rejected(self, store, directory, gap):
        await store.upsert_role_profile(TOUR_GUIDE, "u1", complete_guide(**gap))
        result = await directory.create_listing("u1", TOUR_GUIDE)
        assert result.success is False
        assert result.error_type == ErrorType.INCOMPLETE_REGISTRATION
        assert result.error == INCOMPLETE_REGISTRATION_MESSAGE
        assert await store.get_listing("u1", TOUR_GUIDE) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("gap", HOTEL_GAPS)
    async def test_incomplete_hotel_rejected(self, store, directory, gap):
        await store.upsert_role_profile(HOTEL_PARTNER, "h1", complete_hotel(**gap))
        result = await directory.create_listing("h1", HOTEL_PARTNER)
        assert result.success is False
        assert result.error_type == ErrorType.INCOMPLETE_REGISTRATION

    @pytest.mark.asyncio
    async def test_john_doe_is_listed_visible(self, store, directory):
        await store.upsert_role_profile(TOUR_GUIDE, "john", complete_guide())
        result = await directory.create_listing("john", TOUR_GUIDE)
        assert result.success is True
        listing = result.data
        assert listing.is_visible is True
        assert listing.listing_priority == 0
        assert listing.is_featured is False
        assert listing.search_keywords == []

    @pytest.mark.asyncio
    async def test_complete_hotel_is_listed(self, store, directory):
        await store.upsert_role_profile(HOTEL_PARTNER, "h1", complete_hotel())
        result = await directory.create_listing("h1", HOTEL_PARTNER, ["lake", "pool"])
        assert result.success is True
        assert result.data.search_keywords == ["lake", "pool"]

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent(self, store, directory):
        await store.upsert_role_profile(TOUR_GUIDE, "u1", complete_guide())
        first = await directory.create_listing("u1", TOUR_GUIDE, ["a"])
        await store.update_listings("u1", {"is_visible": False})
        second = await directory.create_listing("u1", TOUR_GUIDE, ["b"])
        listings = await store.list_user_listings("u1")
        assert len(listings) == 1
        assert second.data.id == first.data.id
        assert second.data.is_visible is True
        assert second.data.search_keywords == ["b"]

    @pytest.mark.asyncio
    async def test_store_failure_is_surfaced(self, store):
        class BrokenStore(InMemoryRecordStore):
            async def upsert_listing(self, user_id, passion_type, fields):
                raise StoreError("connection reset by peer")

        broken = BrokenStore()
        await broken.upsert_role_profile(TOUR_GUIDE, "u1", complete_guide())
        result = await DirectoryService(broken).create_listing("u1", TOUR_GUIDE)
        assert result.success is False
        assert result.error_type == ErrorType.STORE_ERROR
        assert result.error == "connection reset by peer"


class TestListingKeywords:
    @pytest.mark.asyncio
    async def test_guide_keywords_drop_empty_values(self, store):
        record = await store.upsert_role_profile(
            TOUR_GUIDE, "u1", complete_guide(state=None, specialties=["Food Walks", "Heritage"])
        )
        assert listing_keywords(record, TOUR_GUIDE) == ["John Doe", "Jaipur", "Food Walks", "Heritage"]

    @pytest.mark.asyncio
    async def test_hotel_keywords(self, store):
        record = await store.upsert_role_profile(HOTEL_PARTNER, "h1", complete_hotel())
        assert listing_keywords(record, HOTEL_PARTNER) == [
            "Lake Palace Stays",
            "Udaipur",
            "Rajasthan",
            "Heritage Hotel",
            "WiFi",
            "Pool",
        ]
