"""Tests for disclosure preferences, public profiles and account status."""

from itertools import product

import pytest

from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE, TOURIST
from tourism_directory.domain import HotelPartnerRecord, TourGuideRecord, VisibilityPreferencesRecord
from tourism_directory.errors import ErrorType
from tourism_directory.schemas import FieldVisibility, PreferencesUpdate
from tourism_directory.services.search.mapping import guide_to_result, hotel_to_result
from tourism_directory.services.visibility import redact_result
from tests.conftest import NOW, add_guide, add_hotel, complete_guide, complete_hotel

FLAG_COMBINATIONS = list(product([True, False], repeat=4))


class TestPreferences:
    @pytest.mark.asyncio
    async def test_defaults_when_never_saved(self, store, visibility):
        result = await visibility.get_preferences("u1")

        prefs = result.data
        assert result.success is True
        assert prefs.show_contact_info and prefs.show_pricing
        assert prefs.show_location and prefs.show_reviews
        assert prefs.custom_bio is None
        assert prefs.featured_images == []
        # Defaults are not written back.
        assert await store.get_preferences("u1") is None

    @pytest.mark.asyncio
    async def test_partial_update_merges(self, visibility):
        await visibility.set_preferences("u1", PreferencesUpdate(show_pricing=False, custom_bio="Hi"))
        result = await visibility.set_preferences("u1", PreferencesUpdate(show_location=False))

        prefs = result.data
        assert prefs.show_pricing is False
        assert prefs.show_location is False
        assert prefs.show_contact_info is True
        assert prefs.custom_bio == "Hi"
        assert prefs.updated_at == NOW

    @pytest.mark.asyncio
    async def test_field_visibility_ignores_unknown_names(self, visibility):
        result = await visibility.set_field_visibility(
            "u1",
            [
                FieldVisibility(field="contact_info", visible=False),
                FieldVisibility(field="favourite_colour", visible=False),
                FieldVisibility(field="reviews", visible=False),
            ],
        )

        prefs = result.data
        assert result.success is True
        assert prefs.show_contact_info is False
        assert prefs.show_reviews is False
        assert prefs.show_pricing is True
        assert prefs.show_location is True


class TestListingVisibility:
    @pytest.mark.asyncio
    async def test_no_listings_is_not_visible(self, visibility):
        result = await visibility.is_listing_visible("nobody")
        assert result.success is True
        assert result.data is False

    @pytest.mark.asyncio
    async def test_any_visible_listing_counts(self, store, visibility):
        await add_guide(store, "u1", visible=False)
        await add_hotel(store, "u1", visible=True)
        assert (await visibility.is_listing_visible("u1")).data is True

    @pytest.mark.asyncio
    async def test_hide_one_passion_type(self, store, visibility):
        await add_guide(store, "u1")
        await add_hotel(store, "u1")

        await visibility.set_listing_visibility("u1", False, HOTEL_PARTNER)

        assert (await store.get_listing("u1", HOTEL_PARTNER)).is_visible is False
        assert (await store.get_listing("u1", TOUR_GUIDE)).is_visible is True

    @pytest.mark.asyncio
    async def test_hide_all(self, store, visibility):
        await add_guide(store, "u1")
        await add_hotel(store, "u1")

        result = await visibility.set_listing_visibility("u1", False)

        assert len(result.data) == 2
        assert (await visibility.is_listing_visible("u1")).data is False

    @pytest.mark.asyncio
    async def test_rejects_non_listable_type(self, visibility):
        result = await visibility.set_listing_visibility("u1", False, TOURIST)
        assert result.error_type == ErrorType.INVALID_PASSION_TYPE


class TestRedactResult:
    @pytest.mark.parametrize("contact,pricing,location,reviews", FLAG_COMBINATIONS)
    def test_guide_flags(self, contact, pricing, location, reviews):
        record = TourGuideRecord(id="g", user_id="u1", **complete_guide())
        prefs = VisibilityPreferencesRecord(
            user_id="u1",
            show_contact_info=contact,
            show_pricing=pricing,
            show_location=location,
            show_reviews=reviews,
        )

        out = redact_result(guide_to_result(record, 0), prefs)

        assert (out.phone is not None) == contact
        assert (out.email is not None) == contact
        assert (out.website is not None) == contact
        assert (out.hourly_rate is not None) == pricing
        assert (out.city is not None) == location
        assert (out.state is not None) == location
        assert (out.rating is not None) == reviews
        assert (out.review_count is not None) == reviews
        # Never redacted
        assert out.name == "John Doe"
        assert out.specialties == ["Historical Tours"]

    def test_hotel_pricing_hides_price_range(self):
        record = HotelPartnerRecord(id="h", user_id="u1", **complete_hotel())
        prefs = VisibilityPreferencesRecord(user_id="u1", show_pricing=False)

        out = redact_result(hotel_to_result(record, 0), prefs)

        assert out.price_range is None
        assert out.amenities == ["WiFi", "Pool"]

    def test_custom_bio_and_featured_images(self):
        record = HotelPartnerRecord(id="h", user_id="u1", **complete_hotel())
        prefs = VisibilityPreferencesRecord(
            user_id="u1", custom_bio="Our own words", featured_images=["a.jpg"]
        )

        out = redact_result(hotel_to_result(record, 0), prefs)

        assert out.bio == "Our own words"
        assert out.featured_images == ["a.jpg"]


class TestPublicProfile:
    @pytest.mark.asyncio
    async def test_hidden_contact_and_pricing(self, store, visibility):
        await add_guide(store, "u1")
        await visibility.set_preferences(
            "u1", PreferencesUpdate(show_contact_info=False, show_pricing=False)
        )

        profile = (await visibility.build_public_profile("u1")).data

        assert profile.passion_type == TOUR_GUIDE
        assert profile.display_name == "John Doe"
        assert profile.contact_info is None
        assert profile.pricing is None
        assert profile.location.city == "Jaipur"
        assert profile.reviews.rating == 0
        assert profile.specialties == ["Historical Tours"]

    @pytest.mark.asyncio
    async def test_all_visible_by_default(self, store, visibility):
        await add_hotel(store, "h1")

        profile = (await visibility.build_public_profile("h1")).data

        assert profile.passion_type == HOTEL_PARTNER
        assert profile.display_name == "Lake Palace Stays"
        assert profile.contact_info.phone == "+91-2212345678"
        assert profile.pricing.price_min == 2500
        assert profile.pricing.price_max == 8000
        assert profile.hotel_type == "Heritage Hotel"

    @pytest.mark.asyncio
    async def test_custom_bio_replaces_bio(self, store, visibility):
        await add_guide(store, "u1")
        await visibility.set_preferences("u1", PreferencesUpdate(custom_bio="Ask me about forts"))

        profile = (await visibility.build_public_profile("u1")).data

        assert profile.bio == "Ask me about forts"

    @pytest.mark.asyncio
    async def test_none_without_provider_profile(self, store, visibility):
        await store.upsert_role_profile(TOURIST, "t1", {"full_name": "Tia"})
        result = await visibility.build_public_profile("t1")
        assert result.success is True
        assert result.data is None

    @pytest.mark.asyncio
    async def test_unlisted_guide_still_resolves(self, store, visibility):
        await add_guide(store, "u1", listed=False)
        assert (await visibility.get_passion_type("u1")).data == TOUR_GUIDE
        assert (await visibility.build_public_profile("u1")).data is not None

    @pytest.mark.asyncio
    async def test_oldest_listing_decides_passion_type(self, store, visibility):
        await add_hotel(store, "u1")
        await add_guide(store, "u1")
        assert (await visibility.get_passion_type("u1")).data == HOTEL_PARTNER


class TestAccountStatus:
    @pytest.mark.asyncio
    async def test_deactivate_hides_everything(self, store, visibility):
        await add_guide(store, "u1")
        await add_hotel(store, "u1")

        result = await visibility.deactivate_account("u1")

        assert result.data.listings_updated == 2
        assert result.data.profiles_updated == 2
        assert (await visibility.is_listing_visible("u1")).data is False
        assert (await store.get_role_profile(TOUR_GUIDE, "u1")).is_active is False
        assert (await store.get_role_profile(HOTEL_PARTNER, "u1")).is_active is False

    @pytest.mark.asyncio
    async def test_reactivate_restores(self, store, visibility):
        await add_guide(store, "u1")
        await visibility.deactivate_account("u1")

        result = await visibility.reactivate_account("u1")

        assert result.data.is_active is True
        assert (await visibility.is_listing_visible("u1")).data is True
        assert (await store.get_role_profile(TOUR_GUIDE, "u1")).is_active is True

    @pytest.mark.asyncio
    async def test_deactivate_without_rows_is_a_noop(self, visibility):
        result = await visibility.deactivate_account("ghost")
        assert result.success is True
        assert result.data.listings_updated == 0
        assert result.data.profiles_updated == 0


class TestVerification:
    @pytest.mark.asyncio
    async def test_unverified_by_default(self, store, visibility):
        await add_guide(store, "u1")
        status = (await visibility.check_verification_status("u1")).data
        assert status.passion_type == TOUR_GUIDE
        assert status.is_verified is False

    @pytest.mark.asyncio
    async def test_guide_verification_writes_verified_column(self, store, visibility):
        await add_guide(store, "u1")

        result = await visibility.update_verification_status("u1", True)

        assert result.data.is_verified is True
        assert (await store.get_role_profile(TOUR_GUIDE, "u1")).verified is True

    @pytest.mark.asyncio
    async def test_hotel_verification(self, store, visibility):
        await add_hotel(store, "h1")

        await visibility.update_verification_status("h1", True, HOTEL_PARTNER)

        assert (await store.get_role_profile(HOTEL_PARTNER, "h1")).is_verified is True
        assert (await visibility.check_verification_status("h1")).data.is_verified is True

    @pytest.mark.asyncio
    async def test_missing_profile_is_not_found(self, visibility):
        result = await visibility.update_verification_status("ghost", True)
        assert result.success is False
        assert result.error_type == ErrorType.NOT_FOUND

    @pytest.mark.asyncio
    async def test_no_profile_reports_unverified(self, visibility):
        status = (await visibility.check_verification_status("ghost")).data
        assert status.passion_type is None
        assert status.is_verified is False
