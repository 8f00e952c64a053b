"""Per-user disclosure preferences and the redacted public views built from them."""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE, USER_ROLES
from tourism_directory.domain import (
    DirectoryListingRecord,
    HotelPartnerRecord,
    ProviderRecord,
    VisibilityPreferencesRecord,
)
from tourism_directory.errors import NotFoundError
from tourism_directory.schemas.common import ServiceResult
from tourism_directory.schemas.search import GuideSearchResult, HotelSearchResult
from tourism_directory.schemas.visibility import (
    FIELD_FLAGS,
    AccountStatus,
    FieldVisibility,
    PreferencesUpdate,
    PublicContactInfo,
    PublicLocation,
    PublicPricing,
    PublicProfile,
    PublicReviews,
    VerificationStatus,
)
from tourism_directory.services.eligibility import validate_passion_type
from tourism_directory.services.results import as_result
from tourism_directory.store.base import RecordStore
from tourism_directory.utils import utcnow

logger = logging.getLogger(__name__)

SearchResult = Union[GuideSearchResult, HotelSearchResult]

# Columns that must never be written as NULL
_NON_NULL_PREFS = ("show_contact_info", "show_pricing", "show_location", "show_reviews", "featured_images")


def default_preferences(user_id: str) -> VisibilityPreferencesRecord:
    """Read-time defaults for a user who never saved preferences; not persisted."""
    return VisibilityPreferencesRecord(user_id=user_id)


def _verified(record: ProviderRecord) -> bool:
    return bool(record.is_verified)


def redact_result(result: SearchResult, prefs: VisibilityPreferencesRecord) -> SearchResult:
    """Blank the fields of one search result that its owner chose to hide."""
    update: dict = {"featured_images": list(prefs.featured_images)}
    if prefs.custom_bio:
        update["bio"] = prefs.custom_bio
    if not prefs.show_location:
        update.update(city=None, state=None)
    if not prefs.show_contact_info:
        update.update(phone=None, email=None, website=None)
    if not prefs.show_pricing:
        if isinstance(result, HotelSearchResult):
            update["price_range"] = None
        else:
            update["hourly_rate"] = None
    if not prefs.show_reviews:
        update.update(rating=None, review_count=None)
    return result.model_copy(update=update)


def public_profile_from(
    record: ProviderRecord,
    passion_type: str,
    prefs: VisibilityPreferencesRecord,
) -> PublicProfile:
    is_hotel = isinstance(record, HotelPartnerRecord)
    if is_hotel:
        pricing = PublicPricing(price_min=record.price_min, price_max=record.price_max)
        details = dict(
            hotel_type=record.hotel_type,
            amenities=record.amenities,
            room_types=record.room_types,
            images=record.images,
        )
    else:
        pricing = PublicPricing(hourly_rate=record.hourly_rate)
        details = dict(
            specialties=record.specialties,
            languages_spoken=record.languages_spoken,
            certifications=record.certifications,
            experience_years=record.experience_years,
        )
    return PublicProfile(
        id=record.id,
        user_id=record.user_id,
        passion_type=passion_type,
        display_name=record.full_name or record.company_name,
        bio=prefs.custom_bio or record.bio,
        location=PublicLocation(city=record.city, state=record.state) if prefs.show_location else None,
        contact_info=(
            PublicContactInfo(phone=record.phone, email=record.email, website=record.website)
            if prefs.show_contact_info
            else None
        ),
        pricing=pricing if prefs.show_pricing else None,
        reviews=PublicReviews() if prefs.show_reviews else None,
        is_verified=_verified(record),
        is_active=record.is_active is not False,
        last_active=record.last_active,
        created_at=record.created_at,
        featured_images=prefs.featured_images,
        **details,
    )


class VisibilityManager:
    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    # -------------------------------------------------------------------------
    # Internal operations (raise DirectoryError)
    # -------------------------------------------------------------------------

    async def _preferences(self, user_id: str) -> VisibilityPreferencesRecord:
        stored = await self.store.get_preferences(user_id)
        return stored if stored is not None else default_preferences(user_id)

    async def _save_preferences(self, user_id: str, fields: dict) -> VisibilityPreferencesRecord:
        clean = {k: v for k, v in fields.items() if not (k in _NON_NULL_PREFS and v is None)}
        clean["updated_at"] = self.clock()
        return await self.store.upsert_preferences(user_id, clean)

    async def _passion_type(self, user_id: str) -> Optional[str]:
        listings = await self.store.list_user_listings(user_id)
        if listings:
            return listings[0].passion_type
        if await self.store.get_role_profile(TOUR_GUIDE, user_id) is not None:
            return TOUR_GUIDE
        if await self.store.get_role_profile(HOTEL_PARTNER, user_id) is not None:
            return HOTEL_PARTNER
        return None

    async def _public_profile(self, user_id: str) -> Optional[PublicProfile]:
        prefs = await self._preferences(user_id)
        passion_type = await self._passion_type(user_id)
        if passion_type is None:
            return None
        record = await self.store.get_role_profile(passion_type, user_id)
        if record is None:
            return None
        return public_profile_from(record, passion_type, prefs)

    async def _set_active(self, user_id: str, active: bool) -> AccountStatus:
        # Listings first: a failure after this point still leaves the user hidden.
        listings = await self.store.update_listings(user_id, {"is_visible": active})
        profiles = 0
        for role in USER_ROLES:
            if await self.store.update_role_profile(role, user_id, {"is_active": active}) is not None:
                profiles += 1
        logger.info(
            "Account %s user_id=%s listings=%d profiles=%d",
            "reactivated" if active else "deactivated",
            user_id,
            len(listings),
            profiles,
        )
        return AccountStatus(
            user_id=user_id,
            is_active=active,
            listings_updated=len(listings),
            profiles_updated=profiles,
        )

    async def _verification(self, user_id: str) -> VerificationStatus:
        passion_type = await self._passion_type(user_id)
        if passion_type is None:
            return VerificationStatus(user_id=user_id)
        record = await self.store.get_role_profile(passion_type, user_id)
        return VerificationStatus(
            user_id=user_id,
            passion_type=passion_type,
            is_verified=_verified(record) if record is not None else False,
        )

    async def _set_verification(
        self, user_id: str, is_verified: bool, passion_type: Optional[str]
    ) -> VerificationStatus:
        if passion_type is None:
            passion_type = await self._passion_type(user_id)
            if passion_type is None:
                raise NotFoundError(f"No guide or hotel profile for user {user_id}")
        validate_passion_type(passion_type)
        column = "verified" if passion_type == TOUR_GUIDE else "is_verified"
        record = await self.store.update_role_profile(passion_type, user_id, {column: is_verified})
        if record is None:
            raise NotFoundError(f"No {passion_type} profile for user {user_id}")
        logger.info("Verification set user_id=%s passion_type=%s verified=%s", user_id, passion_type, is_verified)
        return VerificationStatus(user_id=user_id, passion_type=passion_type, is_verified=_verified(record))

    # -------------------------------------------------------------------------
    # Public operations (return ServiceResult)
    # -------------------------------------------------------------------------

    async def get_preferences(self, user_id: str) -> ServiceResult[VisibilityPreferencesRecord]:
        return await as_result("get_preferences", self._preferences(user_id))

    async def set_preferences(
        self, user_id: str, update: PreferencesUpdate
    ) -> ServiceResult[VisibilityPreferencesRecord]:
        """Merge the explicitly-set fields of ``update`` into stored preferences."""
        return await as_result(
            "set_preferences",
            self._save_preferences(user_id, update.model_dump(exclude_unset=True)),
        )

    async def set_field_visibility(
        self, user_id: str, settings: list[FieldVisibility]
    ) -> ServiceResult[VisibilityPreferencesRecord]:
        fields = {}
        for s in settings:
            flag = FIELD_FLAGS.get(s.field)
            if flag is None:
                continue  # unknown names are ignored
            fields[flag] = s.visible
        return await as_result("set_field_visibility", self._save_preferences(user_id, fields))

    async def is_listing_visible(self, user_id: str) -> ServiceResult[bool]:
        async def run():
            listings = await self.store.list_user_listings(user_id)
            return any(l.is_visible for l in listings)

        return await as_result("is_listing_visible", run())

    async def set_listing_visibility(
        self, user_id: str, visible: bool, passion_type: Optional[str] = None
    ) -> ServiceResult[list[DirectoryListingRecord]]:
        async def run():
            if passion_type is not None:
                validate_passion_type(passion_type)
            return await self.store.update_listings(user_id, {"is_visible": visible}, passion_type)

        return await as_result("set_listing_visibility", run())

    async def get_passion_type(self, user_id: str) -> ServiceResult[Optional[str]]:
        return await as_result("get_passion_type", self._passion_type(user_id))

    async def build_public_profile(self, user_id: str) -> ServiceResult[Optional[PublicProfile]]:
        return await as_result("build_public_profile", self._public_profile(user_id))

    async def deactivate_account(self, user_id: str) -> ServiceResult[AccountStatus]:
        return await as_result("deactivate_account", self._set_active(user_id, False))

    async def reactivate_account(self, user_id: str) -> ServiceResult[AccountStatus]:
        return await as_result("reactivate_account", self._set_active(user_id, True))

    async def check_verification_status(self, user_id: str) -> ServiceResult[VerificationStatus]:
        return await as_result("check_verification_status", self._verification(user_id))

    async def update_verification_status(
        self, user_id: str, is_verified: bool, passion_type: Optional[str] = None
    ) -> ServiceResult[VerificationStatus]:
        """Admin-only; the caller's role is checked at the HTTP layer."""
        return await as_result(
            "update_verification_status",
            self._set_verification(user_id, is_verified, passion_type),
        )
