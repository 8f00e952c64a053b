"""Role registration: persists the role profile and keeps its directory listing in step."""

import logging
from typing import Any

from pydantic import BaseModel

from tourism_directory.core.constants import HOTEL_PARTNER, LISTABLE_PASSION_TYPES, TOUR_GUIDE, TOURIST, USER_ROLES
from tourism_directory.errors import InvalidPassionTypeError
from tourism_directory.schemas.common import ServiceResult
from tourism_directory.schemas.registration import (
    HotelPartnerRegistration,
    RegistrationOutcome,
    RegistrationStatus,
    TourGuideRegistration,
    TouristRegistration,
)
from tourism_directory.services.directory import certify_listing
from tourism_directory.services.eligibility import is_complete, listing_keywords
from tourism_directory.services.results import as_result
from tourism_directory.store.base import RecordStore

logger = logging.getLogger(__name__)

REGISTRATION_SCHEMAS: dict[str, type[BaseModel]] = {
    TOURIST: TouristRegistration,
    TOUR_GUIDE: TourGuideRegistration,
    HOTEL_PARTNER: HotelPartnerRegistration,
}


def parse_registration(role: str, payload: dict[str, Any]) -> BaseModel:
    """Validate a raw registration body against the role's schema (raises ValidationError)."""
    if role not in REGISTRATION_SCHEMAS:
        raise InvalidPassionTypeError(role)
    return REGISTRATION_SCHEMAS[role].model_validate(payload)


class RegistrationService:
    def __init__(self, store: RecordStore):
        self.store = store

    async def _sync_listing(self, user_id: str, role: str, record) -> bool:
        """Upsert the listing of a complete profile (keeping its visibility), remove it otherwise."""
        if not is_complete(record, role):
            removed = await self.store.delete_listings(user_id, role)
            if removed:
                logger.info("Listing removed for incomplete profile user_id=%s role=%s", user_id, role)
            return False
        await certify_listing(self.store, user_id, role, listing_keywords(record, role))
        return True

    async def _register(self, user_id: str, role: str, data: BaseModel) -> RegistrationOutcome:
        if role not in USER_ROLES:
            raise InvalidPassionTypeError(role)
        # Creates the account row when missing; role tables reference it.
        await self.store.set_profile_role(user_id, role)
        await self.store.add_passion(user_id, role)
        fields = {**data.model_dump(), "is_active": True}
        record = await self.store.upsert_role_profile(role, user_id, fields)
        listed = False
        if role in LISTABLE_PASSION_TYPES:
            listed = await self._sync_listing(user_id, role, record)
        logger.info("Registered user_id=%s role=%s listed=%s", user_id, role, listed)
        return RegistrationOutcome(role=role, listed=listed)

    async def _status(self, user_id: str, role: str) -> RegistrationStatus:
        if role not in USER_ROLES:
            raise InvalidPassionTypeError(role)
        passions = await self.store.list_passions(user_id)
        passion = next((p for p in passions if p.passion == role), None)
        if passion is None:
            return RegistrationStatus(role=role, status="pending")
        record = await self.store.get_role_profile(role, user_id)
        return RegistrationStatus(
            role=role,
            status="completed" if record is not None else "pending",
            registered_at=passion.created_at,
            updated_at=record.updated_at if record is not None else None,
        )

    async def register_for_role(
        self, user_id: str, role: str, data: BaseModel
    ) -> ServiceResult[RegistrationOutcome]:
        return await as_result("register_for_role", self._register(user_id, role, data))

    async def get_registration_status(self, user_id: str, role: str) -> ServiceResult[RegistrationStatus]:
        return await as_result("get_registration_status", self._status(user_id, role))

    async def get_all_registration_statuses(self, user_id: str) -> ServiceResult[list[RegistrationStatus]]:
        async def run():
            return [await self._status(user_id, role) for role in USER_ROLES]

        return await as_result("get_all_registration_statuses", run())
