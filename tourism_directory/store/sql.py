"""PostgreSQL record store on an async SQLAlchemy session.

The store never commits; the request-scoped session owner (``get_db``) does.
Every call runs in a SAVEPOINT: a failed statement undoes only that call's
writes and surfaces as ``StoreError``, so batch sync keeps earlier rows.
"""

import logging
from datetime import datetime
from functools import wraps
from typing import Any, Optional

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE, TOURIST
from tourism_directory.db.models import (
    DirectoryListing,
    HotelPartner,
    Profile,
    TourGuide,
    Tourist,
    UserPassion,
    VisibilityPreferences,
)
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
from tourism_directory.store.criteria import GuideCriteria, HotelCriteria, normalize_text
from tourism_directory.utils import utcnow

logger = logging.getLogger(__name__)

_ROLE_TABLES = {
    TOURIST: (Tourist, TouristRecord),
    TOUR_GUIDE: (TourGuide, TourGuideRecord),
    HOTEL_PARTNER: (HotelPartner, HotelPartnerRecord),
}

LIKE_ESCAPE = "\\"


def like_pattern(value: str) -> str:
    """``%value%`` with LIKE wildcards in ``value`` matched literally."""
    escaped = (
        value.strip()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _ilike(column, pattern: str):
    return column.ilike(pattern, escape=LIKE_ESCAPE)


def _any_element_ilike(column, pattern: str):
    """EXISTS (SELECT FROM unnest(column) WHERE element ILIKE pattern)."""
    element = func.unnest(column).column_valued("element")
    return select(element).where(_ilike(element, pattern)).exists()


def guide_query(criteria: GuideCriteria) -> Select:
    stmt = select(TourGuide)
    if criteria.user_ids is not None:
        stmt = stmt.where(TourGuide.user_id.in_(criteria.user_ids))
    text = normalize_text(criteria.text)
    if text:
        pattern = like_pattern(text)
        stmt = stmt.where(
            or_(
                _ilike(TourGuide.full_name, pattern),
                _ilike(TourGuide.company_name, pattern),
                _ilike(TourGuide.bio, pattern),
                _any_element_ilike(TourGuide.specialties, pattern),
            )
        )
    if criteria.city:
        stmt = stmt.where(_ilike(TourGuide.city, like_pattern(criteria.city)))
    if criteria.state:
        stmt = stmt.where(_ilike(TourGuide.state, like_pattern(criteria.state)))
    if criteria.specialties:
        stmt = stmt.where(TourGuide.specialties.overlap(list(criteria.specialties)))
    if criteria.languages:
        stmt = stmt.where(TourGuide.languages_spoken.overlap(list(criteria.languages)))
    if criteria.max_hourly_rate is not None:
        stmt = stmt.where(TourGuide.hourly_rate <= criteria.max_hourly_rate)
    if criteria.min_experience is not None:
        stmt = stmt.where(TourGuide.experience_years >= criteria.min_experience)
    if criteria.is_verified is not None:
        stmt = stmt.where(TourGuide.verified.is_(criteria.is_verified))
    return stmt


def hotel_query(criteria: HotelCriteria) -> Select:
    stmt = select(HotelPartner)
    if criteria.user_ids is not None:
        stmt = stmt.where(HotelPartner.user_id.in_(criteria.user_ids))
    text = normalize_text(criteria.text)
    if text:
        pattern = like_pattern(text)
        stmt = stmt.where(
            or_(
                _ilike(HotelPartner.company_name, pattern),
                _ilike(HotelPartner.bio, pattern),
                _ilike(HotelPartner.hotel_type, pattern),
                _any_element_ilike(HotelPartner.amenities, pattern),
            )
        )
    if criteria.city:
        stmt = stmt.where(_ilike(HotelPartner.city, like_pattern(criteria.city)))
    if criteria.state:
        stmt = stmt.where(_ilike(HotelPartner.state, like_pattern(criteria.state)))
    if criteria.hotel_types:
        stmt = stmt.where(HotelPartner.hotel_type.in_(criteria.hotel_types))
    if criteria.amenities:
        stmt = stmt.where(HotelPartner.amenities.overlap(list(criteria.amenities)))
    if criteria.is_verified is not None:
        stmt = stmt.where(HotelPartner.is_verified.is_(criteria.is_verified))
    if criteria.price_min is not None:
        stmt = stmt.where(HotelPartner.price_min >= criteria.price_min)
    if criteria.price_max is not None:
        stmt = stmt.where(HotelPartner.price_max <= criteria.price_max)
    return stmt


def guide_terms_query(text: str, user_ids: list[str], limit: int) -> Select:
    pattern = like_pattern(text)
    return (
        select(TourGuide)
        .where(TourGuide.user_id.in_(user_ids))
        .where(
            or_(
                _ilike(TourGuide.full_name, pattern),
                _ilike(TourGuide.company_name, pattern),
                _ilike(TourGuide.city, pattern),
                _ilike(TourGuide.state, pattern),
                _any_element_ilike(TourGuide.specialties, pattern),
            )
        )
        .limit(limit)
    )


def hotel_terms_query(text: str, user_ids: list[str], limit: int) -> Select:
    pattern = like_pattern(text)
    return (
        select(HotelPartner)
        .where(HotelPartner.user_id.in_(user_ids))
        .where(
            or_(
                _ilike(HotelPartner.company_name, pattern),
                _ilike(HotelPartner.city, pattern),
                _ilike(HotelPartner.state, pattern),
                _ilike(HotelPartner.hotel_type, pattern),
                _any_element_ilike(HotelPartner.amenities, pattern),
            )
        )
        .limit(limit)
    )


def _store_call(fn):
    """Run inside a SAVEPOINT; driver errors undo only this call and become StoreError."""

    @wraps(fn)
    async def wrapper(self, *args, **kwargs):
        try:
            async with self.session.begin_nested():
                return await fn(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.warning("Store call %s failed: %s", fn.__name__, e)
            raise StoreError(str(getattr(e, "orig", None) or e), cause=e) from e

    return wrapper


def _apply(row, fields: dict[str, Any]) -> None:
    for key, value in fields.items():
        setattr(row, key, value)


class SqlRecordStore(RecordStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    def _role(self, role: str):
        try:
            return _ROLE_TABLES[role]
        except KeyError:
            raise StoreError(f'relation for role "{role}" does not exist') from None

    # --- Accounts and role profiles ---

    @_store_call
    async def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        row = await self.session.get(Profile, user_id)
        return ProfileRecord.model_validate(row) if row else None

    @_store_call
    async def set_profile_role(self, user_id: str, role: str) -> ProfileRecord:
        row = await self.session.get(Profile, user_id)
        if row is None:
            row = Profile(id=user_id, user_role=role)
            self.session.add(row)
        else:
            row.user_role = role
            row.updated_at = utcnow()
        await self.session.flush()
        return ProfileRecord.model_validate(row)

    @_store_call
    async def get_role_profile(self, role: str, user_id: str):
        model, record = self._role(role)
        result = await self.session.execute(select(model).where(model.user_id == user_id))
        row = result.scalar_one_or_none()
        return record.model_validate(row) if row else None

    @_store_call
    async def upsert_role_profile(self, role: str, user_id: str, fields: dict[str, Any]):
        model, record = self._role(role)
        result = await self.session.execute(select(model).where(model.user_id == user_id))
        row = result.scalar_one_or_none()
        if row is None:
            row = model(user_id=user_id)
            self.session.add(row)
        else:
            row.updated_at = utcnow()
        _apply(row, fields)
        await self.session.flush()
        return record.model_validate(row)

    @_store_call
    async def update_role_profile(self, role: str, user_id: str, fields: dict[str, Any]):
        model, record = self._role(role)
        result = await self.session.execute(select(model).where(model.user_id == user_id))
        row = result.scalar_one_or_none()
        if row is None:
            return None
        _apply(row, fields)
        row.updated_at = utcnow()
        await self.session.flush()
        return record.model_validate(row)

    @_store_call
    async def list_role_profiles(self, role: str) -> list:
        model, record = self._role(role)
        result = await self.session.execute(select(model).order_by(model.created_at.asc()))
        return [record.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def query_guides(self, criteria: GuideCriteria) -> list[TourGuideRecord]:
        result = await self.session.execute(guide_query(criteria))
        return [TourGuideRecord.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def query_hotels(self, criteria: HotelCriteria) -> list[HotelPartnerRecord]:
        result = await self.session.execute(hotel_query(criteria))
        return [HotelPartnerRecord.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def match_guide_terms(self, text: str, user_ids: list[str], limit: int) -> list[TourGuideRecord]:
        result = await self.session.execute(guide_terms_query(text, user_ids, limit))
        return [TourGuideRecord.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def match_hotel_terms(self, text: str, user_ids: list[str], limit: int) -> list[HotelPartnerRecord]:
        result = await self.session.execute(hotel_terms_query(text, user_ids, limit))
        return [HotelPartnerRecord.model_validate(r) for r in result.scalars().all()]

    # --- Passions ---

    @_store_call
    async def list_passions(self, user_id: str) -> list[UserPassionRecord]:
        result = await self.session.execute(
            select(UserPassion).where(UserPassion.user_id == user_id).order_by(UserPassion.created_at.asc())
        )
        return [UserPassionRecord.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def add_passion(self, user_id: str, passion: str) -> UserPassionRecord:
        result = await self.session.execute(
            select(UserPassion).where(UserPassion.user_id == user_id, UserPassion.passion == passion)
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = UserPassion(user_id=user_id, passion=passion)
            self.session.add(row)
            await self.session.flush()
        return UserPassionRecord.model_validate(row)

    # --- Directory listings ---

    async def _listing_row(self, user_id: str, passion_type: str) -> Optional[DirectoryListing]:
        result = await self.session.execute(
            select(DirectoryListing).where(
                DirectoryListing.user_id == user_id,
                DirectoryListing.passion_type == passion_type,
            )
        )
        return result.scalar_one_or_none()

    @_store_call
    async def get_listing(self, user_id: str, passion_type: str) -> Optional[DirectoryListingRecord]:
        row = await self._listing_row(user_id, passion_type)
        return DirectoryListingRecord.model_validate(row) if row else None

    @_store_call
    async def list_user_listings(self, user_id: str) -> list[DirectoryListingRecord]:
        result = await self.session.execute(
            select(DirectoryListing)
            .where(DirectoryListing.user_id == user_id)
            .order_by(DirectoryListing.created_at.asc())
        )
        return [DirectoryListingRecord.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def list_listings(
        self,
        passion_type: Optional[str] = None,
        is_visible: Optional[bool] = None,
    ) -> list[DirectoryListingRecord]:
        stmt = select(DirectoryListing)
        if passion_type is not None:
            stmt = stmt.where(DirectoryListing.passion_type == passion_type)
        if is_visible is not None:
            stmt = stmt.where(DirectoryListing.is_visible.is_(is_visible))
        stmt = stmt.order_by(
            DirectoryListing.listing_priority.desc(),
            DirectoryListing.last_updated.desc(),
        )
        result = await self.session.execute(stmt)
        return [DirectoryListingRecord.model_validate(r) for r in result.scalars().all()]

    @_store_call
    async def visible_listing_user_ids(self, passion_type: str) -> list[str]:
        result = await self.session.execute(
            select(DirectoryListing.user_id).where(
                DirectoryListing.passion_type == passion_type,
                DirectoryListing.is_visible.is_(True),
            )
        )
        return [str(uid) for uid in result.scalars().all()]

    @_store_call
    async def upsert_listing(
        self, user_id: str, passion_type: str, fields: dict[str, Any]
    ) -> DirectoryListingRecord:
        row = await self._listing_row(user_id, passion_type)
        if row is None:
            row = DirectoryListing(user_id=user_id, passion_type=passion_type)
            self.session.add(row)
        _apply(row, fields)
        row.last_updated = utcnow()
        await self.session.flush()
        return DirectoryListingRecord.model_validate(row)

    @_store_call
    async def update_listings(
        self, user_id: str, fields: dict[str, Any], passion_type: Optional[str] = None
    ) -> list[DirectoryListingRecord]:
        stmt = select(DirectoryListing).where(DirectoryListing.user_id == user_id)
        if passion_type is not None:
            stmt = stmt.where(DirectoryListing.passion_type == passion_type)
        rows = (await self.session.execute(stmt.order_by(DirectoryListing.created_at.asc()))).scalars().all()
        now = utcnow()
        for row in rows:
            _apply(row, fields)
            row.last_updated = now
        await self.session.flush()
        return [DirectoryListingRecord.model_validate(r) for r in rows]

    @_store_call
    async def delete_listings(self, user_id: str, passion_type: Optional[str] = None) -> int:
        stmt = delete(DirectoryListing).where(DirectoryListing.user_id == user_id)
        if passion_type is not None:
            stmt = stmt.where(DirectoryListing.passion_type == passion_type)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    @_store_call
    async def touch_visible_listings(self, now: datetime) -> int:
        result = await self.session.execute(
            update(DirectoryListing)
            .where(DirectoryListing.is_visible.is_(True))
            .values(last_updated=now)
        )
        return result.rowcount or 0

    # --- Visibility preferences ---

    @_store_call
    async def get_preferences(self, user_id: str) -> Optional[VisibilityPreferencesRecord]:
        result = await self.session.execute(
            select(VisibilityPreferences).where(VisibilityPreferences.user_id == user_id)
        )
        row = result.scalar_one_or_none()
        return VisibilityPreferencesRecord.model_validate(row) if row else None

    @_store_call
    async def list_preferences(self, user_ids: list[str]) -> dict[str, VisibilityPreferencesRecord]:
        if not user_ids:
            return {}
        result = await self.session.execute(
            select(VisibilityPreferences).where(VisibilityPreferences.user_id.in_(user_ids))
        )
        return {
            str(r.user_id): VisibilityPreferencesRecord.model_validate(r)
            for r in result.scalars().all()
        }

    @_store_call
    async def upsert_preferences(
        self, user_id: str, fields: dict[str, Any]
    ) -> VisibilityPreferencesRecord:
        result = await self.session.execute(
            select(VisibilityPreferences).where(VisibilityPreferences.user_id == user_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = VisibilityPreferences(user_id=user_id)
            self.session.add(row)
        _apply(row, fields)
        if "updated_at" not in fields:
            row.updated_at = utcnow()
        await self.session.flush()
        return VisibilityPreferencesRecord.model_validate(row)
