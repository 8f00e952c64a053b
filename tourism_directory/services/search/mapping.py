from typing import Optional

from tourism_directory.domain import HotelPartnerRecord, TourGuideRecord
from tourism_directory.schemas.search import GuideSearchResult, HotelSearchResult, PriceRangeOut


def _common(record, score: int, distance: Optional[float]) -> dict:
    return dict(
        id=record.id,
        user_id=record.user_id,
        company_name=record.company_name,
        bio=record.bio,
        city=record.city,
        state=record.state,
        phone=record.phone,
        email=record.email,
        website=record.website,
        is_verified=bool(record.is_verified),
        is_active=record.is_active is not False,
        created_at=record.created_at,
        # TODO: fill rating and review_count once review aggregation exists
        rating=0,
        review_count=0,
        relevance_score=score,
        distance=distance,
    )


def guide_to_result(record: TourGuideRecord, score: int, distance: Optional[float] = None) -> GuideSearchResult:
    return GuideSearchResult(
        **_common(record, score, distance),
        name=record.full_name,
        specialties=record.specialties,
        languages_spoken=record.languages_spoken,
        certifications=record.certifications,
        experience_years=record.experience_years,
        hourly_rate=record.hourly_rate,
    )


def hotel_to_result(record: HotelPartnerRecord, score: int, distance: Optional[float] = None) -> HotelSearchResult:
    has_price = record.price_min is not None or record.price_max is not None
    return HotelSearchResult(
        **_common(record, score, distance),
        name=record.company_name or record.full_name,
        hotel_type=record.hotel_type,
        amenities=record.amenities,
        room_types=record.room_types,
        images=record.images,
        price_range=PriceRangeOut(min=record.price_min, max=record.price_max) if has_price else None,
    )
