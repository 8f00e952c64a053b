"""
Seed sample tour guides and hotel partners, then sync their directory listings.

Run from repo root:
  python scripts/seed_directory.py
"""
import asyncio
import logging
import random
import sys
import uuid
from pathlib import Path

# Ensure the repo root is on path so "tourism_directory" resolves
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from tourism_directory.core import HOTEL_PARTNER, TOUR_GUIDE, get_settings
from tourism_directory.db.session import async_session
from tourism_directory.schemas import HotelPartnerRegistration, TourGuideRegistration
from tourism_directory.services import DirectoryService, RegistrationService
from tourism_directory.store import SqlRecordStore

logger = logging.getLogger(__name__)

CITIES = [
    ("Delhi", "Delhi"),
    ("Mumbai", "Maharashtra"),
    ("Panaji", "Goa"),
    ("Jaipur", "Rajasthan"),
    ("Udaipur", "Rajasthan"),
    ("Kochi", "Kerala"),
    ("Varanasi", "Uttar Pradesh"),
    ("Agra", "Uttar Pradesh"),
]

SPECIALTIES = [
    "Historical Tours",
    "Adventure Tours",
    "Wildlife Tours",
    "Cultural Tours",
    "Food Walks",
    "Photography Tours",
]
LANGUAGES = ["en", "hi", "mr", "ta", "ml", "fr", "de"]
HOTEL_TYPES = ["Heritage Hotel", "Beach Resort", "Boutique Hotel", "Homestay", "Business Hotel"]
AMENITIES = ["WiFi", "Pool", "Spa", "Parking", "Restaurant", "Airport Shuttle", "Gym"]
FIRST_NAMES = ["Aarav", "Diya", "Kabir", "Meera", "Rohan", "Saanvi", "Vikram", "Ananya"]
LAST_NAMES = ["Sharma", "Iyer", "Patel", "Khan", "Menon", "Singh", "Das", "Rao"]

NUM_GUIDES = 12
NUM_HOTELS = 8
# Share of profiles left incomplete so the eligibility gate has something to reject
INCOMPLETE_SHARE = 0.2


def _guide(i: int) -> TourGuideRegistration:
    city, state = random.choice(CITIES)
    name = f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"
    complete = random.random() > INCOMPLETE_SHARE
    return TourGuideRegistration(
        full_name=name,
        phone=f"+91-98{random.randint(10_000_000, 99_999_999)}",
        email=f"guide{i}@example.com",
        bio=f"{name} has been guiding visitors around {city} for years.",
        address=f"{random.randint(1, 200)} Main Road, {city}" if complete else None,
        city=city,
        state=state,
        specialties=random.sample(SPECIALTIES, random.randint(1, 3)),
        languages_spoken=random.sample(LANGUAGES, random.randint(1, 3)),
        experience_years=random.randint(0, 20),
        hourly_rate=float(random.choice([300, 500, 750, 1000, 1500])),
    )


def _hotel(i: int) -> HotelPartnerRegistration:
    city, state = random.choice(CITIES)
    hotel_type = random.choice(HOTEL_TYPES)
    complete = random.random() > INCOMPLETE_SHARE
    price_min = float(random.choice([1500, 2500, 4000, 6000]))
    return HotelPartnerRegistration(
        full_name=f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        company_name=f"{city} {hotel_type} {i}",
        phone=f"+91-22{random.randint(10_000_000, 99_999_999)}",
        email=f"hotel{i}@example.com",
        address=f"{random.randint(1, 200)} Lake Road, {city}",
        city=city,
        state=state,
        hotel_type=hotel_type,
        amenities=random.sample(AMENITIES, random.randint(2, 5)) if complete else [],
        room_types=["Standard", "Deluxe"],
        price_min=price_min,
        price_max=price_min * random.choice([2, 3, 4]),
    )


async def run_seed_directory() -> None:
    async with async_session() as session:
        store = SqlRecordStore(session)
        registrations = RegistrationService(store)

        for i in range(NUM_GUIDES):
            result = await registrations.register_for_role(str(uuid.uuid4()), TOUR_GUIDE, _guide(i))
            if not result.success:
                logger.warning("Guide %s not seeded: %s", i, result.error)
        for i in range(NUM_HOTELS):
            result = await registrations.register_for_role(str(uuid.uuid4()), HOTEL_PARTNER, _hotel(i))
            if not result.success:
                logger.warning("Hotel %s not seeded: %s", i, result.error)

        report = await DirectoryService(store).sync_all_listings()
        await session.commit()

    if report.success:
        logger.info(
            "Directory seed done. Guides=%s, hotels=%s, listings synced=%s, errors=%s",
            NUM_GUIDES,
            NUM_HOTELS,
            report.data.synced,
            len(report.data.errors),
        )
    else:
        logger.error("Listing sync failed: %s", report.error)


def main() -> None:
    logging.basicConfig(level=get_settings().log_level.upper())
    asyncio.run(run_seed_directory())


if __name__ == "__main__":
    main()
