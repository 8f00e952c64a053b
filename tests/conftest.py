"""Shared test fixtures for the tourism directory tests."""

import os

# Must be set before tourism_directory is imported (settings and limiter read them at import).
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from tourism_directory.core import get_settings, limiter
from tourism_directory.core.constants import HOTEL_PARTNER, TOUR_GUIDE
from tourism_directory.services import DirectoryService, RegistrationService, SearchEngine, VisibilityManager
from tourism_directory.store import InMemoryRecordStore

limiter.enabled = False

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
OLD = NOW - timedelta(days=365)


def fixed_clock() -> datetime:
    return NOW


def complete_guide(**overrides) -> dict:
    fields = dict(
        full_name="John Doe",
        phone="+91-9876543210",
        email="john@example.com",
        website="https://johndoe.example.com",
        bio="Walking tours of the old city.",
        address="123 Main St",
        city="Jaipur",
        state="Rajasthan",
        experience_years=5,
        hourly_rate=500,
        specialties=["Historical Tours"],
        languages_spoken=["en", "hi"],
        created_at=OLD,
    )
    fields.update(overrides)
    return fields


def complete_hotel(**overrides) -> dict:
    fields = dict(
        company_name="Lake Palace Stays",
        phone="+91-2212345678",
        email="stay@lakepalace.example.com",
        bio="Rooms on the lake.",
        address="1 Lake Rd",
        city="Udaipur",
        state="Rajasthan",
        hotel_type="Heritage Hotel",
        amenities=["WiFi", "Pool"],
        room_types=["Deluxe"],
        price_min=2500,
        price_max=8000,
        created_at=OLD,
    )
    fields.update(overrides)
    return fields


async def add_guide(store, user_id: str, listed: bool = True, visible: bool = True, **overrides):
    record = await store.upsert_role_profile(TOUR_GUIDE, user_id, complete_guide(**overrides))
    if listed:
        await store.upsert_listing(user_id, TOUR_GUIDE, {"is_visible": visible})
    return record


async def add_hotel(store, user_id: str, listed: bool = True, visible: bool = True, **overrides):
    record = await store.upsert_role_profile(HOTEL_PARTNER, user_id, complete_hotel(**overrides))
    if listed:
        await store.upsert_listing(user_id, HOTEL_PARTNER, {"is_visible": visible})
    return record


def make_token(user_id: str) -> str:
    s = get_settings()
    return jwt.encode({"sub": user_id}, s.jwt_secret, algorithm=s.jwt_algorithm)


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def directory(store):
    return DirectoryService(store, clock=fixed_clock)


@pytest.fixture
def visibility(store):
    return VisibilityManager(store, clock=fixed_clock)


@pytest.fixture
def engine(store):
    return SearchEngine(store, clock=fixed_clock)


@pytest.fixture
def registrations(store):
    return RegistrationService(store)
