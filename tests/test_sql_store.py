"""Tests for the SQL store's statement building and error handling (no database needed)."""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from tourism_directory.errors import StoreError
from tourism_directory.store import GuideCriteria, HotelCriteria, SqlRecordStore
from tourism_directory.store.sql import guide_query, guide_terms_query, hotel_query, like_pattern


def compiled(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


class RecordingSession:
    """Stands in for AsyncSession; every read fails like a dropped connection."""

    def __init__(self):
        self.events = []

    @asynccontextmanager
    async def begin_nested(self):
        self.events.append("savepoint")
        try:
            yield
        except Exception:
            self.events.append("rollback to savepoint")
            raise
        self.events.append("release savepoint")

    async def rollback(self):
        self.events.append("rollback")

    async def get(self, model, key):
        raise OperationalError("SELECT profiles", {}, Exception("server closed the connection"))


class TestLikePattern:
    def test_plain_text(self):
        assert like_pattern("  Jaipur ") == "%Jaipur%"

    def test_wildcards_are_literal(self):
        assert like_pattern("50%_off") == "%50\\%\\_off%"

    def test_escape_character_is_doubled(self):
        assert like_pattern("a\\b") == "%a\\\\b%"


class TestTextPredicates:
    def test_guide_array_text_matches_per_element(self):
        sql = compiled(guide_query(GuideCriteria(text="tours adventure")))

        assert "array_to_string" not in sql
        assert "EXISTS" in sql
        assert "unnest(tour_guides.specialties)" in sql
        assert "ESCAPE" in sql

    def test_hotel_array_text_matches_per_element(self):
        sql = compiled(hotel_query(HotelCriteria(text="pool")))

        assert "unnest(hotel_partners.amenities)" in sql
        assert "array_to_string" not in sql

    def test_suggestion_terms_match_per_element(self):
        sql = compiled(guide_terms_query("hist", ["u1"], 10))

        assert "unnest(tour_guides.specialties)" in sql
        assert "LIMIT" in sql

    def test_location_filters_escape_wildcards(self):
        sql = compiled(guide_query(GuideCriteria(city="jai", state="raj")))
        assert sql.count("ESCAPE") == 2

    def test_no_text_means_no_text_predicate(self):
        sql = compiled(guide_query(GuideCriteria(user_ids=("u1",))))
        assert "EXISTS" not in sql


class TestStoreCall:
    @pytest.mark.asyncio
    async def test_failure_rolls_back_only_the_savepoint(self):
        session = RecordingSession()
        store = SqlRecordStore(session)

        with pytest.raises(StoreError) as exc_info:
            await store.get_profile("u1")

        assert exc_info.value.message == "server closed the connection"
        assert session.events == ["savepoint", "rollback to savepoint"]
        assert "rollback" not in session.events
