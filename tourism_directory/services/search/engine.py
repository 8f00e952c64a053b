"""Directory search over visible listings.

Pipeline: visible listing ids -> store criteria query -> relevance score ->
result-level filters -> sort -> paginate -> per-owner field redaction.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from tourism_directory.core.constants import (
    HOTEL_PARTNER,
    MAX_SUGGESTIONS,
    MIN_SUGGESTION_QUERY_LENGTH,
    POPULAR_SEARCHES,
    TOUR_GUIDE,
)
from tourism_directory.errors import DirectoryError
from tourism_directory.schemas.common import SearchResponse, ServiceResult
from tourism_directory.schemas.search import GuideSearchResult, HotelSearchResult, SearchQuery
from tourism_directory.services.results import as_result
from tourism_directory.services.visibility import default_preferences, redact_result
from tourism_directory.store.base import RecordStore
from tourism_directory.store.criteria import guide_suggestion_values, hotel_suggestion_values
from tourism_directory.utils import utcnow
from .filters import apply_filters, guide_criteria, hotel_criteria
from .mapping import guide_to_result, hotel_to_result
from .scoring import relevance_score
from .sorting import sort_results
from .suggestions import collect_suggestions

logger = logging.getLogger(__name__)


class SearchEngine:
    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    @staticmethod
    def apply_filters(results: list, filters) -> list:
        return apply_filters(results, filters)

    @staticmethod
    def sort_results(results: list, sort: Optional[str]) -> list:
        return sort_results(results, sort)

    async def _paginate_and_redact(self, results: list, query: SearchQuery) -> SearchResponse:
        p = query.pagination
        total = len(results)
        page = results[p.offset : p.offset + p.limit]
        prefs = await self.store.list_preferences([r.user_id for r in page])
        page = [redact_result(r, prefs.get(r.user_id) or default_preferences(r.user_id)) for r in page]
        return SearchResponse(
            success=True,
            data=page,
            total_count=total,
            page=p.page,
            has_more=p.offset + p.limit < total,
        )

    async def _search_guides(self, query: SearchQuery, distances: dict[str, float]) -> SearchResponse:
        user_ids = await self.store.visible_listing_user_ids(TOUR_GUIDE)
        if not user_ids:
            return SearchResponse.empty(query.pagination.page)
        records = await self.store.query_guides(guide_criteria(query, user_ids))
        now = self.clock()
        results = [
            guide_to_result(r, relevance_score(r, query, now), distances.get(r.user_id))
            for r in records
        ]
        results = sort_results(apply_filters(results, query.filters), query.sort)
        return await self._paginate_and_redact(results, query)

    async def _search_hotels(self, query: SearchQuery, distances: dict[str, float]) -> SearchResponse:
        user_ids = await self.store.visible_listing_user_ids(HOTEL_PARTNER)
        if not user_ids:
            return SearchResponse.empty(query.pagination.page)
        records = await self.store.query_hotels(hotel_criteria(query, user_ids))
        now = self.clock()
        results = [
            hotel_to_result(r, relevance_score(r, query, now), distances.get(r.user_id))
            for r in records
        ]
        results = sort_results(apply_filters(results, query.filters), query.sort)
        return await self._paginate_and_redact(results, query)

    async def search_guides(
        self, query: SearchQuery, distances: Optional[dict[str, float]] = None
    ) -> SearchResponse[GuideSearchResult]:
        try:
            return await self._search_guides(query, distances or {})
        except DirectoryError as e:
            logger.warning("Guide search failed: %s", e.message)
            return SearchResponse.fail(e, query.pagination.page)

    async def search_hotels(
        self, query: SearchQuery, distances: Optional[dict[str, float]] = None
    ) -> SearchResponse[HotelSearchResult]:
        try:
            return await self._search_hotels(query, distances or {})
        except DirectoryError as e:
            logger.warning("Hotel search failed: %s", e.message)
            return SearchResponse.fail(e, query.pagination.page)

    async def _suggestions(self, partial: str) -> list[str]:
        text = (partial or "").strip()
        if len(text) < MIN_SUGGESTION_QUERY_LENGTH:
            return []
        guide_ids = await self.store.visible_listing_user_ids(TOUR_GUIDE)
        hotel_ids = await self.store.visible_listing_user_ids(HOTEL_PARTNER)
        guides = await self.store.match_guide_terms(text, guide_ids, MAX_SUGGESTIONS) if guide_ids else []
        hotels = await self.store.match_hotel_terms(text, hotel_ids, MAX_SUGGESTIONS) if hotel_ids else []
        values = [guide_suggestion_values(g) for g in guides] + [hotel_suggestion_values(h) for h in hotels]
        return collect_suggestions(values, text, MAX_SUGGESTIONS)

    async def get_suggestions(self, partial: str) -> ServiceResult[list[str]]:
        return await as_result("get_suggestions", self._suggestions(partial))

    async def get_popular_searches(self) -> ServiceResult[list[str]]:
        return ServiceResult.ok(list(POPULAR_SEARCHES))
