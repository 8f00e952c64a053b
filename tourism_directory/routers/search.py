from fastapi import APIRouter, Depends, Query, Request

from tourism_directory.core import get_settings, limiter
from tourism_directory.dependencies import get_search_engine
from tourism_directory.schemas import (
    GuideSearchResult,
    HotelSearchResult,
    PopularSearchesResponse,
    SearchRequest,
    SearchResponse,
    SuggestionsResponse,
)
from tourism_directory.services.search import SearchEngine
from .responses import raise_for_failure, unwrap

router = APIRouter(prefix="/search", tags=["search"])

_settings = get_settings()


@router.post("/guides", response_model=SearchResponse[GuideSearchResult])
@limiter.limit(_settings.search_rate_limit)
async def search_guides(
    request: Request,
    body: SearchRequest,
    engine: SearchEngine = Depends(get_search_engine),
):
    result = await engine.search_guides(body, body.distances)
    raise_for_failure(result)
    return result


@router.post("/hotels", response_model=SearchResponse[HotelSearchResult])
@limiter.limit(_settings.search_rate_limit)
async def search_hotels(
    request: Request,
    body: SearchRequest,
    engine: SearchEngine = Depends(get_search_engine),
):
    result = await engine.search_hotels(body, body.distances)
    raise_for_failure(result)
    return result


@router.get("/suggestions", response_model=SuggestionsResponse)
@limiter.limit(_settings.suggest_rate_limit)
async def get_suggestions(
    request: Request,
    q: str = Query("", max_length=100),
    engine: SearchEngine = Depends(get_search_engine),
):
    return SuggestionsResponse(suggestions=unwrap(await engine.get_suggestions(q)))


@router.get("/popular", response_model=PopularSearchesResponse)
async def get_popular_searches(engine: SearchEngine = Depends(get_search_engine)):
    return PopularSearchesResponse(searches=unwrap(await engine.get_popular_searches()))
