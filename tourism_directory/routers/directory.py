from typing import Optional

from fastapi import APIRouter, Depends, Query

from tourism_directory.dependencies import get_current_user_id, get_directory_service
from tourism_directory.domain import DirectoryListingRecord, PassionType
from tourism_directory.schemas import (
    CreateListingRequest,
    EligibilityResponse,
    ListingUpdate,
    PatchListingRequest,
    RemovedListingsResponse,
)
from tourism_directory.services.directory import DirectoryService
from .responses import unwrap

router = APIRouter(prefix="/directory", tags=["directory"])


@router.post("/listings/{passion_type}", response_model=DirectoryListingRecord)
async def create_listing(
    passion_type: str,
    body: Optional[CreateListingRequest] = None,
    user_id: str = Depends(get_current_user_id),
    service: DirectoryService = Depends(get_directory_service),
):
    keywords = body.keywords if body else None
    return unwrap(await service.create_listing(user_id, passion_type, keywords))


@router.patch("/listings", response_model=list[DirectoryListingRecord])
async def update_listing(
    body: PatchListingRequest,
    user_id: str = Depends(get_current_user_id),
    service: DirectoryService = Depends(get_directory_service),
):
    updates = ListingUpdate(**body.model_dump(exclude_unset=True, exclude={"passion_type"}))
    return unwrap(await service.update_listing(user_id, updates, body.passion_type))


@router.delete("/listings", response_model=RemovedListingsResponse)
async def remove_listing(
    passion_type: Optional[PassionType] = Query(None),
    user_id: str = Depends(get_current_user_id),
    service: DirectoryService = Depends(get_directory_service),
):
    return RemovedListingsResponse(removed=unwrap(await service.remove_listing(user_id, passion_type)))


@router.get("/listings/me", response_model=list[DirectoryListingRecord])
async def get_my_listings(
    user_id: str = Depends(get_current_user_id),
    service: DirectoryService = Depends(get_directory_service),
):
    return unwrap(await service.get_visibility_status(user_id))


@router.get("/listings", response_model=list[DirectoryListingRecord])
async def get_public_listings(
    passion_type: Optional[PassionType] = Query(None),
    service: DirectoryService = Depends(get_directory_service),
):
    """Visible listings ordered by priority, then most recently updated."""
    return unwrap(await service.get_public_listings(passion_type))


@router.get("/eligibility/{passion_type}", response_model=EligibilityResponse)
async def check_eligibility(
    passion_type: str,
    user_id: str = Depends(get_current_user_id),
    service: DirectoryService = Depends(get_directory_service),
):
    complete = unwrap(await service.check_complete(user_id, passion_type))
    return EligibilityResponse(user_id=user_id, passion_type=passion_type, complete=complete)
