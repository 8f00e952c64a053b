from typing import Optional

from fastapi import APIRouter, Depends, Query

from tourism_directory.dependencies import get_directory_service, get_visibility_manager, require_admin
from tourism_directory.domain import DirectoryListingRecord, PassionType
from tourism_directory.schemas import CountResponse, SyncReport, VerificationStatus, VerificationUpdate
from tourism_directory.services.directory import DirectoryService
from tourism_directory.services.visibility import VisibilityManager
from .responses import unwrap

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.put("/verification/{user_id}", response_model=VerificationStatus)
async def update_verification_status(
    user_id: str,
    body: VerificationUpdate,
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    return unwrap(await manager.update_verification_status(user_id, body.is_verified, body.passion_type))


@router.get("/listings", response_model=list[DirectoryListingRecord])
async def get_listings(
    passion_type: Optional[PassionType] = Query(None),
    is_visible: bool = Query(True),
    service: DirectoryService = Depends(get_directory_service),
):
    """Listings by visibility, including the hidden ones the public route never returns."""
    return unwrap(await service.get_public_listings(passion_type, is_visible))


@router.post("/listings/sync", response_model=SyncReport)
async def sync_all_listings(service: DirectoryService = Depends(get_directory_service)):
    """Re-certify every active guide and hotel profile; new listings for complete ones, keywords for existing."""
    return unwrap(await service.sync_all_listings())


@router.post("/listings/refresh", response_model=CountResponse)
async def refresh_listing_cache(service: DirectoryService = Depends(get_directory_service)):
    return unwrap(await service.refresh_listing_cache())
