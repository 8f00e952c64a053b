from fastapi import APIRouter, Depends

from tourism_directory.dependencies import get_current_user_id, get_visibility_manager
from tourism_directory.domain import DirectoryListingRecord, VisibilityPreferencesRecord
from tourism_directory.schemas import (
    AccountStatus,
    FieldVisibilityRequest,
    ListingVisibilityRequest,
    ListingVisibilityResponse,
    PreferencesUpdate,
)
from tourism_directory.services.visibility import VisibilityManager
from .responses import unwrap

router = APIRouter(prefix="/me", tags=["visibility"])


@router.get("/visibility/preferences", response_model=VisibilityPreferencesRecord)
async def get_preferences(
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    """Stored preferences, or all-visible defaults when none were saved."""
    return unwrap(await manager.get_preferences(user_id))


@router.patch("/visibility/preferences", response_model=VisibilityPreferencesRecord)
async def set_preferences(
    body: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    return unwrap(await manager.set_preferences(user_id, body))


@router.put("/visibility/fields", response_model=VisibilityPreferencesRecord)
async def set_field_visibility(
    body: FieldVisibilityRequest,
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    return unwrap(await manager.set_field_visibility(user_id, body.fields))


@router.get("/visibility/listing", response_model=ListingVisibilityResponse)
async def get_listing_visibility(
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    visible = unwrap(await manager.is_listing_visible(user_id))
    return ListingVisibilityResponse(user_id=user_id, is_visible=visible)


@router.put("/visibility/listing", response_model=list[DirectoryListingRecord])
async def set_listing_visibility(
    body: ListingVisibilityRequest,
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    return unwrap(await manager.set_listing_visibility(user_id, body.visible, body.passion_type))


@router.post("/deactivate", response_model=AccountStatus)
async def deactivate_account(
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    """Hide every listing, then mark every role profile inactive."""
    return unwrap(await manager.deactivate_account(user_id))


@router.post("/reactivate", response_model=AccountStatus)
async def reactivate_account(
    user_id: str = Depends(get_current_user_id),
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    return unwrap(await manager.reactivate_account(user_id))
