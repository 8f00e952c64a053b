from fastapi import APIRouter, Depends, HTTPException, status

from tourism_directory.dependencies import get_visibility_manager
from tourism_directory.schemas import PublicProfile, VerificationStatus
from tourism_directory.services.visibility import VisibilityManager
from .responses import unwrap

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/{user_id}/public", response_model=PublicProfile)
async def get_public_profile(
    user_id: str,
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    profile = unwrap(await manager.build_public_profile(user_id))
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


@router.get("/{user_id}/verification", response_model=VerificationStatus)
async def get_verification_status(
    user_id: str,
    manager: VisibilityManager = Depends(get_visibility_manager),
):
    return unwrap(await manager.check_verification_status(user_id))
