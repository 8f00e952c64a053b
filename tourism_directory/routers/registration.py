from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from tourism_directory.dependencies import get_current_user_id, get_registration_service
from tourism_directory.errors import InvalidPassionTypeError
from tourism_directory.schemas import RegistrationOutcome, RegistrationStatus
from tourism_directory.services.registration import RegistrationService, parse_registration
from .responses import unwrap

router = APIRouter(prefix="/registrations", tags=["registration"])


@router.post("/{role}", response_model=RegistrationOutcome)
async def register_for_role(
    role: str,
    body: dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user_id),
    service: RegistrationService = Depends(get_registration_service),
):
    """Save the caller's profile for ``role``; complete guide/hotel profiles are listed."""
    try:
        data = parse_registration(role, body)
    except InvalidPassionTypeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
    return unwrap(await service.register_for_role(user_id, role, data))


@router.get("", response_model=list[RegistrationStatus])
async def get_all_registration_statuses(
    user_id: str = Depends(get_current_user_id),
    service: RegistrationService = Depends(get_registration_service),
):
    return unwrap(await service.get_all_registration_statuses(user_id))


@router.get("/{role}", response_model=RegistrationStatus)
async def get_registration_status(
    role: str,
    user_id: str = Depends(get_current_user_id),
    service: RegistrationService = Depends(get_registration_service),
):
    return unwrap(await service.get_registration_status(user_id, role))
