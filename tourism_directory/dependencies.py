from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tourism_directory.core import ADMIN_ROLE, decode_access_token
from tourism_directory.db.session import async_session
from tourism_directory.errors import StoreError
from tourism_directory.services import DirectoryService, RegistrationService, SearchEngine, VisibilityManager
from tourism_directory.store import RecordStore, make_store

security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> RecordStore:
    return make_store(db)


def get_directory_service(store: Annotated[RecordStore, Depends(get_store)]) -> DirectoryService:
    return DirectoryService(store)


def get_visibility_manager(store: Annotated[RecordStore, Depends(get_store)]) -> VisibilityManager:
    return VisibilityManager(store)


def get_search_engine(store: Annotated[RecordStore, Depends(get_store)]) -> SearchEngine:
    return SearchEngine(store)


def get_registration_service(store: Annotated[RecordStore, Depends(get_store)]) -> RegistrationService:
    return RegistrationService(store)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """User id from a bearer token issued by the hosted auth backend."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


async def require_admin(
    user_id: Annotated[str, Depends(get_current_user_id)],
    store: Annotated[RecordStore, Depends(get_store)],
) -> str:
    try:
        profile = await store.get_profile(user_id)
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message) from e
    if profile is None or profile.user_role != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator access required")
    return user_id
