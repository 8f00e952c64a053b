from .registration import router as registration_router
from .directory import router as directory_router
from .visibility import router as visibility_router
from .profiles import router as profiles_router
from .search import router as search_router
from .admin import router as admin_router

ROUTERS = (
    registration_router,
    directory_router,
    visibility_router,
    profiles_router,
    search_router,
    admin_router,
)

__all__ = [
    "ROUTERS",
    "registration_router",
    "directory_router",
    "visibility_router",
    "profiles_router",
    "search_router",
    "admin_router",
]
