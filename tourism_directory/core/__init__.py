"""Core configuration, auth, and shared infrastructure."""

from tourism_directory.core.config import Settings, get_settings
from tourism_directory.core.constants import (
    TOURIST,
    TOUR_GUIDE,
    HOTEL_PARTNER,
    USER_ROLES,
    LISTABLE_PASSION_TYPES,
    ADMIN_ROLE,
)
from tourism_directory.core.auth import decode_access_token
from tourism_directory.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "TOURIST",
    "TOUR_GUIDE",
    "HOTEL_PARTNER",
    "USER_ROLES",
    "LISTABLE_PASSION_TYPES",
    "ADMIN_ROLE",
    "decode_access_token",
    "limiter",
]
