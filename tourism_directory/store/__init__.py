"""Record-store implementations and the backend factory."""

from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tourism_directory.core.config import get_settings
from tourism_directory.store.base import RecordStore
from tourism_directory.store.criteria import GuideCriteria, HotelCriteria
from tourism_directory.store.memory import InMemoryRecordStore
from tourism_directory.store.sql import SqlRecordStore


@lru_cache
def get_memory_store() -> InMemoryRecordStore:
    """Process-wide in-memory store (STORE_BACKEND=memory)."""
    return InMemoryRecordStore()


def make_store(session: Optional[AsyncSession] = None) -> RecordStore:
    backend = get_settings().store_backend
    if backend == "memory":
        return get_memory_store()
    if backend == "sql":
        if session is None:
            raise RuntimeError("SQL record store needs a database session.")
        return SqlRecordStore(session)
    raise RuntimeError(f"Unknown STORE_BACKEND {backend!r}. Use 'sql' or 'memory'.")


__all__ = [
    "RecordStore",
    "SqlRecordStore",
    "InMemoryRecordStore",
    "GuideCriteria",
    "HotelCriteria",
    "get_memory_store",
    "make_store",
]
