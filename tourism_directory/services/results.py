"""Conversion of internal errors into result envelopes at the service boundary."""

import logging
from typing import Awaitable, TypeVar

from tourism_directory.errors import DirectoryError
from tourism_directory.schemas.common import ServiceResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def as_result(op: str, coro: Awaitable[T]) -> ServiceResult[T]:
    """Await ``coro``; typed directory errors become a failed result, anything else propagates."""
    try:
        return ServiceResult.ok(await coro)
    except DirectoryError as e:
        logger.warning("%s failed (%s): %s", op, e.error_type.value, e.message)
        return ServiceResult.fail(e)
