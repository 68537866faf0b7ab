"""Redis-backed per-scenario run locks."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from redis.asyncio.lock import Lock
from redis.exceptions import LockError, LockNotOwnedError

from adprojection.core.config import settings
from adprojection.core.exceptions import ProjectionInProgressError
from adprojection.db.redis import get_redis

logger = logging.getLogger(__name__)

LOCK_PREFIX = "projection:lock"


def _lock_key(scenario_id: str) -> str:
    return f"{LOCK_PREFIX}:{scenario_id}"


@asynccontextmanager
async def scenario_lock(
    scenario_id: str, redis: Any | None = None, ttl: int | None = None
) -> AsyncIterator[Lock]:
    """Hold the run lock for a scenario for the duration of the block.

    The lock is a redis-py ``Lock``: acquired with ``SET NX PX`` under a random
    token and released by a Lua script that deletes the key only while it
    still holds that token.

    Args:
        scenario_id: Scenario being projected
        redis: Redis client (defaults to the shared client)
        ttl: Lock expiry in seconds (defaults to PROJECTION_LOCK_TTL_SECONDS)

    Raises:
        ProjectionInProgressError: If another run already holds the lock

    Example:
        async with scenario_lock(scenario_id):
            await run_projection(db, scenario_id, months)
    """
    client = redis if redis is not None else await get_redis()
    lock = client.lock(
        _lock_key(scenario_id),
        timeout=ttl or settings.PROJECTION_LOCK_TTL_SECONDS,
        blocking=False,
        thread_local=False,
    )

    try:
        acquired = await lock.acquire()
    except LockError:
        logger.warning("Projection lock unavailable: %s", scenario_id, exc_info=True)
        acquired = False
    if not acquired:
        logger.info("Projection lock busy: %s", scenario_id)
        raise ProjectionInProgressError(scenario_id)

    logger.debug("Projection lock acquired: %s", scenario_id)
    try:
        yield lock
    finally:
        try:
            await lock.release()
            logger.debug("Projection lock released: %s", scenario_id)
        except LockNotOwnedError:
            # Expired mid-run and possibly taken by another run; leave it alone
            logger.warning("Projection lock lost before release: %s", scenario_id)
        except LockError:
            logger.exception("Error releasing projection lock: %s", scenario_id)
