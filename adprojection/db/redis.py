"""Shared Redis client backing the per-scenario run locks."""

import asyncio
import logging
from typing import TYPE_CHECKING

import redis.asyncio as aioredis
from redis.asyncio import ConnectionPool
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff

from adprojection.core.config import settings

if TYPE_CHECKING:
    from redis.asyncio import Redis
else:
    Redis = object  # type: ignore[misc,assignment]

logger = logging.getLogger(__name__)

# Resends per lock command on a dropped connection
LOCK_RETRY_ATTEMPTS = 2

redis_client: "Redis | None" = None
redis_pool: ConnectionPool | None = None
_init_lock = asyncio.Lock()


def build_pool() -> ConnectionPool:
    """Connection pool sized for short lock commands, not long-lived streams."""
    return ConnectionPool.from_url(
        str(settings.REDIS_URL),
        encoding="utf-8",
        decode_responses=True,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_keepalive=True,
        health_check_interval=30,
    )


async def get_redis() -> "Redis":
    """Return the shared client, connecting on first use.

    Raises:
        redis.exceptions.ConnectionError: If Redis cannot be reached
    """
    global redis_client, redis_pool

    async with _init_lock:
        if redis_client is None:
            pool = build_pool()
            client = aioredis.Redis(
                connection_pool=pool,
                retry=Retry(ExponentialBackoff(cap=1.0), retries=LOCK_RETRY_ATTEMPTS),
                retry_on_error=[aioredis.ConnectionError, aioredis.TimeoutError],
            )
            try:
                await client.ping()
            except Exception:
                logger.exception("Failed to connect to Redis at %s", settings.REDIS_HOST)
                await pool.disconnect()
                raise

            redis_client, redis_pool = client, pool
            logger.info(
                "Redis ready for run locks (max_connections=%d)", settings.REDIS_MAX_CONNECTIONS
            )

    return redis_client


async def close_redis() -> None:
    """Close the shared client and its pool."""
    global redis_client, redis_pool

    client, pool = redis_client, redis_pool
    redis_client = redis_pool = None

    if client is not None:
        try:
            await client.aclose()
        except Exception:
            logger.exception("Error closing Redis client")

    if pool is not None:
        try:
            await pool.disconnect()
            logger.info("Redis connection pool closed")
        except Exception:
            logger.exception("Error closing Redis pool")
