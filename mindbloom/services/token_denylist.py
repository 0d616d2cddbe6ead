"""Revoked-token store backed by Redis.

Tokens are stateless, so logging out only means something server-side if the
token id is remembered until the token would have expired anyway. Each
revoked ``jti`` is kept under a key whose TTL is the token's remaining life.
"""

import logging
from datetime import UTC, datetime

import redis

from mindbloom.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

KEY_PREFIX = "revoked-token:"

_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get the shared synchronous Redis client."""
    global _sync_redis
    if _sync_redis is None:
        # Bounded so a hung connection still fails open
        _sync_redis = redis.from_url(
            settings.redis_url,
            socket_connect_timeout=settings.redis_timeout_seconds,
            socket_timeout=settings.redis_timeout_seconds,
        )
    return _sync_redis


def revoke_token(jti: str, expires_at: int) -> bool:
    """Remember a token id until its expiry (a unix timestamp).

    Returns False when the denylist could not be written.
    """
    ttl = expires_at - int(datetime.now(UTC).timestamp())
    if ttl <= 0:
        # Already expired; nothing left to revoke
        return True
    try:
        get_sync_redis().setex(f"{KEY_PREFIX}{jti}", ttl, 1)
        logger.info(f"Revoked token {jti} for {ttl}s")
        return True
    except redis.RedisError as e:
        logger.error(f"Failed to revoke token {jti}: {e}")
        return False


def is_token_revoked(jti: str) -> bool:
    """Check whether a token id has been revoked.

    Fails open when Redis is unreachable so an outage does not lock every
    user out; the token still expires on schedule.
    """
    try:
        return bool(get_sync_redis().exists(f"{KEY_PREFIX}{jti}"))
    except redis.RedisError as e:
        logger.error(f"Token denylist unavailable, skipping revocation check: {e}")
        return False
