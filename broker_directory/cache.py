import json
import logging
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from .config import REDIS_URL

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


def get_cache() -> Optional[Redis]:
    """FastAPI dependency: the shared Redis client, or None when no REDIS_URL."""
    global _client
    if not REDIS_URL:
        return None
    if _client is None:
        _client = Redis.from_url(REDIS_URL, decode_responses=True)
    return _client


def cache_get_json(cache: Optional[Redis], key: str):
    if cache is None:
        return None
    try:
        cached = cache.get(key)
    except RedisError as exc:
        # cache down; the datastore still answers
        logger.warning("cache read failed for %s: %s", key, exc)
        return None
    return json.loads(cached) if cached else None


def cache_set_json(cache: Optional[Redis], key: str, value, ttl_seconds: int) -> None:
    if cache is None or ttl_seconds <= 0:
        return
    try:
        cache.setex(key, ttl_seconds, json.dumps(value))
    except RedisError as exc:
        logger.warning("cache write failed for %s: %s", key, exc)
