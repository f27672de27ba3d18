"""Redis client for state shared across workers (popular search terms)."""

import os
import redis
import logging
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

# Redis connection (lazy initialization)
_redis_client = None

# Sorted set of normalized search terms scored by how often they were searched
POPULAR_SEARCHES_KEY = "search:popular"


def _redis_url():
    if has_app_context():
        return current_app.config.get('REDIS_URL')
    return os.environ.get('REDIS_URL')


def get_redis():
    """Get or create Redis connection. Returns None when Redis is not configured or unreachable."""
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    redis_url = _redis_url()

    if not redis_url:
        logger.debug("REDIS_URL not set - popular searches fall back to the catalog")
        return None

    try:
        _redis_client = redis.from_url(redis_url, decode_responses=True)
        # Test connection
        _redis_client.ping()
        logger.info("Redis connected successfully")
        return _redis_client
    except redis.RedisError as e:
        logger.error(f"Redis connection failed: {e}")
        _redis_client = None
        return None


def increment_search_term(term: str) -> bool:
    """Count one more search for a normalized term."""
    r = get_redis()
    if not r:
        return False

    try:
        r.zincrby(POPULAR_SEARCHES_KEY, 1, term)
        return True
    except redis.RedisError as e:
        logger.error(f"Redis increment_search_term error: {e}")
        return False


def get_top_search_terms(limit: int) -> list:
    """Most searched terms, most frequent first."""
    r = get_redis()
    if not r:
        return []

    try:
        return list(r.zrevrange(POPULAR_SEARCHES_KEY, 0, limit - 1))
    except redis.RedisError as e:
        logger.error(f"Redis get_top_search_terms error: {e}")
        return []
