# =============================================================================
# lib/cache.py - Service-Level Caching
# =============================================================================
# Declarative caching for service methods:
#
#   @cacheable("books", model=BookResponse, key=lambda self, book_id: book_id)
#   def get_book(self, book_id): ...
#
#   @cache_put("books", model=BookResponse, key=lambda self, book_id, data: book_id)
#   def update_book(self, book_id, data): ...
#
#   @cache_evict("books", key=lambda self, book_id: book_id)
#   def delete_book(self, book_id): ...
#
# Backends:
#   - memory: per-process dict with TTL (default, used in tests)
#   - redis:  shared across API processes and workers
#
# Values are stored as JSON produced by a pydantic TypeAdapter, so both
# backends hold exactly the same payload.
#
# Cache failures never fail the operation: errors are logged and the
# decorated method runs against the database as if the cache were empty.
# =============================================================================

import functools
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from pydantic import TypeAdapter

from app.config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "demo_project:cache:"

KeyFunction = Callable[..., Any]


# =============================================================================
# Backends
# =============================================================================

class CacheBackend(ABC):
    """Storage for serialized cache entries."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored JSON string, or None on a miss."""

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> None:
        """Store a JSON string for ttl seconds."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove one entry. Returns True if it existed."""

    @abstractmethod
    def delete_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with prefix."""

    @abstractmethod
    def ping(self) -> bool:
        """Check the backend is reachable."""

    def clear(self) -> int:
        """Remove every entry owned by this application."""
        return self.delete_prefix(KEY_PREFIX)


class MemoryCache(CacheBackend):
    """
    In-process cache with per-entry expiry.

    Entries live in a dict of key -> (expires_at, value). Expired entries
    are dropped lazily on read.
    """

    def __init__(self):
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (time.monotonic() + ttl, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache(CacheBackend):
    """Cache stored in Redis STRING keys with SETEX expiry."""

    def __init__(self, url: str | None = None, client=None):
        if client is None:
            import redis
            client = redis.Redis.from_url(url or settings.REDIS_URL, decode_responses=True)
        self._redis = client

    def get(self, key: str) -> Optional[str]:
        value = self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str, ttl: int) -> None:
        self._redis.setex(key, ttl, value)

    def delete(self, key: str) -> bool:
        return bool(self._redis.delete(key))

    def delete_prefix(self, prefix: str) -> int:
        keys = list(self._redis.scan_iter(match=f"{prefix}*"))
        if not keys:
            return 0
        return int(self._redis.delete(*keys))

    def ping(self) -> bool:
        return bool(self._redis.ping())


@functools.lru_cache
def get_cache() -> CacheBackend:
    """
    Get the process-wide cache backend selected by CACHE_BACKEND.
    """
    if settings.CACHE_BACKEND == "redis":
        logger.info("Using Redis cache backend")
        return RedisCache(settings.REDIS_URL)
    logger.info("Using in-memory cache backend")
    return MemoryCache()


# =============================================================================
# Keys
# =============================================================================

def cache_prefix(cache_name: str) -> str:
    return f"{KEY_PREFIX}{cache_name}::"


def build_key(cache_name: str, key: KeyFunction | None, args: tuple, kwargs: dict) -> str:
    """
    Build the storage key for one call.

    With no key function, the key is made from every argument except the
    first one (self on a service method). A call with no such arguments
    gets the key "SimpleKey.EMPTY".
    """
    if key is not None:
        suffix = str(key(*args, **kwargs))
    else:
        parts = [repr(arg) for arg in args[1:]]
        parts += [f"{name}={value!r}" for name, value in sorted(kwargs.items())]
        suffix = ",".join(parts) or "SimpleKey.EMPTY"
    return f"{cache_prefix(cache_name)}{suffix}"


def evict(*cache_names: str) -> int:
    """
    Remove every entry of the named caches.

    Returns:
        int: Number of entries removed
    """
    cache = get_cache()
    removed = 0
    for name in cache_names:
        try:
            removed += cache.delete_prefix(cache_prefix(name))
        except Exception as e:
            logger.warning(f"Cache evict failed for {name}: {e}")
    return removed


def _store(cache_key: str, adapter: TypeAdapter, value: Any, ttl: int | None) -> None:
    try:
        get_cache().set(cache_key, adapter.dump_json(value).decode("utf-8"), ttl or settings.CACHE_TTL_SECONDS)
    except Exception as e:
        logger.warning(f"Cache write failed for {cache_key}: {e}")


# =============================================================================
# Decorators
# =============================================================================

def cacheable(cache_name: str, model: Any, key: KeyFunction | None = None, ttl: int | None = None):
    """
    Return the cached result when present, otherwise call and cache.

    Args:
        cache_name: Logical cache (e.g., "books")
        model: Type of the return value, used to (de)serialize it
        key: Callable receiving the method's arguments, returning the key
        ttl: Seconds to keep the entry (defaults to CACHE_TTL_SECONDS)

    None results are not cached.
    """
    adapter = TypeAdapter(model)

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = build_key(cache_name, key, args, kwargs)

            try:
                cached = get_cache().get(cache_key)
            except Exception as e:
                logger.warning(f"Cache read failed for {cache_key}: {e}")
                cached = None

            if cached is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return adapter.validate_json(cached)

            logger.debug(f"Cache miss: {cache_key}")
            result = func(*args, **kwargs)
            if result is not None:
                _store(cache_key, adapter, result, ttl)
            return result

        return wrapper

    return decorator


def cache_put(cache_name: str, model: Any, key: KeyFunction | None = None, ttl: int | None = None):
    """
    Always call the method, then store its result under the key.
    """
    adapter = TypeAdapter(model)

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)
            if result is not None:
                _store(build_key(cache_name, key, args, kwargs), adapter, result, ttl)
            return result

        return wrapper

    return decorator


def cache_evict(cache_name: str, key: KeyFunction | None = None, all_entries: bool = False):
    """
    Remove the entry for the key (or the whole cache) after the method
    returns. Nothing is evicted when the method raises.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)
            if all_entries:
                evict(cache_name)
            else:
                cache_key = build_key(cache_name, key, args, kwargs)
                try:
                    get_cache().delete(cache_key)
                except Exception as e:
                    logger.warning(f"Cache evict failed for {cache_key}: {e}")
            return result

        return wrapper

    return decorator
