# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - cache.py: Cache backends (memory/Redis) and caching decorators
# - security.py: Password hashing and JWT helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.cache import (
    CacheBackend,
    MemoryCache,
    RedisCache,
    cache_evict,
    cache_put,
    cacheable,
    evict,
    get_cache,
)
from lib.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Cache
    "CacheBackend",
    "MemoryCache",
    "RedisCache",
    "cache_evict",
    "cache_put",
    "cacheable",
    "evict",
    "get_cache",
    # Security
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
