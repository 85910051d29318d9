"""Cache Module - Typed application cache."""
from core.cache.errors import CacheError, SerializationError, StorageError
from core.cache.keys import CacheKey, canonical_key, parse_cache_key
from core.cache.policy import expiry_hours_for_key
from core.cache.service import CacheService

__all__ = [
    'CacheError',
    'CacheKey',
    'CacheService',
    'SerializationError',
    'StorageError',
    'canonical_key',
    'expiry_hours_for_key',
    'parse_cache_key',
]
