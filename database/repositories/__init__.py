from database.repositories.base import BaseRepository
from database.repositories.application_cache import ApplicationCacheRepository, CacheRecord

__all__ = [
    'BaseRepository',
    'ApplicationCacheRepository',
    'CacheRecord',
]
