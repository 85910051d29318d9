"""Expiry policy for application cache keys."""
from typing import Optional

from core.cache.keys import (
    CacheKey,
    CoreDetails,
    IgdbSettings,
    ListennotesSettings,
    MetadataGroupSearch,
    MetadataRecentlyConsumed,
    MetadataSearch,
    PeopleSearch,
    ProgressUpdateCache,
    TmdbSettings,
    UserAnalytics,
    UserAnalyticsParameters,
    UserCollectionsList,
)
from core.config_loader import ServerConfig

NEVER_EXPIRES = (IgdbSettings, ListennotesSettings, TmdbSettings)
ONE_HOUR_KEYS = (CoreDetails, PeopleSearch, MetadataSearch, MetadataGroupSearch, MetadataRecentlyConsumed)
EIGHT_HOUR_KEYS = (UserCollectionsList, UserAnalyticsParameters)


def expiry_hours_for_key(key: CacheKey, server_config: ServerConfig) -> Optional[int]:
    """
    Hours a value written under ``key`` stays fresh.

    Returns None for keys that never expire. Raises TypeError for anything
    that is not a known cache key variant.
    """
    if isinstance(key, NEVER_EXPIRES):
        return None
    if isinstance(key, ONE_HOUR_KEYS):
        return 1
    if isinstance(key, UserAnalytics):
        return 2
    if isinstance(key, EIGHT_HOUR_KEYS):
        return 8
    if isinstance(key, ProgressUpdateCache):
        return server_config.progress_update_threshold
    raise TypeError(f"No expiry policy for cache key {key!r}")
