"""Application Cache Service - typed cache persisted in the application_cache table."""
import asyncio
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Type, TypeVar
from uuid import UUID

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.cache.errors import SerializationError, StorageError
from core.cache.keys import CacheKey, canonical_key
from core.cache.policy import expiry_hours_for_key
from core.config_loader import ServerConfig
from database.uow import cache_uow

logger = logging.getLogger(__name__)

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CacheService:
    """
    Typed application cache backed by the database.

    Every key variant has its own expiry policy. Writes are upserts keyed on
    the canonical key, so the latest write for a key always wins. Expiry is
    checked lazily when reading; expired rows are kept until removed by
    something outside this service.

    Writes raise ``SerializationError`` / ``StorageError``. Reads never raise:
    any failure is reported as a cache miss.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        server_config: ServerConfig,
        clock: Callable[[], datetime] = utc_now
    ):
        self.session_factory = session_factory
        self.server_config = server_config
        self.clock = clock

    def get_expiry_for_key(self, key: CacheKey) -> Optional[int]:
        return expiry_hours_for_key(key, self.server_config)

    async def set_key(self, key: CacheKey, value: Any) -> UUID:
        """
        Store ``value`` under ``key``, replacing any existing entry.

        Args:
            key: Cache key variant
            value: Any value pydantic can encode as JSON

        Returns:
            Id of the inserted or overwritten row
        """
        try:
            document = to_jsonable_python(value)
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise SerializationError(f"Cannot serialize value for cache key {key}: {e}") from e

        now = self.clock()
        expiry_hours = self.get_expiry_for_key(key)
        expires_at = now + timedelta(hours=expiry_hours) if expiry_hours is not None else None

        try:
            async with cache_uow(self.session_factory) as repo:
                insert_id = await repo.upsert(
                    key=canonical_key(key),
                    value=document,
                    created_at=now,
                    expires_at=expires_at,
                )
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise StorageError(f"Failed to write cache key {key}: {e}") from e

        logger.debug(f"Inserted application cache with id = {insert_id}")
        return insert_id

    async def get_value(self, key: CacheKey, type_: Type[T]) -> Optional[T]:
        """
        Fetch the fresh value for ``key`` decoded as ``type_``.

        Returns None when there is no entry, the entry has expired, the
        stored document does not fit ``type_``, or the lookup failed.
        """
        try:
            async with cache_uow(self.session_factory) as repo:
                record = await repo.find_by_key(canonical_key(key))
        except Exception as e:
            logger.warning(f"Error reading cache key {key}: {e}")
            return None

        if record is None:
            logger.debug(f"Cache miss for {key}")
            return None

        if record.expires_at is not None and _as_utc(record.expires_at) <= self.clock():
            logger.debug(f"Cache entry for {key} expired at {record.expires_at}")
            return None

        try:
            return TypeAdapter(type_).validate_json(json.dumps(record.value), strict=True)
        except ValidationError as e:
            logger.warning(f"Cached value for {key} does not match {type_!r}: {e.error_count()} errors")
            return None

    async def expire_key(self, key: CacheKey) -> bool:
        """Mark the entry for ``key`` as expired now. Returns True if a row was updated."""
        try:
            async with cache_uow(self.session_factory) as repo:
                rows_affected = await repo.update_matching(canonical_key(key), expires_at=self.clock())
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise StorageError(f"Failed to expire cache key {key}: {e}") from e

        if rows_affected:
            logger.debug(f"Expired cache key {key}")
        return rows_affected > 0
