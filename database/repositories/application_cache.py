import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite

from database.models import ApplicationCache
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


@dataclass(frozen=True)
class CacheRecord:
    """Plain view of one application_cache row."""
    id: uuid.UUID
    key: str
    value: Any
    created_at: datetime
    expires_at: Optional[datetime]

    @classmethod
    def from_row(cls, row: ApplicationCache) -> "CacheRecord":
        return cls(
            id=row.id,
            key=row.key,
            value=row.value,
            created_at=row.created_at,
            expires_at=row.expires_at,
        )


class ApplicationCacheRepository(BaseRepository):
    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Cache upsert is not supported on dialect '{dialect}'") from None

    async def upsert(
        self,
        key: str,
        value: Any,
        created_at: datetime,
        expires_at: Optional[datetime]
    ) -> uuid.UUID:
        """Insert a row for ``key`` or overwrite value, expires_at and created_at in place."""
        stmt = self._insert()(ApplicationCache).values(
            id=uuid.uuid4(),
            key=key,
            value=value,
            created_at=created_at,
            expires_at=expires_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['key'],
            set_={
                'value': stmt.excluded.value,
                'expires_at': stmt.excluded.expires_at,
                'created_at': stmt.excluded.created_at,
            }
        ).returning(ApplicationCache.id)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def find_by_key(self, key: str) -> Optional[CacheRecord]:
        stmt = select(ApplicationCache).where(ApplicationCache.key == key)
        row = (await self.db.execute(stmt)).scalar_one_or_none()
        return CacheRecord.from_row(row) if row is not None else None

    async def update_matching(self, key: str, expires_at: Optional[datetime]) -> int:
        """Set expires_at on every row for ``key``; returns rows affected."""
        stmt = (
            update(ApplicationCache)
            .where(ApplicationCache.key == key)
            .values(expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount
