import contextlib
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.database import db_session_scope
from database.repositories.application_cache import ApplicationCacheRepository


@contextlib.asynccontextmanager
async def cache_uow(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[ApplicationCacheRepository]:
    """Per-unit-of-work transaction scope.

    Yields an ApplicationCacheRepository bound to a fresh AsyncSession.
    Commits on success, rolls back on exception, always closes.

    Usage:
        async with cache_uow(session_factory) as repo:
            record = await repo.find_by_key(key)
        # commit happens automatically on successful exit
    """
    async with db_session_scope(session_factory) as session:
        yield ApplicationCacheRepository(session)
