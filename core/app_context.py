from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from background.dispatcher import JobDispatcher
from core.cache.service import CacheService
from core.config_loader import AppConfig
from database.database import create_engine, create_session_factory


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Services receive the read-only configuration snapshot at construction;
    nothing reads configuration from global state afterwards.
    """
    config: AppConfig
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    cache_service: CacheService
    job_dispatcher: JobDispatcher

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        engine = create_engine(config.database.url, echo=config.database.echo)
        session_factory = create_session_factory(engine)

        cache_service = CacheService(session_factory, config.server)

        job_dispatcher = JobDispatcher(
            redis_url=config.queue.redis_url,
            use_async_queue=config.queue.use_async_queue,
            job_timeout=config.queue.job_timeout,
            result_ttl=config.queue.result_ttl_seconds
        )

        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            cache_service=cache_service,
            job_dispatcher=job_dispatcher
        )

    async def close(self) -> None:
        await self.engine.dispose()
