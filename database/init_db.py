import asyncio
import logging

from tenacity import retry, stop_after_attempt, wait_fixed

from core.config_loader import load_config
from database.database import create_engine
from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
async def init_db(database_url: str, echo: bool = False) -> None:
    logger.info("Initializing database...")
    engine = create_engine(database_url, echo=echo)
    try:
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        logger.info("Tables created or verified.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise
    finally:
        await engine.dispose()


def main() -> None:
    config = load_config()
    logging.basicConfig(level=config.logging.level)
    asyncio.run(init_db(config.database.url, echo=config.database.echo))


if __name__ == "__main__":
    main()
