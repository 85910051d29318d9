import yaml
import os
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DatabaseConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    echo: bool = False


class ServerConfig(BaseModel):
    """Server settings consumed read-only by long-lived services."""
    model_config = ConfigDict(frozen=True)

    # Hours a progress update stays cached; blocks duplicate updates within the window.
    progress_update_threshold: int = Field(default=2, gt=0)


class QueueConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    redis_url: Optional[str] = None  # Falls back to REDIS_URL or localhost
    use_async_queue: bool = True
    job_timeout: str = "10m"
    result_ttl_seconds: int = 86400


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig
    server: ServerConfig = Field(default_factory=ServerConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the repository copy
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if data.get('database') is None:
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for Redis URL
    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        if data.get('queue') is None:
            data['queue'] = {}
        data['queue']['redis_url'] = env_redis_url

    # Allow env var override for the progress update cache window
    env_threshold = os.environ.get("PROGRESS_UPDATE_THRESHOLD")
    if env_threshold:
        if data.get('server') is None:
            data['server'] = {}
        data['server']['progress_update_threshold'] = int(env_threshold)

    return AppConfig(**data)
