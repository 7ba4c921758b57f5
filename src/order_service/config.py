"""
Configuration management for the order service.

Loads settings from environment variables (and a project-root .env file)
with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class Settings(BaseSettings):
    """Order service settings loaded from environment variables."""

    # Worker pool, larger than the fixed task count so nothing queues
    ORDER_POOL_MAX_WORKERS: int = Field(default=5, ge=1, le=64)

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
