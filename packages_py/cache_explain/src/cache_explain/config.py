"""CLI configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class CliSettings(BaseSettings):
    """cache-explain settings loaded from CACHE_EXPLAIN_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="CACHE_EXPLAIN_", env_file=None)

    log_level: str = "WARNING"
    output: Literal["rich", "json"] = "rich"
    width: Optional[int] = None


@lru_cache()
def get_cli_settings() -> CliSettings:
    """Get cached settings instance."""
    return CliSettings()
