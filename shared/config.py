"""
Shared configuration management for the Rulebook evaluation engine.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RulebookSettings(BaseSettings):
    """Engine settings read from the environment (RULEBOOK_*) or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="RULEBOOK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    log_format: str = Field(default="json", pattern="^(json|console)$")

    # Emit a debug line for every operator evaluation
    trace_evaluations: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> RulebookSettings:
    """Get the process settings, read once."""
    return RulebookSettings()
