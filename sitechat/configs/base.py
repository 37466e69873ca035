"""
Shared settings base.

Every sitechat settings class reads the process environment and the local
.env file with the same rules; only log_level is common to all of them.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Env/.env loading rules shared by the sitechat settings classes."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level applied at startup (DEBUG, INFO, WARNING, ERROR)",
    )
