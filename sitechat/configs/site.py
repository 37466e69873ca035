"""
Site identity settings.

Names the website the assistant answers for; used in the prompt and in the
degraded-mode answer.

Dependencies: pydantic, pydantic_settings
System role: Assistant persona configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from sitechat.configs.base import BaseSettings


class SiteSettings(BaseSettings):
    """Website identity configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SITE_",
        case_sensitive=False,
        extra="ignore",
    )

    name: str = Field(default="Unloan", description="Brand name used in the prompt")
    url: str = Field(default="unloan.com.au", description="General site pointer for fallback answers")
    topic: str = Field(
        default="home loans and financial services",
        description="Subject area the assistant answers questions about",
    )
