"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Gemini embedding model configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from sitechat.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Google Gemini embedding configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(
        default="models/text-embedding-004",
        description="Google embedding model ID (must match the model used at ingestion)",
    )
    output_dimensionality: int | None = Field(
        default=None,
        description="Optional reduced output dimension; None keeps the model default (768)",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single embedding call",
    )
    google_api_key: SecretStr | None = Field(
        default=None,
        description="Google API key; falls back to GOOGLE_API_KEY when unset",
    )
