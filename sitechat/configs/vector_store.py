"""
Vector store configuration settings.

Selects the corpus store backend and bounds every store call with a timeout.

Dependencies: pydantic, pydantic_settings
System role: Corpus store configuration for retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from sitechat.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Corpus store configuration (in-memory for dev, PostgreSQL for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="postgres",
        description="Store type: 'memory' for local dev, 'postgres' for production",
    )
    corpus_path: str | None = Field(
        default=None,
        description="JSON corpus file loaded by the in-memory store",
    )
    text_search_config: str = Field(
        default="english",
        description="PostgreSQL text search configuration used by the lexical index",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single store call",
    )
