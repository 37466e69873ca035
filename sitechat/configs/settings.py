"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from sitechat.configs.base import BaseSettings
from sitechat.configs.database import DatabaseSettings
from sitechat.configs.embedding import EmbeddingSettings
from sitechat.configs.generation import GenerationSettings
from sitechat.configs.retrieval import RetrievalSettings
from sitechat.configs.site import SiteSettings
from sitechat.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from sitechat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
