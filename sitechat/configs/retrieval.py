"""
Retrieval configuration settings.

Parameters the answer generator passes to the hybrid ranker, plus the
embedding-outage policy.

Dependencies: pydantic, pydantic_settings
System role: Hybrid retrieval configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from sitechat.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Hybrid retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    limit: int = Field(default=5, ge=1, le=50, description="Chunks handed to the generator")
    vector_weight: float = Field(default=0.7, ge=0.0, description="Weight of the vector path")
    text_weight: float = Field(default=0.3, ge=0.0, description="Weight of the text path")
    similarity_threshold: float = Field(
        default=0.7,
        ge=-1.0,
        le=1.0,
        description="Default threshold for stand-alone vector search",
    )
    lexical_fallback_on_embedding_failure: bool = Field(
        default=False,
        description="Serve text-only results when the embedding provider is down",
    )
