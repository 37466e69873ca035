"""
Generation configuration settings.

Gemini chat model parameters and the retry/backoff policy of the answer
generator.

Dependencies: pydantic, pydantic_settings
System role: Generative model configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from sitechat.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """Google Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENERATION_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(default="gemini-1.5-flash", description="Gemini chat model ID")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_attempts: int = Field(default=3, ge=1, description="Total generation attempts per request")
    base_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Backoff base; delay is base * 2^(attempt-1) plus jitter",
    )
    max_jitter_seconds: float = Field(default=1.0, ge=0.0, description="Upper bound of random jitter")
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single generation call (timeouts are retryable)",
    )
    client_max_retries: int = Field(
        default=1,
        ge=1,
        description="Attempts inside the client library; the retry policy lives in the generator",
    )
    google_api_key: SecretStr | None = Field(
        default=None,
        description="Google API key; falls back to GOOGLE_API_KEY when unset",
    )
