"""
Gemini chat client.

Single-shot text generation through ChatGoogleGenerativeAI. Errors are
normalized into GenerationError carrying the provider's HTTP status when one
is exposed; the retry policy lives in the answer generator.

Dependencies: langchain_google_genai, langchain_core, sitechat.configs
System role: Generative model boundary
"""

import asyncio
import logging
from typing import Any

from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from sitechat.configs.generation import GenerationSettings
from sitechat.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


def extract_status_code(error: BaseException) -> int | None:
    """HTTP status exposed by a provider exception, if any."""
    for attribute in ("status_code", "code"):
        value = getattr(error, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def flatten_content(content: Any) -> str:
    """Plain text from a message content that may be a string or a list of parts."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


class GeminiChatClient:
    """Generative model client with a per-call timeout."""

    def __init__(
        self,
        model: str = "gemini-1.5-flash",
        temperature: float = 0.3,
        timeout_seconds: float = 30.0,
        max_retries: int = 1,
        chat_model: Any | None = None,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize chat client.

        Args:
            model: Gemini model ID
            temperature: Sampling temperature
            timeout_seconds: Upper bound for one generation call
            max_retries: Attempts inside the client library
            chat_model: Preconfigured chat model (tests inject a mock)
            google_api_key: API key; GOOGLE_API_KEY is used when omitted
        """
        self.model = model
        self._timeout = timeout_seconds
        if chat_model is None:
            kwargs = {"model": model, "temperature": temperature, "max_retries": max_retries}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            chat_model = ChatGoogleGenerativeAI(**kwargs)
        self._chat_model = chat_model

    @classmethod
    def from_settings(cls, settings: GenerationSettings) -> "GeminiChatClient":
        api_key = settings.google_api_key.get_secret_value() if settings.google_api_key else None
        return cls(
            model=settings.model,
            temperature=settings.temperature,
            timeout_seconds=settings.timeout_seconds,
            max_retries=settings.client_max_retries,
            google_api_key=api_key,
        )

    async def generate(self, messages: list[BaseMessage]) -> str:
        """
        Generate a plain-text answer.

        Args:
            messages: Prompt messages

        Returns:
            str: Answer text

        Raises:
            GenerationError: On provider error or timeout (cause preserved)
        """
        try:
            result = await asyncio.wait_for(self._chat_model.ainvoke(messages), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise GenerationError(
                f"Generation timed out after {self._timeout}s",
                details={"model": self.model},
            ) from e
        except Exception as e:
            raise GenerationError(
                f"{type(e).__name__}: {e}",
                status_code=extract_status_code(e),
                details={"model": self.model},
            ) from e

        answer = flatten_content(getattr(result, "content", result)).strip()
        if not answer:
            raise GenerationError("Model returned an empty answer", details={"model": self.model})
        return answer
