"""
Answer generator.

Retrieves context with the hybrid ranker, asks the generative model for a
grounded answer with retry/backoff, and degrades to an extractive answer when
the model stays unavailable. Retrieval failures propagate; every generation
failure ends in a well-formed RAGResponse.

Dependencies: langchain_core, tenacity, beautifulsoup4, sitechat.core.retrieval
System role: Question answering orchestration
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from langchain_core.messages import BaseMessage

from sitechat.boundary.vdb.protocols import CorpusStore
from sitechat.configs.generation import GenerationSettings
from sitechat.configs.retrieval import RetrievalSettings
from sitechat.configs.site import SiteSettings
from sitechat.core.exceptions import GenerationError, VectorStoreError
from sitechat.core.generation.excerpt import (
    FALLBACK_EXCERPT_LENGTH,
    extract_meta_description,
    truncate_excerpt,
)
from sitechat.core.generation.prompt import build_messages
from sitechat.core.generation.retry_policy import build_retrying
from sitechat.core.retrieval.hybrid import HybridRanker
from sitechat.models.chunk import SearchResult
from sitechat.models.rag import RAGResponse, RAGSource

logger = logging.getLogger(__name__)

HIGH_DEMAND_MESSAGE = (
    "I'm currently experiencing high demand and can't generate a detailed response right now. "
)


class ChatClient(Protocol):
    async def generate(self, messages: list[BaseMessage]) -> str: ...


class AnswerGenerator:
    """
    Retrieval-augmented answer generation.

    Sources attached to the response always come from the same ranked list that
    was used to build the prompt, in the same order, on both the normal and the
    fallback path.
    """

    def __init__(
        self,
        ranker: HybridRanker,
        store: CorpusStore,
        chat_client: ChatClient,
        retrieval: RetrievalSettings | None = None,
        generation: GenerationSettings | None = None,
        site: SiteSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        """
        Initialize generator.

        Args:
            ranker: Hybrid retrieval
            store: Corpus store, used for page markup lookups
            chat_client: Generative model client
            retrieval: Retrieval parameters (limit, weights)
            generation: Retry policy parameters
            site: Site identity for prompt and fallback text
            sleep: Backoff sleep override (tests)
        """
        self._ranker = ranker
        self._store = store
        self._chat = chat_client
        self._retrieval = retrieval or RetrievalSettings()
        self._generation = generation or GenerationSettings()
        self._site = site or SiteSettings()
        self._sleep = sleep

    async def generate_response(self, question: str) -> RAGResponse:
        """
        Answer a question.

        Args:
            question: User question

        Returns:
            RAGResponse: Model answer, or fallback answer with degraded=True

        Raises:
            EmbeddingUnavailableError: If retrieval cannot embed the question
            VectorStoreError: If retrieval cannot read the corpus
        """
        results = await self._ranker.hybrid_search(
            question,
            limit=self._retrieval.limit,
            vector_weight=self._retrieval.vector_weight,
            text_weight=self._retrieval.text_weight,
        )
        messages = build_messages(question, results, self._site)

        try:
            answer = await self._generate_with_retry(messages)
            degraded = False
        except Exception as e:
            # Any model-side failure degrades; retrieval errors were raised above
            logger.error(
                f"{__name__}:generate_response - Generation failed, using fallback: {type(e).__name__}: {e}"
            )
            answer = self._fallback_answer(question, results)
            degraded = True

        sources = await self._build_sources(results)
        logger.info(
            f"{__name__}:generate_response - Answered with {len(sources)} sources (degraded={degraded})"
        )
        return RAGResponse(answer=answer, sources=sources, degraded=degraded)

    async def _generate_with_retry(self, messages: list[BaseMessage]) -> str:
        retrying = build_retrying(
            max_attempts=self._generation.max_attempts,
            base_delay=self._generation.base_delay_seconds,
            max_jitter=self._generation.max_jitter_seconds,
            sleep=self._sleep,
        )
        async for attempt in retrying:
            with attempt:
                logger.debug(
                    f"{__name__}:_generate_with_retry - Attempt {attempt.retry_state.attempt_number}"
                )
                return await self._chat.generate(messages)
        # AsyncRetrying with reraise=True either returns or raises above
        raise GenerationError("Retry loop exited without a result")

    def _fallback_answer(self, question: str, results: list[SearchResult]) -> str:
        if not results:
            return (
                HIGH_DEMAND_MESSAGE
                + f"I couldn't find specific details about that in {self._site.name}'s content. "
                + f"Please try asking your question again in a moment, or visit {self._site.url} "
                + f"for more information about {self._site.topic}."
            )

        top = results[0].chunk
        answer = (
            HIGH_DEMAND_MESSAGE
            + f'However, I found some relevant information about your question "{question}". '
            + f"You can find detailed information at: {top.url}"
        )
        answer += f'\n\nHere\'s a brief excerpt: "{truncate_excerpt(top.content, FALLBACK_EXCERPT_LENGTH)}"'
        return answer

    async def _build_sources(self, results: list[SearchResult]) -> list[RAGSource]:
        markup: dict[str, str] = {}
        if results:
            try:
                markup = await self._store.lookup_raw_markup({result.chunk.url for result in results})
            except VectorStoreError as e:
                logger.warning(f"{__name__}:_build_sources - Markup lookup failed, using text excerpts: {e}")

        sources = []
        for result in results:
            chunk = result.chunk
            description = None
            html = markup.get(chunk.url)
            if html:
                description = extract_meta_description(html)
            sources.append(
                RAGSource(
                    url=chunk.url,
                    title=chunk.title or "Untitled",
                    content=description or truncate_excerpt(chunk.content),
                    similarity=result.similarity,
                )
            )
        return sources
