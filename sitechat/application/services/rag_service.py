"""
RAG service.

Bundles the corpus store, embedder, searches, ranker and answer generator
behind one object. Built once at startup and handed to request handlers.

Dependencies: sitechat.boundary, sitechat.core, sitechat.configs
System role: Application service for chat and search endpoints
"""

import logging

from sitechat.boundary.llm.gemini_chat import GeminiChatClient
from sitechat.boundary.llm.gemini_embedder import GeminiEmbedder
from sitechat.boundary.vdb.protocols import CorpusStore
from sitechat.boundary.vdb.vector_store_factory import get_corpus_store
from sitechat.configs.retrieval import RetrievalSettings
from sitechat.configs.settings import Settings
from sitechat.core.exceptions import ValidationError
from sitechat.core.generation.answer_generator import AnswerGenerator
from sitechat.core.retrieval.hybrid import HybridRanker
from sitechat.core.retrieval.lexical import LexicalSearch
from sitechat.core.retrieval.similarity import SimilaritySearch
from sitechat.models.chunk import Chunk, CorpusStats, SearchResult
from sitechat.models.rag import RAGResponse
from sitechat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

SEARCH_MODES = ("vector", "text", "hybrid")


class RAGService:
    """Question answering and search over the site corpus."""

    def __init__(
        self,
        store: CorpusStore,
        similarity: SimilaritySearch,
        lexical: LexicalSearch,
        ranker: HybridRanker,
        generator: AnswerGenerator,
        retrieval: RetrievalSettings | None = None,
    ) -> None:
        self.store = store
        self.similarity = similarity
        self.lexical = lexical
        self.ranker = ranker
        self.generator = generator
        self._retrieval = retrieval or RetrievalSettings()

    async def generate_response(self, question: str) -> RAGResponse:
        """
        Answer a user question.

        Raises:
            ValidationError: If the question is blank
            EmbeddingUnavailableError: If retrieval cannot embed the question
            VectorStoreError: If retrieval cannot read the corpus
        """
        if not question.strip():
            raise ValidationError("Question must not be empty", field="message")
        return await self.generator.generate_response(question.strip())

    async def search(self, query: str, mode: str = "hybrid", limit: int = 5) -> list[SearchResult]:
        """
        Run one of the retrieval paths directly.

        Args:
            query: Search text
            mode: 'vector', 'text' or 'hybrid'
            limit: Maximum results

        Returns:
            list[SearchResult]: Ranked results

        Raises:
            ValidationError: For an unknown mode, blank query or limit < 1
        """
        if mode not in SEARCH_MODES:
            raise ValidationError(
                f"Unknown search mode: {mode}",
                field="mode",
                details={"allowed": list(SEARCH_MODES)},
            )
        if not query.strip():
            raise ValidationError("Query must not be empty", field="query")

        log_with_context(logger, logging.INFO, f"{__name__}:search - Running {mode} search", query=query, limit=limit)
        if mode == "vector":
            return await self.similarity.search(query, limit, self._retrieval.similarity_threshold)
        if mode == "text":
            return await self.lexical.search(query, limit)
        return await self.ranker.hybrid_search(
            query,
            limit=limit,
            vector_weight=self._retrieval.vector_weight,
            text_weight=self._retrieval.text_weight,
        )

    async def find_by_url(self, url_fragment: str, limit: int = 10) -> list[Chunk]:
        """
        Chunks whose page url contains a fragment, case-insensitively.

        Raises:
            ValidationError: For a blank fragment or limit < 1
        """
        if not url_fragment.strip():
            raise ValidationError("URL fragment must not be empty", field="url")
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        return await self.store.find_by_url(url_fragment.strip(), limit)

    async def get_page_chunks(self, page_id: str) -> list[Chunk]:
        chunks = await self.store.get_page_chunks(page_id)
        logger.debug(f"{__name__}:get_page_chunks - {len(chunks)} chunks for page {page_id}")
        return chunks

    async def get_stats(self) -> CorpusStats:
        return await self.store.get_stats()

    async def aclose(self) -> None:
        await self.store.close()


def build_rag_service(settings: Settings) -> RAGService:
    """
    Wire the service graph from settings.

    Args:
        settings: Application settings

    Returns:
        RAGService: Ready-to-use service (caller owns aclose)
    """
    store = get_corpus_store(settings)
    embedder = GeminiEmbedder.from_settings(settings.embedding)
    chat_client = GeminiChatClient.from_settings(settings.generation)

    similarity = SimilaritySearch(embedder, store)
    lexical = LexicalSearch(store)
    ranker = HybridRanker(
        similarity,
        lexical,
        lexical_fallback_on_embedding_failure=settings.retrieval.lexical_fallback_on_embedding_failure,
    )
    generator = AnswerGenerator(
        ranker=ranker,
        store=store,
        chat_client=chat_client,
        retrieval=settings.retrieval,
        generation=settings.generation,
        site=settings.site,
    )
    logger.info(
        f"{__name__}:build_rag_service - Built service "
        f"(store={settings.vector_store.store_type}, model={settings.generation.model})"
    )
    return RAGService(store, similarity, lexical, ranker, generator, retrieval=settings.retrieval)
