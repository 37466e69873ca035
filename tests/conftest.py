"""
Shared test fixtures and configuration for entire test suite.

Provides: toy corpus records, in-memory corpus store, fake embedder and chat
client, wired retrieval components
Dependencies: pytest, pytest_asyncio
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from sitechat.boundary.vdb.memory_store import InMemoryCorpusStore
from sitechat.configs.generation import GenerationSettings
from sitechat.configs.retrieval import RetrievalSettings
from sitechat.configs.site import SiteSettings
from sitechat.core.exceptions import EmbeddingUnavailableError
from sitechat.core.generation.answer_generator import AnswerGenerator
from sitechat.core.retrieval.hybrid import HybridRanker
from sitechat.core.retrieval.lexical import LexicalSearch
from sitechat.core.retrieval.similarity import SimilaritySearch
from sitechat.models.chunk import Chunk

OFFSET_TEXT = "Offset accounts reduce interest by offsetting savings against loan balance"

OFFSET_HTML = (
    "<html><head><title>Offset accounts</title>"
    '<meta name="description" content="Save on interest with a 100% offset account.">'
    "</head><body>...</body></html>"
)


class FakeEmbedder:
    """Deterministic embedder: exact-text lookup with a default vector."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, default: list[float] | None = None):
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vectors.get(text, self.default)


@pytest.fixture
def make_chunk():
    """Factory for Chunk records with sensible defaults."""

    def _make(
        chunk_id: str = "c1",
        page_id: str = "p1",
        content: str = "Some page text",
        vector: list[float] | None = None,
        url: str | None = None,
        title: str | None = "Page",
    ) -> Chunk:
        return Chunk(
            id=chunk_id,
            page_id=page_id,
            content=content,
            vector=vector,
            url=url or f"https://x/{page_id}",
            title=title,
        )

    return _make


@pytest.fixture
def corpus_pages() -> list[dict]:
    return [
        {"id": "p1", "url": "https://x/a", "title": "Offset accounts", "raw_html": OFFSET_HTML},
        {"id": "p2", "url": "https://x/b", "title": "Fixed rates", "raw_html": "<html><head></head></html>"},
        {"id": "p3", "url": "https://x/c", "title": None},
    ]


@pytest.fixture
def corpus_embeddings() -> list[dict]:
    return [
        {
            "id": "e1",
            "page_id": "p1",
            "content": OFFSET_TEXT,
            "vector": [1.0, 0.0, 0.0],
            "metadata": {"startIndex": 0, "endIndex": 74, "model": "text-embedding-004"},
            "created_at": "2024-01-01T00:00:00Z",
        },
        {
            "id": "e2",
            "page_id": "p2",
            "content": "Fixed rate home loans lock in your interest rate for a set term",
            "vector": "[0.0, 1.0, 0.0]",
            "metadata": {},
            "created_at": "2024-01-01T00:00:01Z",
        },
        {
            "id": "e3",
            "page_id": "p3",
            "content": "Refinancing your home loan can lower repayments",
            "vector": [0.6, 0.8, 0.0],
            "metadata": {},
            "created_at": "2024-01-01T00:00:02Z",
        },
    ]


@pytest.fixture
def memory_store(corpus_pages, corpus_embeddings) -> InMemoryCorpusStore:
    return InMemoryCorpusStore(corpus_pages, corpus_embeddings)


@pytest.fixture
def empty_store() -> InMemoryCorpusStore:
    return InMemoryCorpusStore(pages=[], embeddings=[])


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def ranker(fake_embedder, memory_store) -> HybridRanker:
    return HybridRanker(SimilaritySearch(fake_embedder, memory_store), LexicalSearch(memory_store))


@pytest.fixture
def mock_chat_client() -> AsyncMock:
    client = AsyncMock()
    client.generate.return_value = "Offset accounts lower the interest you pay."
    return client


@pytest.fixture
def sleep_recorder():
    """Awaitable sleep stand-in recording requested delays."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep


@pytest.fixture
def answer_generator(ranker, memory_store, mock_chat_client, sleep_recorder) -> AnswerGenerator:
    return AnswerGenerator(
        ranker=ranker,
        store=memory_store,
        chat_client=mock_chat_client,
        retrieval=RetrievalSettings(),
        generation=GenerationSettings(),
        site=SiteSettings(),
        sleep=sleep_recorder,
    )


@pytest.fixture
def embedding_down(fake_embedder) -> FakeEmbedder:
    fake_embedder.error = EmbeddingUnavailableError("provider down", model="test-model")
    return fake_embedder
