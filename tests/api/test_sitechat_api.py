"""
Test suite for the HTTP API.

Runs the real application (lifespan, middleware, exception handlers) with
the RAG service built over the in-memory corpus and a mocked chat model.

System role: Verification of routes and error mapping
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from sitechat.application.services.rag_service import RAGService
from sitechat.core.exceptions import EmbeddingUnavailableError, GenerationError, VectorStoreError
from sitechat.core.retrieval.lexical import LexicalSearch
from sitechat.core.retrieval.similarity import SimilaritySearch
from sitechat.main import create_app


@pytest.fixture
def rag_service(fake_embedder, memory_store, ranker, answer_generator) -> RAGService:
    return RAGService(
        store=memory_store,
        similarity=SimilaritySearch(fake_embedder, memory_store),
        lexical=LexicalSearch(memory_store),
        ranker=ranker,
        generator=answer_generator,
    )


@pytest.fixture
def client(rag_service):
    with patch("sitechat.main.build_rag_service", return_value=rag_service):
        with TestClient(create_app()) as test_client:
            yield test_client


class TestHealth:
    def test_health_check(self, client) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_response_should_echo_correlation_id(self, client) -> None:
        response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_response_should_generate_correlation_id(self, client) -> None:
        response = client.get("/api/v1/health")

        assert response.headers["X-Correlation-ID"]


class TestChatEndpoint:
    """Test suite for POST /api/v1/chat."""

    def test_chat_should_return_answer_and_sources(self, client) -> None:
        response = client.post("/api/v1/chat", json={"message": "How do offset accounts work?"})

        body = response.json()
        assert response.status_code == 200
        assert body["answer"] == "Offset accounts lower the interest you pay."
        assert body["degraded"] is False
        assert body["sources"][0] == {
            "url": "https://x/a",
            "title": "Offset accounts",
            "content": "Save on interest with a 100% offset account.",
            "similarity": 1.0,
        }

    def test_chat_should_degrade_when_model_unavailable(self, client, mock_chat_client) -> None:
        mock_chat_client.generate.side_effect = GenerationError("503", status_code=503)

        response = client.post("/api/v1/chat", json={"message": "How do offset accounts work?"})

        assert response.status_code == 200
        assert response.json()["degraded"] is True
        assert len(response.json()["sources"]) == 2

    def test_chat_should_return_503_when_embedding_unavailable(self, client, fake_embedder) -> None:
        fake_embedder.error = EmbeddingUnavailableError("provider down", model="m")

        response = client.post("/api/v1/chat", json={"message": "offset"})

        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "error": "provider down",
            "details": {"model": "m"},
        }

    def test_chat_with_blank_message_should_return_400(self, client) -> None:
        response = client.post("/api/v1/chat", json={"message": "   "})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "message"

    def test_chat_with_missing_message_should_return_422(self, client) -> None:
        assert client.post("/api/v1/chat", json={}).status_code == 422


class TestSearchEndpoint:
    """Test suite for GET /api/v1/search and /api/v1/stats."""

    def test_search_should_default_to_hybrid(self, client) -> None:
        response = client.get("/api/v1/search", params={"query": "offset accounts"})

        body = response.json()
        assert response.status_code == 200
        assert body["mode"] == "hybrid"
        assert body["results"][0]["chunk_id"] == "e1"
        assert body["results"][0]["similarity"] <= 1.0

    @pytest.mark.parametrize("mode", ["vector", "text", "hybrid"])
    def test_search_should_respect_limit(self, client, mode) -> None:
        response = client.get("/api/v1/search", params={"query": "home loan offset", "mode": mode, "limit": 1})

        assert response.status_code == 200
        assert len(response.json()["results"]) <= 1

    def test_search_with_unknown_mode_should_return_422(self, client) -> None:
        response = client.get("/api/v1/search", params={"query": "offset", "mode": "semantic"})

        assert response.status_code == 422

    def test_store_failure_should_return_503(self, client, memory_store) -> None:
        async def _fail(*_args):
            raise VectorStoreError("store down", operation="text_search")

        memory_store.text_search = _fail

        response = client.get("/api/v1/search", params={"query": "offset", "mode": "text"})

        assert response.status_code == 503
        assert response.json()["details"] == {"operation": "text_search"}

    def test_stats_should_report_corpus_size(self, client) -> None:
        response = client.get("/api/v1/stats")

        assert response.json() == {"total_chunks": 3, "unique_pages": 3, "vector_dimensions": 3}


class TestLookupEndpoints:
    """Test suite for url and page chunk lookups."""

    def test_chunks_by_url_should_return_matching_chunks(self, client) -> None:
        response = client.get("/api/v1/chunks", params={"url": "x/A"})

        assert response.status_code == 200
        body = response.json()
        assert [hit["chunk_id"] for hit in body] == ["e1"]
        assert body[0]["title"] == "Offset accounts"

    def test_chunks_by_url_with_blank_fragment_should_return_400(self, client) -> None:
        response = client.get("/api/v1/chunks", params={"url": "   "})

        assert response.status_code == 400

    def test_page_chunks_should_return_page_content(self, client) -> None:
        response = client.get("/api/v1/pages/p2/chunks")

        assert response.status_code == 200
        assert [hit["chunk_id"] for hit in response.json()] == ["e2"]

    def test_unknown_page_should_return_empty_list(self, client) -> None:
        response = client.get("/api/v1/pages/nope/chunks")

        assert response.json() == []
