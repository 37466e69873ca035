"""
Test suite for the hybrid ranker.

Covers rank bonus, score fusion by page, ordering stability and the
embedding-outage policy.

System role: Verification of hybrid retrieval fusion
"""

from unittest.mock import AsyncMock

import pytest

from sitechat.core.exceptions import EmbeddingUnavailableError, ValidationError
from sitechat.core.retrieval.hybrid import (
    OVERSAMPLE_FACTOR,
    RANK_BONUS_SCALE,
    RELAXED_THRESHOLD,
    HybridRanker,
    fuse,
    rank_bonus,
)
from sitechat.core.retrieval.lexical import LexicalSearch
from sitechat.core.retrieval.similarity import SimilaritySearch
from sitechat.models.chunk import SearchResult


@pytest.fixture
def result(make_chunk):
    def _result(chunk_id: str, page_id: str, score: float) -> SearchResult:
        return SearchResult(chunk=make_chunk(chunk_id=chunk_id, page_id=page_id), score=score)

    return _result


class TestRankBonus:
    """Test suite for rank_bonus."""

    def test_first_item_should_get_full_bonus(self) -> None:
        assert rank_bonus(0, 4) == pytest.approx(RANK_BONUS_SCALE)

    def test_bonus_should_decay_linearly(self) -> None:
        assert [rank_bonus(i, 4) for i in range(4)] == pytest.approx([0.1, 0.075, 0.05, 0.025])


class TestFuse:
    """Test suite for fuse."""

    def test_page_in_both_lists_should_get_sum_of_scores(self, result) -> None:
        # Arrange
        vector = [result("v1", "p1", 0.9)]
        text = [result("t1", "p1", 0.5)]

        # Act
        fused = fuse(vector, text, limit=5, vector_weight=0.7, text_weight=0.3)

        # Assert
        vector_only = 0.9 * 0.7 + 0.1
        text_only = 0.5 * 0.3 + 0.1
        assert len(fused) == 1
        assert fused[0].score == pytest.approx(vector_only + text_only)
        assert fused[0].score >= max(vector_only, text_only)

    def test_page_in_both_lists_should_keep_vector_chunk(self, result) -> None:
        fused = fuse([result("v1", "p1", 0.9)], [result("t1", "p1", 0.5)], limit=5)

        assert fused[0].chunk.id == "v1"

    def test_double_match_should_outrank_single_method_match(self, result) -> None:
        # Arrange: p2 beats p1 on vector alone, but p1 is confirmed by text
        vector = [result("v2", "p2", 0.95), result("v1", "p1", 0.8)]
        text = [result("t1", "p1", 0.4)]

        # Act
        fused = fuse(vector, text, limit=5)

        # Assert
        assert [r.page_id for r in fused] == ["p1", "p2"]

    def test_only_first_chunk_of_page_should_count_within_list(self, result) -> None:
        vector = [result("a", "p1", 0.9), result("b", "p1", 0.8), result("c", "p2", 0.7)]

        fused = fuse(vector, [], limit=5, vector_weight=1.0)

        scores = {r.chunk.id: r.score for r in fused}
        assert set(scores) == {"a", "c"}
        assert scores["a"] == pytest.approx(0.9 + rank_bonus(0, 3))
        assert scores["c"] == pytest.approx(0.7 + rank_bonus(2, 3))

    def test_equal_scores_should_keep_vector_then_text_order(self, result) -> None:
        vector = [result("v1", "p1", 0.5)]
        text = [result("t2", "p2", 0.5)]

        fused = fuse(vector, text, limit=5, vector_weight=0.3, text_weight=0.3)

        assert [r.page_id for r in fused] == ["p1", "p2"]

    @pytest.mark.parametrize("limit", [1, 2, 3])
    def test_fuse_should_truncate_to_limit(self, result, limit) -> None:
        vector = [result(f"v{i}", f"p{i}", 0.9 - i * 0.1) for i in range(4)]
        text = [result(f"t{i}", f"q{i}", 0.5) for i in range(4)]

        assert len(fuse(vector, text, limit=limit)) == limit


class TestHybridRanker:
    """Test suite for HybridRanker.hybrid_search."""

    @pytest.mark.asyncio
    async def test_hybrid_search_should_oversample_with_relaxed_threshold(self) -> None:
        # Arrange
        similarity = AsyncMock(spec=SimilaritySearch)
        similarity.search.return_value = []
        lexical = AsyncMock(spec=LexicalSearch)
        lexical.search.return_value = []
        ranker = HybridRanker(similarity, lexical)

        # Act
        await ranker.hybrid_search("offset", limit=5)

        # Assert
        similarity.search.assert_awaited_once_with("offset", 5 * OVERSAMPLE_FACTOR, RELAXED_THRESHOLD)
        lexical.search.assert_awaited_once_with("offset", 5 * OVERSAMPLE_FACTOR)

    @pytest.mark.asyncio
    async def test_hybrid_search_should_rank_offset_page_first(self, ranker) -> None:
        results = await ranker.hybrid_search("How do offset accounts work?")

        assert results[0].chunk.url == "https://x/a"
        assert [r.page_id for r in results] == ["p1", "p3"]

    @pytest.mark.asyncio
    async def test_hybrid_search_should_be_stable_across_calls(self, ranker) -> None:
        first = await ranker.hybrid_search("home loan interest rate", limit=3)
        second = await ranker.hybrid_search("home loan interest rate", limit=3)

        assert [(r.chunk.id, r.score) for r in first] == [(r.chunk.id, r.score) for r in second]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [1, 2, 5])
    async def test_hybrid_search_should_respect_limit(self, ranker, limit) -> None:
        results = await ranker.hybrid_search("home loan interest offset refinancing", limit=limit)

        assert len(results) <= limit

    @pytest.mark.asyncio
    async def test_hybrid_search_on_empty_corpus_should_return_empty(self, fake_embedder, empty_store) -> None:
        ranker = HybridRanker(SimilaritySearch(fake_embedder, empty_store), LexicalSearch(empty_store))

        assert await ranker.hybrid_search("offset") == []

    @pytest.mark.asyncio
    async def test_embedding_failure_should_propagate_by_default(self, embedding_down, memory_store) -> None:
        ranker = HybridRanker(SimilaritySearch(embedding_down, memory_store), LexicalSearch(memory_store))

        with pytest.raises(EmbeddingUnavailableError):
            await ranker.hybrid_search("offset accounts")

    @pytest.mark.asyncio
    async def test_embedding_failure_should_use_text_path_when_enabled(self, embedding_down, memory_store) -> None:
        # Arrange
        ranker = HybridRanker(
            SimilaritySearch(embedding_down, memory_store),
            LexicalSearch(memory_store),
            lexical_fallback_on_embedding_failure=True,
        )

        # Act
        results = await ranker.hybrid_search("offset accounts")

        # Assert
        assert [r.chunk.id for r in results] == ["e1"]

    @pytest.mark.asyncio
    async def test_zero_limit_should_raise(self, ranker) -> None:
        with pytest.raises(ValidationError):
            await ranker.hybrid_search("offset", limit=0)
