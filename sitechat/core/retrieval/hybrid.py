"""
Hybrid ranker.

Fuses the vector and text result lists into one ranking:

    vector path: similarity * vector_weight + rank_bonus
    text path:   normalized_text_score * text_weight + rank_bonus
    rank_bonus(i, n) = (n - i) / n * RANK_BONUS_SCALE

Results are merged per page; a page found by both paths gets the sum of its
two scores, so agreement between methods outranks a single-method match.
Fused scores are a ranking heuristic, not probabilities.

Dependencies: sitechat.core.retrieval
System role: Retrieval entry point for the answer generator
"""

import logging

from sitechat.core.exceptions import EmbeddingUnavailableError, ValidationError
from sitechat.core.retrieval.lexical import LexicalSearch
from sitechat.core.retrieval.similarity import SimilaritySearch
from sitechat.models.chunk import SearchResult

logger = logging.getLogger(__name__)

OVERSAMPLE_FACTOR = 2
RELAXED_THRESHOLD = 0.5
RANK_BONUS_SCALE = 0.1


def rank_bonus(index: int, total: int) -> float:
    """Positional bonus in (0, RANK_BONUS_SCALE] for a 0-based index."""
    return (total - index) / total * RANK_BONUS_SCALE


def _accumulate(
    fused: dict[str, list],
    results: list[SearchResult],
    weight: float,
) -> None:
    seen: set[str] = set()
    total = len(results)
    for index, result in enumerate(results):
        page_id = result.page_id
        # only the best-ranked chunk of a page counts within one list
        if page_id in seen:
            continue
        seen.add(page_id)
        score = result.score * weight + rank_bonus(index, total)
        if page_id in fused:
            fused[page_id][1] += score
        else:
            fused[page_id] = [result.chunk, score]


def fuse(
    vector_results: list[SearchResult],
    text_results: list[SearchResult],
    limit: int,
    vector_weight: float = 0.7,
    text_weight: float = 0.3,
) -> list[SearchResult]:
    """
    Merge two ranked lists by page.

    The chunk kept for a page is the one first seen (vector path first).
    Ties in the fused score keep insertion order.
    """
    fused: dict[str, list] = {}
    _accumulate(fused, vector_results, vector_weight)
    _accumulate(fused, text_results, text_weight)

    ranked = [SearchResult(chunk=chunk, score=score) for chunk, score in fused.values()]
    ranked.sort(key=lambda result: result.score, reverse=True)
    return ranked[:limit]


class HybridRanker:
    """Sequential vector-then-text retrieval with score fusion."""

    def __init__(
        self,
        similarity: SimilaritySearch,
        lexical: LexicalSearch,
        lexical_fallback_on_embedding_failure: bool = False,
    ) -> None:
        """
        Initialize ranker.

        Args:
            similarity: Vector path
            lexical: Text path
            lexical_fallback_on_embedding_failure: Serve text-only results when
                the embedding provider is unavailable instead of failing
        """
        self._similarity = similarity
        self._lexical = lexical
        self._lexical_fallback = lexical_fallback_on_embedding_failure

    async def hybrid_search(
        self,
        query_text: str,
        limit: int = 5,
        vector_weight: float = 0.7,
        text_weight: float = 0.3,
    ) -> list[SearchResult]:
        """
        Retrieve and fuse candidates from both paths.

        Args:
            query_text: Natural-language query
            limit: Maximum fused results (>= 1)
            vector_weight: Weight applied to cosine similarity
            text_weight: Weight applied to the normalized text score

        Returns:
            list[SearchResult]: Fused results, best first, len <= limit

        Raises:
            ValidationError: If limit < 1
            EmbeddingUnavailableError: Unless lexical fallback is enabled
            VectorStoreError: If the corpus cannot be read
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        pool_size = limit * OVERSAMPLE_FACTOR
        try:
            vector_results = await self._similarity.search(query_text, pool_size, RELAXED_THRESHOLD)
        except EmbeddingUnavailableError as e:
            if not self._lexical_fallback:
                raise
            logger.warning(f"{__name__}:hybrid_search - Embedding unavailable, using text path only: {e.message}")
            vector_results = []

        text_results = await self._lexical.search(query_text, pool_size)

        results = fuse(vector_results, text_results, limit, vector_weight, text_weight)
        logger.info(
            f"{__name__}:hybrid_search - {len(results)} results "
            f"(vector_pool={len(vector_results)}, text_pool={len(text_results)})"
        )
        return results
