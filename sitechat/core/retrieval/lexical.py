"""
Lexical search.

Thin layer over the store's full-text index that maps raw relevance onto the
scale used by the hybrid ranker.

Dependencies: sitechat.boundary.vdb
System role: Text path of hybrid retrieval
"""

import logging

from sitechat.boundary.vdb.protocols import CorpusStore
from sitechat.core.exceptions import ValidationError
from sitechat.models.chunk import SearchResult

logger = logging.getLogger(__name__)

# Heuristic divisor bringing raw text-index scores near [0, 1]. Not a probability.
TEXT_SCORE_NORMALIZER = 10.0


class LexicalSearch:
    """Text relevance search backed by the corpus store."""

    def __init__(self, store: CorpusStore) -> None:
        self._store = store

    async def search(self, query_text: str, limit: int) -> list[SearchResult]:
        """
        Rank chunks by text relevance.

        Args:
            query_text: Raw search text
            limit: Maximum number of results (>= 1)

        Returns:
            list[SearchResult]: Store matches, best first, with the raw score
            divided by TEXT_SCORE_NORMALIZER; empty for a blank query

        Raises:
            ValidationError: If limit < 1
            VectorStoreError: If the store query fails or times out
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        if not query_text.strip():
            return []

        matches = await self._store.text_search(query_text, limit)
        results = [
            SearchResult(chunk=chunk, score=raw_score / TEXT_SCORE_NORMALIZER)
            for chunk, raw_score in matches[:limit]
        ]
        logger.info(f"{__name__}:search - {len(results)} results")
        return results
