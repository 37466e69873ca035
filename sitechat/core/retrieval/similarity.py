"""
Dense similarity search.

Embeds the query, scans the whole corpus and scores every chunk by cosine
similarity. No index-assisted pruning.

Dependencies: numpy, sitechat.boundary.vdb, sitechat.boundary.llm
System role: Vector path of hybrid retrieval
"""

import logging
from typing import Protocol, Sequence

import numpy as np

from sitechat.boundary.vdb.protocols import CorpusStore
from sitechat.core.exceptions import ValidationError
from sitechat.models.chunk import SearchResult

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    async def embed(self, text: str) -> list[float]: ...


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.

    Returns:
        float: Value in [-1, 1] (clipped against float error)

    Raises:
        ValueError: For empty, mismatched or zero-norm vectors
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.size == 0 or vb.size == 0:
        raise ValueError("Cannot compare empty vectors")
    if va.shape != vb.shape:
        raise ValueError(f"Vector length mismatch: {va.size} != {vb.size}")
    norm = np.linalg.norm(va) * np.linalg.norm(vb)
    if norm == 0:
        raise ValueError("Cannot compare zero-norm vectors")
    return float(np.clip(np.dot(va, vb) / norm, -1.0, 1.0))


class SimilaritySearch:
    """Cosine similarity search over the full corpus."""

    def __init__(self, embedder: Embedder, store: CorpusStore) -> None:
        self._embedder = embedder
        self._store = store

    async def search(self, query_text: str, limit: int, threshold: float = 0.7) -> list[SearchResult]:
        """
        Rank chunks by cosine similarity to the query.

        Args:
            query_text: Natural-language query
            limit: Maximum results (>= 1)
            threshold: Minimum similarity kept

        Returns:
            list[SearchResult]: Highest similarity first; ties keep scan order

        Raises:
            ValidationError: If limit < 1
            EmbeddingUnavailableError: If the query cannot be embedded
            VectorStoreError: If the corpus cannot be read
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        query_vector = await self._embedder.embed(query_text)
        chunks = await self._store.fetch_all_chunks()

        scored: list[SearchResult] = []
        skipped = 0
        for chunk in chunks:
            if not chunk.vector or len(chunk.vector) != len(query_vector):
                skipped += 1
                continue
            try:
                score = cosine_similarity(query_vector, chunk.vector)
            except ValueError:
                skipped += 1
                continue
            if score >= threshold:
                scored.append(SearchResult(chunk=chunk, score=score))

        if skipped:
            logger.debug(f"{__name__}:search - Skipped {skipped} chunks with unusable vectors")

        # list.sort is stable: equal scores keep scan order
        scored.sort(key=lambda result: result.score, reverse=True)
        results = scored[:limit]
        logger.info(
            f"{__name__}:search - {len(results)} results "
            f"(scanned={len(chunks)}, above_threshold={len(scored)}, threshold={threshold})"
        )
        return results
