"""
In-memory corpus store.

Loads a page/embedding snapshot (records or a JSON file) and serves it with
the same contract as the PostgreSQL store. Lexical relevance is BM25 over
lower-cased word tokens with English stop words removed.

Dependencies: rank_bm25, sitechat.boundary.vdb.vector_codec
System role: Corpus store for local development and tests
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from rank_bm25 import BM25Plus

from sitechat.boundary.vdb.vector_codec import row_to_chunk
from sitechat.core.exceptions import VectorStoreError
from sitechat.models.chunk import Chunk, CorpusStats

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

STOP_WORDS = frozenset(
    """
    a about above after again against all am an and any are as at be because been
    before being below between both but by can could did do does doing down during
    each few for from further had has have having he her here hers herself him
    himself his how i if in into is it its itself just me more most my myself no nor
    not now of off on once only or other our ours ourselves out over own same she
    should so some such than that the their theirs them themselves then there these
    they this those through to too under until up very was we were what when where
    which while who whom why will with would you your yours yourself yourselves
    """.split()
)


def tokenize(text: str) -> list[str]:
    """Lower-case word tokens without English stop words."""
    return [token for token in TOKEN_PATTERN.findall(text.lower()) if token not in STOP_WORDS]


class InMemoryCorpusStore:
    """
    Read-only corpus held in process memory.

    Chunks whose page_id has no page record are dropped, matching the inner
    join performed by the PostgreSQL store.
    """

    def __init__(self, pages: list[dict[str, Any]], embeddings: list[dict[str, Any]]) -> None:
        pages_by_id = {str(page["id"]): page for page in pages}
        self._markup = {
            page["url"]: page["raw_html"] for page in pages if page.get("raw_html")
        }
        self._page_count = len(pages_by_id)

        ordered = sorted(
            embeddings,
            key=lambda record: (str(record.get("created_at") or ""), str(record["id"])),
        )
        chunks: list[Chunk] = []
        orphans = 0
        for record in ordered:
            page = pages_by_id.get(str(record["page_id"]))
            if page is None:
                orphans += 1
                continue
            chunk = row_to_chunk(
                {**record, "url": page["url"], "title": page.get("title")}
            )
            if chunk is not None:
                chunks.append(chunk)
        if orphans:
            logger.warning(f"{__name__}:__init__ - Dropped {orphans} chunks without a page")

        self._chunks = chunks
        self._tokens = [tokenize(chunk.content) for chunk in chunks]
        self._token_sets = [set(tokens) for tokens in self._tokens]
        # BM25Plus divides by the average document length
        self._bm25 = BM25Plus(self._tokens) if any(self._tokens) else None

        logger.info(
            f"{__name__}:__init__ - Loaded {len(chunks)} chunks from {self._page_count} pages"
        )

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryCorpusStore":
        """
        Load a corpus snapshot file of the form {"pages": [...], "embeddings": [...]}.

        Raises:
            VectorStoreError: If the file cannot be read or parsed
        """
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise VectorStoreError(
                f"Failed to load corpus file: {e}",
                operation="load",
                details={"path": str(path)},
            ) from e
        return cls(payload.get("pages", []), payload.get("embeddings", []))

    async def fetch_all_chunks(self) -> list[Chunk]:
        return list(self._chunks)

    async def text_search(self, query: str, limit: int) -> list[tuple[Chunk, float]]:
        """Rank chunks sharing at least one query term by BM25 score."""
        query_tokens = tokenize(query)
        if not query_tokens or self._bm25 is None or limit < 1:
            return []

        scores = self._bm25.get_scores(query_tokens)
        query_set = set(query_tokens)
        matches = [
            (chunk, float(scores[index]))
            for index, chunk in enumerate(self._chunks)
            if self._token_sets[index] & query_set
        ]
        matches.sort(key=lambda match: match[1], reverse=True)
        return matches[:limit]

    async def lookup_raw_markup(self, urls: set[str]) -> dict[str, str]:
        return {url: self._markup[url] for url in urls if url in self._markup}

    async def find_by_url(self, url_fragment: str, limit: int) -> list[Chunk]:
        needle = url_fragment.lower()
        if not needle or limit < 1:
            return []
        return [chunk for chunk in self._chunks if needle in chunk.url.lower()][:limit]

    async def get_page_chunks(self, page_id: str) -> list[Chunk]:
        return [chunk for chunk in self._chunks if chunk.page_id == page_id]

    async def get_stats(self) -> CorpusStats:
        return CorpusStats(
            total_chunks=len(self._chunks),
            unique_pages=len({chunk.page_id for chunk in self._chunks}),
            vector_dimensions=self._first_dimension(),
        )

    def _first_dimension(self) -> int:
        for chunk in self._chunks:
            if chunk.vector:
                return len(chunk.vector)
        return 0

    async def close(self) -> None:
        return None
