"""
Corpus store protocol.

Read-only contract the retrieval core depends on. Implementations return
typed Chunk records with url/title already joined from the owning page.

Dependencies: sitechat.models
System role: Boundary contract between retrieval and storage
"""

from typing import Protocol, runtime_checkable

from sitechat.models.chunk import Chunk, CorpusStats


@runtime_checkable
class CorpusStore(Protocol):
    """Read access to the chunk corpus."""

    async def fetch_all_chunks(self) -> list[Chunk]:
        """Full corpus scan ordered by created-at, then id."""
        ...

    async def text_search(self, query: str, limit: int) -> list[tuple[Chunk, float]]:
        """Lexical matches with their raw relevance score, best first."""
        ...

    async def lookup_raw_markup(self, urls: set[str]) -> dict[str, str]:
        """Raw page markup per url; unknown urls are absent from the result."""
        ...

    async def find_by_url(self, url_fragment: str, limit: int) -> list[Chunk]:
        """Chunks whose page url contains the fragment (case-insensitive), in scan order."""
        ...

    async def get_page_chunks(self, page_id: str) -> list[Chunk]:
        """All chunks of one page, in scan order."""
        ...

    async def get_stats(self) -> CorpusStats:
        ...

    async def close(self) -> None:
        ...
