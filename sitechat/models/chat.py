"""
Chat and search API schemas.

Dependencies: pydantic
System role: HTTP request/response contracts
"""

from typing import Literal

from pydantic import BaseModel, Field

from sitechat.models.chunk import Chunk
from sitechat.models.rag import RAGSource

SearchMode = Literal["vector", "text", "hybrid"]


class ChatRequest(BaseModel):
    """Request schema for chat endpoint."""

    message: str = Field(..., min_length=1, max_length=2000, description="User question")


class ChatResponse(BaseModel):
    """Response schema for chat endpoint."""

    answer: str
    sources: list[RAGSource]
    degraded: bool = False


class SearchHit(BaseModel):
    """Single search result as exposed over HTTP."""

    chunk_id: str
    page_id: str
    url: str
    title: str | None = None
    content: str
    score: float
    similarity: float


class SearchResponse(BaseModel):
    """Response schema for search endpoint."""

    query: str
    mode: SearchMode
    results: list[SearchHit]


class ChunkView(BaseModel):
    """Stored chunk as exposed by the lookup endpoints."""

    chunk_id: str
    page_id: str
    url: str
    title: str | None = None
    content: str

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "ChunkView":
        return cls(
            chunk_id=chunk.id,
            page_id=chunk.page_id,
            url=chunk.url,
            title=chunk.title,
            content=chunk.content,
        )
