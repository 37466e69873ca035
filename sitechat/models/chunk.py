"""
Chunk and search result models.

Typed records produced at the corpus store boundary. Everything above the
boundary works with these instead of raw rows.

Dependencies: pydantic
System role: Retrieval data model
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """
    A stored unit of page text with its decoded embedding vector.

    url and title are joined from the owning page at read time.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Chunk identifier")
    page_id: str = Field(..., description="Owning page identifier")
    content: str = Field(..., min_length=1, description="Chunk text")
    vector: list[float] | None = Field(
        default=None,
        description="Decoded embedding; None when the stored value was empty or corrupt",
    )
    metadata: dict[str, Any] = Field(default_factory=dict, description="Offsets, model name, created-at")
    url: str = Field(..., description="URL of the owning page")
    title: str | None = Field(default=None, description="Title of the owning page")


class SearchResult(BaseModel):
    """
    A chunk annotated with its ranking weight.

    score is the raw value used for ordering (cosine, normalized text score,
    or fused score); similarity is the same value clamped into [0, 1] for
    display.
    """

    chunk: Chunk
    score: float

    @property
    def similarity(self) -> float:
        return min(max(self.score, 0.0), 1.0)

    @property
    def page_id(self) -> str:
        return self.chunk.page_id


class CorpusStats(BaseModel):
    """Corpus size summary."""

    total_chunks: int = Field(..., ge=0)
    unique_pages: int = Field(..., ge=0)
    vector_dimensions: int = Field(
        default=0,
        ge=0,
        description="Dimensionality of the first decodable vector (0 if none)",
    )
