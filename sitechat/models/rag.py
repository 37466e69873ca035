"""
Answer generator response models.

Dependencies: pydantic
System role: Output contract of the answer generator
"""

from pydantic import BaseModel, Field


class RAGSource(BaseModel):
    """Citation returned alongside an answer."""

    url: str
    title: str = Field(default="Untitled")
    content: str = Field(..., description="Excerpt: meta description or truncated chunk text")
    similarity: float = Field(..., ge=0.0, le=1.0)


class RAGResponse(BaseModel):
    """Answer plus the sources it was grounded on."""

    answer: str
    sources: list[RAGSource] = Field(default_factory=list)
    degraded: bool = Field(default=False, description="True when the answer came from the fallback path")
