"""
Embedding ORM model.

One row per chunk. The vector column is canonically a JSON array (JSONB on
PostgreSQL); legacy rows holding a JSON-encoded string are still readable
through the vector codec.

Dependencies: sqlalchemy
System role: Chunk storage for retrieval
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitechat.boundary.db.base import Base, TimestampMixin

JSONColumnType = JSON().with_variant(JSONB(), "postgresql")


class EmbeddingModel(Base, TimestampMixin):
    """
    Stored chunk with its embedding.

    Attributes:
        id: Chunk identifier
        page_id: Owning page
        content: Chunk text
        vector: Embedding (JSON array, or legacy JSON string)
        chunk_metadata: Offsets, chunk length, model name (column "metadata")
    """

    __tablename__ = "embeddings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    page_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    vector: Mapped[Any] = mapped_column(JSONColumnType, nullable=True)
    chunk_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONColumnType,
        nullable=False,
        default=dict,
    )

    page: Mapped["PageModel"] = relationship(back_populates="embeddings")  # noqa: F821

    def __repr__(self) -> str:
        return f"<EmbeddingModel(id={self.id}, page_id={self.page_id})>"


# Lexical index backing text_search; PostgreSQL only.
Index(
    "ix_embeddings_content_fts",
    func.to_tsvector("english", EmbeddingModel.content),
    postgresql_using="gin",
).ddl_if(dialect="postgresql")
