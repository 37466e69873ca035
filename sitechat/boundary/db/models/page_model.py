"""
Page ORM model.

One row per scraped URL. Written by the ingestion pipeline; read-only here.

Dependencies: sqlalchemy
System role: Source document storage
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitechat.boundary.db.base import Base, TimestampMixin


class PageModel(Base, TimestampMixin):
    """
    Scraped page.

    Attributes:
        id: Page identifier
        url: Canonical page URL (unique)
        title: Page title, if the scraper found one
        content: Extracted visible text
        raw_html: Raw markup (truncated by the scraper); used for meta descriptions
    """

    __tablename__ = "pages"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    url: Mapped[str] = mapped_column(String(2048), unique=True, nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    raw_html: Mapped[str | None] = mapped_column(Text, nullable=True)

    embeddings: Mapped[list["EmbeddingModel"]] = relationship(  # noqa: F821
        back_populates="page",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<PageModel(id={self.id}, url={self.url})>"
