"""
ORM models for the scraped corpus.
"""

from sitechat.boundary.db.models.embedding_model import EmbeddingModel
from sitechat.boundary.db.models.page_model import PageModel

__all__ = ["PageModel", "EmbeddingModel"]
