"""
Pydantic models shared across layers.
"""

from sitechat.models.chunk import Chunk, CorpusStats, SearchResult
from sitechat.models.rag import RAGResponse, RAGSource

__all__ = ["Chunk", "SearchResult", "CorpusStats", "RAGSource", "RAGResponse"]
