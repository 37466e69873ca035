"""
Retrieval: dense similarity search, lexical search and their hybrid fusion.
"""

from sitechat.core.retrieval.hybrid import HybridRanker
from sitechat.core.retrieval.lexical import LexicalSearch
from sitechat.core.retrieval.similarity import SimilaritySearch, cosine_similarity

__all__ = ["HybridRanker", "LexicalSearch", "SimilaritySearch", "cosine_similarity"]
