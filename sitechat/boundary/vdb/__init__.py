"""
Corpus store boundary.

Adapters reading the scraped corpus (chunks, page markup) from PostgreSQL or
an in-memory snapshot behind the CorpusStore protocol.
"""

from sitechat.boundary.vdb.protocols import CorpusStore
from sitechat.boundary.vdb.vector_store_factory import get_corpus_store

__all__ = ["CorpusStore", "get_corpus_store"]
