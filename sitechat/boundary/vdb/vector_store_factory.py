"""
Corpus store factory for selecting between in-memory (dev) and PostgreSQL (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: sitechat.boundary.vdb, sitechat.configs
System role: Corpus store instantiation and selection
"""

import logging

from sitechat.boundary.vdb.memory_store import InMemoryCorpusStore
from sitechat.boundary.vdb.postgres_store import PostgresCorpusStore
from sitechat.boundary.vdb.protocols import CorpusStore
from sitechat.configs.settings import Settings

logger = logging.getLogger(__name__)


def get_corpus_store(settings: Settings) -> CorpusStore:
    """
    Factory function to get corpus store based on environment configuration.

    Args:
        settings: Application settings

    Returns:
        CorpusStore: InMemoryCorpusStore or PostgresCorpusStore

    Raises:
        ValueError: If VECTOR_STORE_STORE_TYPE is invalid
    """
    store_type = settings.vector_store.store_type.lower()

    if store_type == "memory":
        corpus_path = settings.vector_store.corpus_path
        logger.info(
            f"{__name__}:get_corpus_store - Creating in-memory corpus store "
            f"(local dev mode, corpus={corpus_path})"
        )
        if corpus_path is None:
            return InMemoryCorpusStore(pages=[], embeddings=[])
        return InMemoryCorpusStore.from_json_file(corpus_path)

    elif store_type == "postgres":
        logger.info(f"{__name__}:get_corpus_store - Creating PostgreSQL corpus store (production mode)")
        return PostgresCorpusStore.from_settings(settings)

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'memory' (dev) or 'postgres' (production)."
        )
