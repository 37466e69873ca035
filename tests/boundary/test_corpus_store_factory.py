"""
Test suite for get_corpus_store.

System role: Verification of store selection by configuration
"""

import json
from unittest.mock import patch

import pytest

from sitechat.boundary.vdb.memory_store import InMemoryCorpusStore
from sitechat.boundary.vdb.vector_store_factory import get_corpus_store
from sitechat.configs.settings import Settings
from sitechat.configs.vector_store import VectorStoreSettings


def _settings(**vector_store) -> Settings:
    return Settings(vector_store=VectorStoreSettings(**vector_store))


class TestGetCorpusStore:
    """Test suite for get_corpus_store."""

    @pytest.mark.asyncio
    async def test_memory_type_should_load_corpus_file(self, tmp_path, corpus_pages, corpus_embeddings) -> None:
        path = tmp_path / "corpus.json"
        path.write_text(json.dumps({"pages": corpus_pages, "embeddings": corpus_embeddings}))

        store = get_corpus_store(_settings(store_type="memory", corpus_path=str(path)))

        assert isinstance(store, InMemoryCorpusStore)
        assert (await store.get_stats()).total_chunks == 3

    def test_memory_type_without_path_should_be_empty(self) -> None:
        assert isinstance(get_corpus_store(_settings(store_type="MEMORY")), InMemoryCorpusStore)

    def test_postgres_type_should_build_from_settings(self) -> None:
        settings = _settings(store_type="postgres")

        with patch(
            "sitechat.boundary.vdb.vector_store_factory.PostgresCorpusStore.from_settings"
        ) as from_settings:
            store = get_corpus_store(settings)

        from_settings.assert_called_once_with(settings)
        assert store is from_settings.return_value

    def test_unknown_type_should_raise(self) -> None:
        with pytest.raises(ValueError, match="Invalid VECTOR_STORE_STORE_TYPE"):
            get_corpus_store(_settings(store_type="faiss"))
