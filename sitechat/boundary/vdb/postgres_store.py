"""
PostgreSQL corpus store.

Reads chunks joined to their pages through SQLAlchemy async sessions and
answers lexical queries with PostgreSQL full-text search (to_tsvector /
plainto_tsquery ranked by ts_rank_cd).

Dependencies: sqlalchemy, asyncpg, sitechat.boundary.db, sitechat.configs
System role: Production corpus store
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy import Select, cast, distinct, func, literal, select
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from sitechat.boundary.db.connection import get_async_engine, get_async_session_factory
from sitechat.boundary.db.models import EmbeddingModel, PageModel
from sitechat.boundary.vdb.vector_codec import decode_vector, row_to_chunk
from sitechat.configs.settings import Settings
from sitechat.core.exceptions import VectorDecodeError, VectorStoreError
from sitechat.models.chunk import Chunk, CorpusStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _chunk_columns() -> Select:
    """Chunk rows inner-joined to their page; orphan chunks never surface."""
    return select(
        EmbeddingModel.id.label("id"),
        EmbeddingModel.page_id.label("page_id"),
        EmbeddingModel.content.label("content"),
        EmbeddingModel.vector.label("vector"),
        EmbeddingModel.chunk_metadata.label("metadata"),
        PageModel.url.label("url"),
        PageModel.title.label("title"),
    ).join(PageModel, EmbeddingModel.page_id == PageModel.id)


class PostgresCorpusStore:
    """
    Corpus store backed by the pages/embeddings tables.

    Every call is bounded by timeout_seconds. Timeouts and database errors
    surface as VectorStoreError and are not retried.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        timeout_seconds: float = 10.0,
        text_search_config: str = "english",
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._timeout = timeout_seconds
        self._ts_config = text_search_config
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresCorpusStore":
        """Create a store owning its own engine."""
        engine = get_async_engine(settings.database)
        return cls(
            session_factory=get_async_session_factory(engine),
            timeout_seconds=settings.vector_store.timeout_seconds,
            text_search_config=settings.vector_store.text_search_config,
            engine=engine,
        )

    async def _bounded(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:{operation} - Timed out after {self._timeout}s")
            raise VectorStoreError(
                f"Corpus store call timed out after {self._timeout}s",
                operation=operation,
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - Database error: {type(e).__name__}: {e}")
            raise VectorStoreError(
                f"Corpus store query failed: {type(e).__name__}",
                operation=operation,
                details={"error": str(e)},
            ) from e

    async def _scan(self, operation: str, stmt: Select) -> list[Chunk]:
        """Run a chunk select in scan order and coerce the rows."""
        stmt = stmt.order_by(EmbeddingModel.created_at, EmbeddingModel.id)

        async def _run() -> list[Chunk]:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).mappings().all()
            chunks = [row_to_chunk(row) for row in rows]
            return [chunk for chunk in chunks if chunk is not None]

        return await self._bounded(operation, _run())

    async def fetch_all_chunks(self) -> list[Chunk]:
        chunks = await self._scan("fetch_all_chunks", _chunk_columns())
        logger.debug(f"{__name__}:fetch_all_chunks - Loaded {len(chunks)} chunks")
        return chunks

    async def text_search(self, query: str, limit: int) -> list[tuple[Chunk, float]]:
        """
        Full-text match on chunk content.

        Returns:
            list[tuple[Chunk, float]]: Chunks with raw ts_rank_cd score, best first
        """
        if not query.strip() or limit < 1:
            return []

        config = cast(literal(self._ts_config), REGCONFIG)
        document = func.to_tsvector(config, EmbeddingModel.content)
        ts_query = func.plainto_tsquery(config, query)
        rank = func.ts_rank_cd(document, ts_query).label("score")
        stmt = (
            _chunk_columns()
            .add_columns(rank)
            .where(document.op("@@")(ts_query))
            .order_by(rank.desc(), EmbeddingModel.created_at, EmbeddingModel.id)
            .limit(limit)
        )

        async def _run() -> list[tuple[Chunk, float]]:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).mappings().all()
            matches = []
            for row in rows:
                chunk = row_to_chunk(row)
                if chunk is not None:
                    matches.append((chunk, float(row["score"])))
            return matches

        return await self._bounded("text_search", _run())

    async def lookup_raw_markup(self, urls: set[str]) -> dict[str, str]:
        if not urls:
            return {}
        stmt = select(PageModel.url, PageModel.raw_html).where(
            PageModel.url.in_(sorted(urls)),
            PageModel.raw_html.is_not(None),
        )

        async def _run() -> dict[str, str]:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).all()
            return {url: raw_html for url, raw_html in rows}

        return await self._bounded("lookup_raw_markup", _run())

    async def find_by_url(self, url_fragment: str, limit: int) -> list[Chunk]:
        if not url_fragment or limit < 1:
            return []
        stmt = _chunk_columns().where(PageModel.url.icontains(url_fragment, autoescape=True)).limit(limit)
        return await self._scan("find_by_url", stmt)

    async def get_page_chunks(self, page_id: str) -> list[Chunk]:
        return await self._scan("get_page_chunks", _chunk_columns().where(EmbeddingModel.page_id == page_id))

    async def get_stats(self) -> CorpusStats:
        counts_stmt = select(
            func.count(EmbeddingModel.id),
            func.count(distinct(EmbeddingModel.page_id)),
        ).join(PageModel, EmbeddingModel.page_id == PageModel.id)
        sample_stmt = (
            select(EmbeddingModel.id, EmbeddingModel.vector)
            .where(EmbeddingModel.vector.is_not(None))
            .order_by(EmbeddingModel.created_at, EmbeddingModel.id)
            .limit(1)
        )

        async def _run() -> CorpusStats:
            async with self._session_factory() as session:
                total, pages = (await session.execute(counts_stmt)).one()
                sample = (await session.execute(sample_stmt)).first()
            dimensions = 0
            if sample is not None:
                try:
                    dimensions = len(decode_vector(sample.vector, chunk_id=sample.id))
                except VectorDecodeError as e:
                    logger.warning(f"{__name__}:get_stats - Sample vector unreadable: {e.message}")
            return CorpusStats(total_chunks=total, unique_pages=pages, vector_dimensions=dimensions)

        return await self._bounded("get_stats", _run())

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info(f"{__name__}:close - Database engine disposed")
