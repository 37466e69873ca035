"""
Search and corpus statistics endpoints.

Routes:
- GET /search - Run vector, text or hybrid retrieval directly
- GET /stats - Corpus size summary
- GET /chunks - Chunks whose page url contains a fragment
- GET /pages/{page_id}/chunks - All chunks of one page

Dependencies: sitechat.application.services.rag_service
System role: Retrieval inspection HTTP API
"""

from fastapi import APIRouter, Depends, Query

from sitechat.api.deps import get_rag_service
from sitechat.application.services.rag_service import RAGService
from sitechat.models.chat import ChunkView, SearchHit, SearchMode, SearchResponse
from sitechat.models.chunk import CorpusStats

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse)
async def search(
    query: str = Query(..., min_length=1, max_length=500),
    mode: SearchMode = Query(default="hybrid"),
    limit: int = Query(default=5, ge=1, le=50),
    rag_service: RAGService = Depends(get_rag_service),
) -> SearchResponse:
    """Ranked chunks for a query using the selected retrieval path."""
    results = await rag_service.search(query, mode=mode, limit=limit)
    hits = [
        SearchHit(
            chunk_id=result.chunk.id,
            page_id=result.chunk.page_id,
            url=result.chunk.url,
            title=result.chunk.title,
            content=result.chunk.content,
            score=result.score,
            similarity=result.similarity,
        )
        for result in results
    ]
    return SearchResponse(query=query, mode=mode, results=hits)


@router.get("/stats", response_model=CorpusStats)
async def stats(rag_service: RAGService = Depends(get_rag_service)) -> CorpusStats:
    """Chunk and page counts of the loaded corpus."""
    return await rag_service.get_stats()


@router.get("/chunks", response_model=list[ChunkView])
async def chunks_by_url(
    url: str = Query(..., min_length=1, max_length=500, description="Case-insensitive url fragment"),
    limit: int = Query(default=10, ge=1, le=100),
    rag_service: RAGService = Depends(get_rag_service),
) -> list[ChunkView]:
    """Stored chunks of every page whose url contains the fragment."""
    return [ChunkView.from_chunk(chunk) for chunk in await rag_service.find_by_url(url, limit=limit)]


@router.get("/pages/{page_id}/chunks", response_model=list[ChunkView])
async def page_chunks(
    page_id: str,
    rag_service: RAGService = Depends(get_rag_service),
) -> list[ChunkView]:
    """Chunks of one page in stored order; empty for an unknown page."""
    return [ChunkView.from_chunk(chunk) for chunk in await rag_service.get_page_chunks(page_id)]
