"""
Chat API endpoints.

Routes:
- POST /chat - Answer a question with retrieved site content

Dependencies: sitechat.application.services.rag_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from sitechat.api.deps import get_rag_service
from sitechat.application.services.rag_service import RAGService
from sitechat.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    rag_service: RAGService = Depends(get_rag_service),
) -> ChatResponse:
    """
    Answer a question.

    Generation problems never fail the request: the answer degrades to an
    extractive fallback and degraded is set. Retrieval outages map to 503.

    Args:
        request: ChatRequest with the user message
        rag_service: Injected RAGService

    Returns:
        ChatResponse: Answer with sources
    """
    response = await rag_service.generate_response(request.message)
    return ChatResponse(answer=response.answer, sources=response.sources, degraded=response.degraded)
