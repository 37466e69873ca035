"""
Dependency injection.

The RAG service is built once in the application lifespan and stored on
app.state; handlers receive it through these dependencies.

Dependencies: fastapi, sitechat.application
System role: DI for request handlers
"""

from fastapi import Request

from sitechat.application.services.rag_service import RAGService


def get_rag_service(request: Request) -> RAGService:
    """Return the service created at startup."""
    return request.app.state.rag_service
