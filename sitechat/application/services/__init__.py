"""
Application services.
"""

from sitechat.application.services.rag_service import RAGService, build_rag_service

__all__ = ["RAGService", "build_rag_service"]
