"""
HTTP API layer.
"""

from sitechat.api.routers import chat_router, health_router, search_router

__all__ = ["chat_router", "health_router", "search_router"]
