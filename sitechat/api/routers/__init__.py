"""
API routers.
"""

from sitechat.api.routers.chat import router as chat_router
from sitechat.api.routers.health import router as health_router
from sitechat.api.routers.search import router as search_router

__all__ = ["chat_router", "health_router", "search_router"]
