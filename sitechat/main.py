"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, sitechat.api, sitechat.observability, sitechat.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitechat.api.error_handlers import register_exception_handlers
from sitechat.api.routers import chat_router, health_router, search_router
from sitechat.application.services.rag_service import build_rag_service
from sitechat.configs import get_settings
from sitechat.observability.logger import configure_logging
from sitechat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

# GOOGLE_API_KEY is read by the Gemini clients straight from the environment
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the RAG service once at startup and closes it on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    try:
        rag_service = build_rag_service(settings)
    except Exception as e:
        logger.exception("Failed to initialize application resources", extra={"error": str(e)})
        raise

    app.state.rag_service = rag_service
    logger.info("Application startup complete: RAG service initialized")

    yield

    await rag_service.aclose()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Site Chat RAG API",
        description="Hybrid retrieval question answering over a scraped website",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sitechat.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
