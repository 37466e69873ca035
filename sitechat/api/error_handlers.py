"""
Exception handlers.

Translate domain exceptions into ErrorResponse JSON with consistent status
codes.

Dependencies: fastapi, sitechat.core.exceptions
System role: HTTP error mapping
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sitechat.core.exceptions import (
    EmbeddingUnavailableError,
    SiteChatException,
    ValidationError,
    VectorStoreError,
)
from sitechat.models.common import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_EXCEPTION: tuple[tuple[type[SiteChatException], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (EmbeddingUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (VectorStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: SiteChatException) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def sitechat_exception_handler(request: Request, exc: SiteChatException) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(
        f"{__name__}:sitechat_exception_handler - {request.method} {request.url.path} "
        f"-> {status_code} {type(exc).__name__}: {exc}"
    )
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SiteChatException, sitechat_exception_handler)
