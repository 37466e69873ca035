"""
Common API response schemas.

Dependencies: pydantic
System role: Shared response contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error payload returned by exception handlers."""

    success: bool = False
    error: str
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str
    message: str
