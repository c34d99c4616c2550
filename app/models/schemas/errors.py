"""Error response schemas for OpenAPI documentation."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Structured error envelope."""

    code: str = Field(
        ...,
        description="Error code for client-side handling",
        examples=["STORAGE_ERROR"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Error loading file"],
    )
    error_id: Optional[str] = Field(
        None,
        description="Unique error ID for log correlation",
        examples=["3f9c2a1b"],
    )
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error context",
        examples=[{"reason": "Expecting value: line 1 column 1 (char 0)"}],
    )
    path: Optional[str] = Field(
        None,
        description="Request path that caused the error",
        examples=["/load-file/harbour-route.json"],
    )


class APIErrorResponse(BaseModel):
    """Body of every error response."""

    message: str = Field(
        ...,
        description="Same text as error.message",
        examples=["Error loading file"],
    )
    error: ErrorResponse = Field(..., description="Error details")
