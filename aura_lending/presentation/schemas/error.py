"""Pydantic schema for API error responses."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["INSUFFICIENT_CREDIT_SCORE"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Credit score too low for working_capital. Minimum 650 required, got 640"],
    )
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Structured context for the error, when available",
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "INSUFFICIENT_CREDIT_SCORE",
                    "message": "Credit score too low for working_capital. Minimum 650 required, got 640",
                    "details": {"product": "working_capital", "required": 650, "actual": 640},
                    "request_id": "abc123",
                }
            ]
        }
    }
