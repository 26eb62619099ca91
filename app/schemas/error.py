"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        404: {"error": "project_not_found", "message": "...", "details": {"projectId": "...", "reason": "not_found"}}
        404: {"error": "not_found", "message": "Document not found: ..."}
        422: {"error": "parse_failure", "message": "...", "details": {...}}
        500: {"error": "storage_error", "message": "..."}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["project_not_found", "not_found", "parse_failure", "storage_error"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
