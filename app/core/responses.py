"""
Response utilities for the BIM OData service.
Provides standardized response formatting.
"""

import json
from typing import Any

from fastapi.responses import JSONResponse, Response

ODATA_VERSION = "4.0"


def create_error_response(
    error: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error: Error code string
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details

    Returns:
        JSONResponse with error payload
    """
    content = {
        "error": error,
        "message": message,
    }
    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)


def create_odata_response(
    data: Any,
    status_code: int = 200,
) -> Response:
    """
    Create an OData JSON response.

    The body is rendered with a fixed layout so identical payloads
    always produce identical bytes.

    Args:
        data: Response payload
        status_code: HTTP status code (default 200)

    Returns:
        Response with the JSON body and OData headers
    """
    body = json.dumps(data, ensure_ascii=False, indent=2)
    return Response(
        content=body.encode("utf-8"),
        status_code=status_code,
        media_type="application/json",
        headers={"OData-Version": ODATA_VERSION},
    )


def create_xml_response(document: str) -> Response:
    """Create an OData XML response (used for $metadata)."""
    return Response(
        content=document,
        media_type="application/xml",
        headers={"OData-Version": ODATA_VERSION},
    )
