"""
Custom exceptions for the BIM OData service.
Every failure surfaced to a client is rendered from one of these.
"""

from typing import Any


class ODataServiceException(Exception):
    """Base exception for all service errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class StorageException(ODataServiceException):
    """500 - Storage backend error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="storage_error",
            message=message,
            status_code=500,
            details=details,
        )


class DocumentNotFoundException(StorageException):
    """404 - Document absent from the backing store."""

    def __init__(self, path: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Document not found: {path}",
            details={"path": path, **(details or {})},
        )
        self.error = "not_found"
        self.status_code = 404
        self.path = path


class DocumentParseException(ODataServiceException):
    """422 - Document present but malformed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            error="parse_failure",
            message=f"Document could not be parsed: {path}",
            status_code=422,
            details={"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class ProjectNotFoundException(ODataServiceException):
    """404 - Project descriptor missing or unreadable."""

    def __init__(self, project_id: str, reason: str = "not_found"):
        super().__init__(
            error="project_not_found",
            message=f"Project '{project_id}' not found",
            status_code=404,
            details={"projectId": project_id, "reason": reason},
        )
        self.project_id = project_id
        self.reason = reason
