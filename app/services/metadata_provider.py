"""
Metadata provider - Retrieval and decoding of project and model documents.

Each call is a fresh read from the storage backend. Nothing is cached
and nothing is retried; callers decide how to tolerate failures.
"""

import enum
import json
import logging
from typing import Any

from pydantic import ValidationError

from app.core.exceptions import DocumentNotFoundException, DocumentParseException
from app.schemas.project import ProjectDescriptor
from app.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class DocumentKind(str, enum.Enum):
    """Kinds of documents kept in the metadata store."""

    PROJECTS_INDEX = "projects_index"
    PROJECT = "project"
    MODEL_METADATA = "model_metadata"
    OBJECT_PROPERTIES = "object_properties"


# Path templates relative to the storage root
DOCUMENT_PATHS: dict[DocumentKind, str] = {
    DocumentKind.PROJECTS_INDEX: "projects/index.json",
    DocumentKind.PROJECT: "projects/{0}/index.json",
    DocumentKind.MODEL_METADATA: "projects/{0}/models/{1}/metadata.json",
    DocumentKind.OBJECT_PROPERTIES: "projects/{0}/models/{1}/props/{2}.json",
}

_ID_COUNTS = {
    DocumentKind.PROJECTS_INDEX: 0,
    DocumentKind.PROJECT: 1,
    DocumentKind.MODEL_METADATA: 2,
    DocumentKind.OBJECT_PROPERTIES: 3,
}


def document_path(kind: DocumentKind, *ids: str) -> str:
    """
    Build the storage path of a document.

    Raises:
        ValueError: If the number of identifiers does not match the kind
        DocumentNotFoundException: If an identifier cannot name a path segment
    """
    if len(ids) != _ID_COUNTS[kind]:
        raise ValueError(
            f"{kind.value} documents take {_ID_COUNTS[kind]} identifier(s), got {len(ids)}"
        )
    for identifier in ids:
        if (
            not identifier
            or identifier in (".", "..")
            or "/" in identifier
            or "\\" in identifier
        ):
            raise DocumentNotFoundException(
                f"{kind.value}:{identifier}",
                details={"reason": "invalid identifier"},
            )
    return DOCUMENT_PATHS[kind].format(*ids)


class MetadataProvider:
    """Fetches and decodes metadata documents from a storage backend."""

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    async def fetch(self, kind: DocumentKind, *ids: str) -> dict[str, Any]:
        """
        Fetch a document and decode it as a JSON object.

        Args:
            kind: Which document to fetch
            ids: Identifiers filling the document path (project, model, object)

        Returns:
            The decoded document

        Raises:
            DocumentNotFoundException: If the document is absent
            DocumentParseException: If the document is not a JSON object
            StorageException: If the backend fails for another reason
        """
        path = document_path(kind, *ids)
        raw = await self.storage.download_bytes(path)

        try:
            document = json.loads(raw.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DocumentParseException(path, str(e))

        if not isinstance(document, dict):
            raise DocumentParseException(
                path, f"expected a JSON object, got {type(document).__name__}"
            )

        logger.debug(f"Loaded {kind.value} document {path}")
        return document

    async def get_projects(self) -> dict[str, Any]:
        """Fetch the projects index."""
        return await self.fetch(DocumentKind.PROJECTS_INDEX)

    async def get_project(self, project_id: str) -> ProjectDescriptor:
        """
        Fetch and validate a project descriptor.

        Raises:
            DocumentParseException: If the descriptor does not match ProjectDescriptor
        """
        document = await self.fetch(DocumentKind.PROJECT, project_id)
        try:
            return ProjectDescriptor.model_validate(document)
        except ValidationError as e:
            raise DocumentParseException(
                document_path(DocumentKind.PROJECT, project_id),
                f"invalid project descriptor: {e.error_count()} error(s)",
            )

    async def get_model_metadata(self, project_id: str, model_id: str) -> dict[str, Any]:
        """Fetch the metadata tree of one model."""
        return await self.fetch(DocumentKind.MODEL_METADATA, project_id, model_id)

    async def get_object_properties(
        self,
        project_id: str,
        model_id: str,
        object_id: str,
    ) -> dict[str, Any]:
        """Fetch the property set of one object."""
        return await self.fetch(
            DocumentKind.OBJECT_PROPERTIES, project_id, model_id, object_id
        )
