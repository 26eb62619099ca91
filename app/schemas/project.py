"""
Pydantic schemas for project documents.
Mirrors the JSON files kept under projects/ in the metadata store.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_identifier(value: Any) -> str | None:
    """Coerce a scalar id or name to a string; anything else is absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class ModelReference(BaseModel):
    """
    One model listed by a project descriptor.

    A reference without a usable id is kept so that only that model is
    skipped during aggregation.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, description="Model identifier")
    name: str | None = Field(default=None, description="Display name")

    @field_validator("id", "name", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> str | None:
        return _as_identifier(v)


class ProjectDescriptor(BaseModel):
    """
    Project descriptor (projects/{projectId}/index.json).

    Only the model list matters for aggregation; viewer-specific keys
    such as "viewerConfigs" or "viewerContent" are carried through.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, description="Project identifier")
    name: str | None = Field(default=None, description="Display name")
    models: list[ModelReference] = Field(
        default_factory=list,
        description="Ordered model references",
    )

    @field_validator("id", "name", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> str | None:
        return _as_identifier(v)

    @field_validator("models", mode="before")
    @classmethod
    def normalize_models(cls, v: Any) -> Any:
        """A null list is empty; entries that are not objects become id-less references."""
        if v is None:
            return []
        if isinstance(v, list):
            return [entry if isinstance(entry, dict) else {} for entry in v]
        return v


class ProjectSummary(BaseModel):
    """Entry of the projects index (projects/index.json)."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None


class ProjectListResponse(BaseModel):
    """Response for the projects index endpoint."""

    projects: list[ProjectSummary]
    total: int


class ObjectPropertiesResponse(BaseModel):
    """Property set of a single object within a model."""

    model_config = ConfigDict(extra="allow")

    projectId: str
    modelId: str
    objectId: str
    properties: dict[str, Any]
