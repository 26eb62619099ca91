"""
Pytest configuration and fixtures for BIM OData service tests.
"""

import json
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.config import get_settings
from app.main import app
from app.services.metadata_provider import MetadataProvider
from app.storage import LocalStorageBackend, get_storage

ARCHITECTURE_METADATA = {
    "id": "architecture",
    "projectId": "Hospital",
    "metaObjects": {
        "building": {"name": "Hospital", "type": "IfcBuilding", "parent": None},
        "wall-1": {
            "name": "North Wall",
            "type": "Wall",
            "parent": "building",
            "attributes": {"fireRating": "EI60", "loadBearing": True},
        },
        "door-1": {"name": "Main Door", "type": "Door", "parent": "wall-1"},
    },
}

# Viewer layout: a list of objects carrying their own id
MECHANICAL_METADATA = {
    "id": "mechanical",
    "projectId": "Hospital",
    "metaObjects": [
        {"id": "pump-1", "name": "Main Pump A", "type": "Pump", "parent": "building"},
        {"id": "pump-2", "name": "Backup pump B", "type": "Pump"},
    ],
}


def write_json(root: Path, relative: str, document: Any) -> None:
    """Write a JSON document under a data root."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")


def write_raw(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """
    Data directory with sample projects.

    Hospital: two loadable models (5 elements) and one missing model.
    Empty: no models.
    Broken: unparseable descriptor.
    Partial: one model with 3 elements, one with malformed metadata.
    """
    root = tmp_path / "data"

    write_json(root, "projects/index.json", {
        "projects": [
            {"id": "Hospital", "name": "Riverside Hospital"},
            {"id": "Empty", "name": "Empty Project"},
            {"name": "no id"},
        ],
    })

    write_json(root, "projects/Hospital/index.json", {
        "id": "Hospital",
        "name": "Riverside Hospital",
        "models": [
            {"id": "architecture", "name": "Architecture"},
            {"id": "mechanical", "name": "Mechanical"},
            {"id": "missing", "name": "Not on disk"},
        ],
        "viewerConfigs": {"backgroundColor": [0.9, 0.9, 1.0]},
    })
    write_json(root, "projects/Hospital/models/architecture/metadata.json", ARCHITECTURE_METADATA)
    write_json(root, "projects/Hospital/models/mechanical/metadata.json", MECHANICAL_METADATA)
    write_json(
        root,
        "projects/Hospital/models/architecture/props/wall-1.json",
        {"id": "wall-1", "propertySets": [{"name": "Pset_WallCommon", "properties": []}]},
    )

    write_json(root, "projects/Empty/index.json", {"id": "Empty", "models": []})

    write_raw(root, "projects/Broken/index.json", "{ not json")

    write_json(root, "projects/Partial/index.json", {
        "id": "Partial",
        "models": [{"id": "a"}, {"id": "b"}],
    })
    write_json(root, "projects/Partial/models/a/metadata.json", {
        "metaObjects": {
            "1": {"name": "One", "type": "Wall"},
            "2": {"name": "Two", "type": "Door"},
            "3": {"name": "Three", "type": "Slab"},
        },
    })
    write_raw(root, "projects/Partial/models/b/metadata.json", "[truncated")

    return root


@pytest.fixture
def write_document():
    """Helper for tests that add documents to the data directory."""
    return write_json


@pytest.fixture
def storage(data_dir) -> LocalStorageBackend:
    """Local storage backend over the sample data directory."""
    return LocalStorageBackend(base_path=str(data_dir))


@pytest.fixture
def provider(storage) -> MetadataProvider:
    return MetadataProvider(storage)


@pytest.fixture
def default_project(monkeypatch) -> str:
    """Point the default project at the sample Hospital project."""
    monkeypatch.setattr(get_settings(), "DEFAULT_PROJECT_ID", "Hospital")
    return "Hospital"


@pytest_asyncio.fixture(scope="function")
async def client(storage, default_project) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    def override_get_storage():
        return storage

    app.dependency_overrides[get_storage] = override_get_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
