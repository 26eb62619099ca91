"""
Flattener - Turns one model's metadata tree into flat Element records.

The tree is already flat (objects point at their parent by id), so
flattening is a single pass in the document's own order. Every record
carries every Element field; absent values are explicit None.
"""

import json
import logging
from typing import Any, Iterator

from app.schemas.odata.edm import ELEMENT_FIELDS

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def serialize_attributes(attributes: Any) -> str | None:
    """Serialize an attributes value to a compact JSON string."""
    if attributes is None:
        return None
    return json.dumps(attributes, ensure_ascii=False, separators=(",", ":"))


def _optional(value: Any) -> Any:
    """Map empty values to None, keep everything else."""
    if value is None or value == "":
        return None
    return value


def build_record(
    object_id: str,
    meta_object: dict[str, Any],
    project_id: str,
    model_id: str,
) -> Record:
    """Build one flat record from a MetaObject, keyed in Element field order."""
    values = {
        "id": object_id,
        "projectId": project_id,
        "modelId": model_id,
        "name": _optional(meta_object.get("name")),
        "type": _optional(meta_object.get("type")),
        "parent": _optional(meta_object.get("parent")),
        "attributes": serialize_attributes(meta_object.get("attributes")),
    }
    return {field: values.get(field) for field in ELEMENT_FIELDS}


def _iter_meta_objects(meta_objects: Any) -> Iterator[tuple[str, dict[str, Any]]]:
    """
    Yield (objectId, MetaObject) pairs.

    Accepts a mapping keyed by objectId or a list of MetaObjects that
    carry their own "id".
    """
    if isinstance(meta_objects, dict):
        for object_id, meta_object in meta_objects.items():
            if isinstance(meta_object, dict):
                yield str(object_id), meta_object
            else:
                yield str(object_id), {}
    elif isinstance(meta_objects, list):
        for meta_object in meta_objects:
            if not isinstance(meta_object, dict) or _optional(meta_object.get("id")) is None:
                logger.debug("Skipping metaObject without an id")
                continue
            yield str(meta_object["id"]), meta_object
    elif meta_objects:
        logger.warning(
            f"Unsupported metaObjects container: {type(meta_objects).__name__}"
        )


def flatten_model(
    metadata: dict[str, Any],
    project_id: str,
    model_id: str,
) -> Iterator[Record]:
    """
    Flatten a model metadata tree.

    Args:
        metadata: Decoded metadata.json document
        project_id: Owning project
        model_id: Owning model

    Yields:
        One record per MetaObject, in document order
    """
    for object_id, meta_object in _iter_meta_objects(metadata.get("metaObjects")):
        yield build_record(object_id, meta_object, project_id, model_id)
