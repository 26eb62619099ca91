"""
Business logic services for the BIM OData service.
Services handle core operations separate from API endpoints.
"""

from app.services.aggregator import ElementAggregator
from app.services.element_service import ElementService, resolve_project_id
from app.services.flattener import flatten_model
from app.services.metadata_provider import DocumentKind, MetadataProvider
from app.services.query_engine import QueryOptions, ResultEnvelope, execute_query

__all__ = [
    "DocumentKind",
    "ElementAggregator",
    "ElementService",
    "MetadataProvider",
    "QueryOptions",
    "ResultEnvelope",
    "execute_query",
    "flatten_model",
    "resolve_project_id",
]
