"""
Element service - Business logic behind the Elements entity set.
Resolves the target project, aggregates its models and runs the query.
"""

import logging
import re

from app.config import get_settings
from app.services.aggregator import ElementAggregator
from app.services.metadata_provider import MetadataProvider
from app.services.query_engine import QueryOptions, ResultEnvelope, execute_query

logger = logging.getLogger(__name__)
settings = get_settings()

_PROJECT_CLAUSE = re.compile(r"projectId eq '([^']+)'")


def resolve_project_id(filter_expression: str | None, default: str | None = None) -> str:
    """
    Pick the project an Elements query targets.

    Uses the first "projectId eq '<id>'" clause of $filter, falling back
    to the configured default project.
    """
    if filter_expression:
        match = _PROJECT_CLAUSE.search(filter_expression)
        if match:
            return match.group(1)
    return default or settings.DEFAULT_PROJECT_ID


class ElementService:
    """Service class for Elements queries."""

    def __init__(self, provider: MetadataProvider, aggregator: ElementAggregator | None = None):
        self.provider = provider
        self.aggregator = aggregator or ElementAggregator(provider)

    async def query(self, project_id: str, options: QueryOptions) -> ResultEnvelope:
        """
        Aggregate a project's elements and apply query options.

        Args:
            project_id: Project to query
            options: Filter, projection and paging options

        Returns:
            ResultEnvelope for the project

        Raises:
            ProjectNotFoundException: If the project descriptor cannot be loaded
        """
        records = await self.aggregator.aggregate(project_id)
        envelope = execute_query(records, options)
        logger.debug(
            f"Elements query on '{project_id}' returned {len(envelope.value)} "
            f"of {envelope.total_count} elements"
        )
        return envelope
