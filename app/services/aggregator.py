"""
Element aggregator - Collects flat records across every model of a project.

Model loads run concurrently and are joined with asyncio.gather, so the
result is only produced once every model has settled. A model that fails
to load, or does not answer within the fetch timeout, contributes no
records. Only the project descriptor is mandatory.
"""

import asyncio
import logging

from app.config import get_settings
from app.core.exceptions import (
    DocumentParseException,
    ProjectNotFoundException,
    StorageException,
)
from app.schemas.project import ModelReference
from app.services.flattener import Record, flatten_model
from app.services.metadata_provider import MetadataProvider
from app.services.metrics import get_metrics_collector

logger = logging.getLogger(__name__)
settings = get_settings()


class ElementAggregator:
    """Builds the Elements collection of a project."""

    def __init__(
        self,
        provider: MetadataProvider,
        fetch_timeout: float | None = None,
        max_concurrency: int | None = None,
    ):
        self.provider = provider
        self.fetch_timeout = (
            fetch_timeout if fetch_timeout is not None else settings.MODEL_FETCH_TIMEOUT
        )
        self.max_concurrency = max(
            1,
            max_concurrency if max_concurrency is not None else settings.MAX_CONCURRENT_MODEL_FETCHES,
        )

    async def aggregate(self, project_id: str) -> list[Record]:
        """
        Aggregate the records of every model referenced by a project.

        Args:
            project_id: Project to aggregate

        Returns:
            Records of all models that loaded, in descriptor model order.
            An empty list when the project references no models.

        Raises:
            ProjectNotFoundException: If the descriptor cannot be loaded
        """
        try:
            project = await asyncio.wait_for(
                self.provider.get_project(project_id),
                timeout=self.fetch_timeout,
            )
        except DocumentParseException as e:
            logger.error(f"Project '{project_id}' descriptor is malformed: {e.reason}")
            raise ProjectNotFoundException(project_id, reason="parse_failure")
        except StorageException as e:
            logger.error(f"Project '{project_id}' could not be loaded: {e.message}")
            reason = "not_found" if e.status_code == 404 else "storage_error"
            raise ProjectNotFoundException(project_id, reason=reason)
        except asyncio.TimeoutError:
            logger.error(
                f"Project '{project_id}' descriptor timed out after {self.fetch_timeout}s"
            )
            raise ProjectNotFoundException(project_id, reason="timeout")

        if not project.models:
            logger.info(f"Project '{project_id}' references no models")
            get_metrics_collector().record_aggregation(project_id, 0, 0, 0)
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *(self._collect_model(project_id, model, semaphore) for model in project.models)
        )

        records = [
            record
            for model_records in results
            if model_records is not None
            for record in model_records
        ]
        loaded = sum(1 for model_records in results if model_records is not None)
        get_metrics_collector().record_aggregation(
            project_id,
            elements=len(records),
            models_loaded=loaded,
            models_skipped=len(project.models) - loaded,
        )
        logger.info(
            f"Aggregated {len(records)} elements from {loaded}/{len(project.models)} "
            f"models of project '{project_id}'"
        )
        return records

    async def _collect_model(
        self,
        project_id: str,
        model: ModelReference,
        semaphore: asyncio.Semaphore,
    ) -> list[Record] | None:
        """Load and flatten one model; None when it could not be loaded."""
        if not model.id:
            logger.warning(
                f"Skipping model reference without an id in project '{project_id}'"
            )
            return None

        async with semaphore:
            try:
                metadata = await asyncio.wait_for(
                    self.provider.get_model_metadata(project_id, model.id),
                    timeout=self.fetch_timeout,
                )
            except DocumentParseException as e:
                logger.warning(
                    f"Skipping model '{model.id}' of project '{project_id}': "
                    f"malformed metadata ({e.reason})"
                )
                return None
            except StorageException as e:
                logger.warning(
                    f"Skipping model '{model.id}' of project '{project_id}': {e.message}"
                )
                return None
            except asyncio.TimeoutError:
                logger.warning(
                    f"Skipping model '{model.id}' of project '{project_id}': "
                    f"timed out after {self.fetch_timeout}s"
                )
                return None

        return list(flatten_model(metadata, project_id, model.id))
