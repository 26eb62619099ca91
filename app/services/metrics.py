"""
Lightweight Prometheus-compatible metrics collector.

Tracks HTTP traffic (request counts, response times, error rates and
status codes) and aggregation outcomes (elements produced, models that
loaded or were skipped).
"""

import time
from collections import defaultdict
from typing import Any, Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

METRIC_PREFIX = "bim_odata"


def _escape_label(value: Any) -> str:
    """Escape a label value for the text exposition format."""
    return str(value).replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def _format_labels(labels: dict[str, Any]) -> str:
    if not labels:
        return ""
    inner = ",".join(f'{key}="{_escape_label(value)}"' for key, value in labels.items())
    return "{" + inner + "}"


class MetricsCollector:
    """
    In-process metrics collector.

    Counters live for the lifetime of the process and are exposed as a
    JSON summary or in Prometheus text format.
    """

    def __init__(self) -> None:
        self._request_count: dict[tuple[str, str], int] = defaultdict(int)
        self._error_count: dict[tuple[str, str], int] = defaultdict(int)
        self._response_time_sum: dict[tuple[str, str], float] = defaultdict(float)
        self._status_counts: dict[int, int] = defaultdict(int)
        self._aggregations: dict[str, int] = defaultdict(int)
        self._elements: dict[str, int] = defaultdict(int)
        self._models_loaded: dict[str, int] = defaultdict(int)
        self._models_skipped: dict[str, int] = defaultdict(int)
        self._start_time: float = time.time()

    def record_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
    ) -> None:
        """Record a completed request."""
        key = (method, path)
        self._request_count[key] += 1
        self._response_time_sum[key] += duration
        self._status_counts[status_code] += 1

        if status_code >= 400:
            self._error_count[key] += 1

    def record_aggregation(
        self,
        project_id: str,
        elements: int,
        models_loaded: int,
        models_skipped: int,
    ) -> None:
        """Record the outcome of one project aggregation."""
        self._aggregations[project_id] += 1
        self._elements[project_id] += elements
        self._models_loaded[project_id] += models_loaded
        self._models_skipped[project_id] += models_skipped

    def get_metrics(self) -> dict[str, Any]:
        """Get metrics as a structured dictionary."""
        total_requests = sum(self._request_count.values())
        total_errors = sum(self._error_count.values())

        return {
            "uptime_seconds": round(time.time() - self._start_time, 2),
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(total_errors / total_requests, 4) if total_requests > 0 else 0,
            "requests_by_endpoint": {
                f"{method} {path}": count for (method, path), count in self._request_count.items()
            },
            "status_code_counts": {str(k): v for k, v in sorted(self._status_counts.items())},
            "avg_response_time_ms": {
                f"{method} {path}": round(
                    self._response_time_sum[(method, path)] / count * 1000, 2
                )
                for (method, path), count in self._request_count.items()
            },
            "aggregations": {
                project_id: {
                    "runs": runs,
                    "elements": self._elements[project_id],
                    "models_loaded": self._models_loaded[project_id],
                    "models_skipped": self._models_skipped[project_id],
                }
                for project_id, runs in sorted(self._aggregations.items())
            },
        }

    def to_prometheus(self) -> str:
        """
        Export metrics in Prometheus text exposition format.
        See: https://prometheus.io/docs/instrumenting/exposition_formats/
        """
        lines: list[str] = []

        def emit(name: str, kind: str, help_text: str, samples: Iterable[tuple[dict, Any]]) -> None:
            full_name = f"{METRIC_PREFIX}_{name}"
            lines.append(f"# HELP {full_name} {help_text}")
            lines.append(f"# TYPE {full_name} {kind}")
            for labels, value in samples:
                lines.append(f"{full_name}{_format_labels(labels)} {value}")
            lines.append("")

        emit(
            "uptime_seconds", "gauge", "Time since service start in seconds",
            [({}, f"{time.time() - self._start_time:.2f}")],
        )
        emit(
            "http_requests_total", "counter", "Total HTTP requests",
            [({"method": m, "path": p}, c) for (m, p), c in sorted(self._request_count.items())],
        )
        emit(
            "http_errors_total", "counter", "Total HTTP errors (4xx/5xx)",
            [({"method": m, "path": p}, c) for (m, p), c in sorted(self._error_count.items())],
        )
        emit(
            "http_status_total", "counter", "HTTP responses by status code",
            [({"code": code}, c) for code, c in sorted(self._status_counts.items())],
        )
        emit(
            "http_response_time_seconds", "gauge", "Average response time in seconds",
            [
                ({"method": m, "path": p}, f"{self._response_time_sum[(m, p)] / c:.6f}")
                for (m, p), c in sorted(self._request_count.items())
            ],
        )
        emit(
            "aggregations_total", "counter", "Project aggregations run",
            [({"project": p}, c) for p, c in sorted(self._aggregations.items())],
        )
        emit(
            "elements_aggregated_total", "counter", "Elements produced by aggregations",
            [({"project": p}, c) for p, c in sorted(self._elements.items())],
        )
        emit(
            "models_loaded_total", "counter", "Models loaded by aggregations",
            [({"project": p}, c) for p, c in sorted(self._models_loaded.items())],
        )
        emit(
            "models_skipped_total", "counter", "Models skipped because they failed to load",
            [({"project": p}, c) for p, c in sorted(self._models_skipped.items())],
        )

        return "\n".join(lines) + "\n"


# Path segments followed by a caller-chosen identifier
_ID_SEGMENTS = {"projects", "models", "objects"}


def normalize_path(path: str) -> str:
    """Replace project/model/object identifiers with {id} for aggregation."""
    parts = path.split("/")
    normalized = []
    for i, part in enumerate(parts):
        if i > 0 and parts[i - 1] in _ID_SEGMENTS and part:
            normalized.append("{id}")
        else:
            normalized.append(part)
    return "/".join(normalized)


# Global singleton
_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    ASGI middleware that records request metrics.

    Measures request duration and records status codes
    for every request except the metrics endpoints.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if "/metrics" in request.url.path:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        get_metrics_collector().record_request(
            method=request.method,
            path=normalize_path(request.url.path),
            status_code=response.status_code,
            duration=duration,
        )

        return response
