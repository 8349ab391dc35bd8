"""
Prometheus request metrics.

Paths are reduced to route templates before being used as a label, so a
UUID or a license key in the URL does not create a new time series.
"""

import re
import time

from core.metrics import http_request_duration_seconds, http_requests_total

_PLACEHOLDERS = (
    (re.compile(r"/[0-9a-f]{8}(?:-[0-9a-f]{4}){3}-[0-9a-f]{12}"), "/{id}"),
    (re.compile(r"/[A-Z0-9]{4}-\d{4}-[A-F0-9]{12}"), "/{license_key}"),
)


def normalize_endpoint(path: str) -> str:
    """Replace ids and license keys in ``path`` with placeholders."""
    for pattern, placeholder in _PLACEHOLDERS:
        path = pattern.sub(placeholder, path)
    return path


class MetricsMiddleware:
    """Counts requests and observes their latency per method and route."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        endpoint = normalize_endpoint(request.path)
        started = time.perf_counter()
        # Requests that raise are counted as 500s.
        status_code = 500
        try:
            response = self.get_response(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_total.labels(request.method, endpoint, status_code).inc()
            http_request_duration_seconds.labels(request.method, endpoint).observe(
                time.perf_counter() - started
            )
