"""
Request logging with correlation IDs.

Every request gets a correlation ID, taken from the inbound
``X-Correlation-ID`` header when the caller sent one. It is bound to
``correlation_id_var`` for the lifetime of the request, so all log records
emitted while serving it carry the ID, and it is echoed back in the
response headers.
"""

import logging
import time
import uuid

from core.logging_context import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class ObservabilityMiddleware:
    """Binds a correlation ID and writes one log line per finished request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        request.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)
        started = time.perf_counter()

        try:
            response = self.get_response(request)
            elapsed = time.perf_counter() - started
            self._log_finished(request, response.status_code, elapsed)
        except Exception:
            logger.exception(
                "Unhandled error while serving %s %s",
                request.method,
                request.path,
                extra={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
            raise
        finally:
            correlation_id_var.reset(token)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{elapsed:.3f}"
        return response

    @staticmethod
    def _log_finished(request, status_code: int, elapsed: float) -> None:
        extra = {
            "method": request.method,
            "path": request.path,
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 2),
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        brand = getattr(request, "brand", None)
        if brand is not None:
            extra["brand_id"] = str(brand.id)
        logger.log(
            _level_for(status_code),
            "%s %s -> %s",
            request.method,
            request.path,
            status_code,
            extra=extra,
        )
