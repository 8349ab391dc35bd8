"""
Operational endpoints: liveness, database check, readiness and the
Prometheus scrape target. None of them require an API key.
"""

import logging

from django.conf import settings
from django.db import DatabaseError, connections
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

logger = logging.getLogger(__name__)


def database_available(alias=None) -> bool:
    """True when ``SELECT 1`` succeeds on the licensing database."""
    alias = alias or getattr(settings, "LICENSING_DATABASE_ALIAS", "default")
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError:
        logger.exception("Database %s is unreachable", alias)
        return False
    return True


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness: the process is up and serving requests."""

    def get(self, _request):
        return JsonResponse({"status": "healthy", "service": "multi-brand-licensing"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    def get(self, _request):
        if database_available():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness: every backing service the API depends on answers."""

    def get(self, _request):
        checks = {"database": database_available()}
        ready = all(checks.values())
        return JsonResponse(
            {"status": "ready" if ready else "not_ready", "checks": checks},
            status=200 if ready else 503,
        )


class MetricsView(View):
    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
