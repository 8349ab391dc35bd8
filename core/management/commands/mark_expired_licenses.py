"""
Django management command to mark expired licenses.

This command should be run periodically (cron, or Celery beat via
core.tasks.mark_expired_licenses_task).
"""

import logging
from datetime import datetime, timezone

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from api.dependencies import build_services

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to mark expired licenses."""

    help = "Mark every license past its expiry date as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--at",
            type=str,
            default=None,
            help="Reference time in ISO-8601 (default: now)",
        )
        parser.add_argument(
            "--database",
            type=str,
            default=None,
            help="Database alias (default: LICENSING_DATABASE_ALIAS)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        current_time = self._parse_time(options["at"])
        services = build_services(using=options["database"])

        count = async_to_sync(services.licenses.mark_expired_licenses)(current_time)

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Marked {count} license(s) as expired"))

    def _parse_time(self, value):
        if value is None:
            return None
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise CommandError(f"Invalid --at value: {value}") from exc
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
