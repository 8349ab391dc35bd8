"""
Celery tasks for background processing.
"""
import logging

from asgiref.sync import async_to_sync
from celery import shared_task

from api.dependencies import build_services

logger = logging.getLogger(__name__)


@shared_task
def mark_expired_licenses_task() -> int:
    """
    Mark every license past its expiry as expired.

    Scheduled by Celery beat; safe to run repeatedly.

    Returns:
        Number of licenses marked expired
    """
    logger.debug("Starting expiry sweep")
    return async_to_sync(build_services().licenses.mark_expired_licenses)()
