"""
LicenseRepository backed by the Django ORM.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.utils import timezone

from core.domain.value_objects import LicenseStatus
from core.repositories import OrmRepository
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(OrmRepository, LicenseRepository):
    """Stores licenses in the ``licenses`` table."""

    model = LicenseModel
    conflict_message = "License already exists for this key and product"

    def _to_domain(self, row: LicenseModel) -> License:
        return License(
            id=row.id,
            license_key_id=row.license_key_id,
            product_id=row.product_id,
            status=LicenseStatus(row.status),
            starts_at=row.starts_at,
            expires_at=row.expires_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
            activated_at=row.activated_at,
            seat_limit=row.seat_limit,
        )

    @sync_to_async
    def save(self, license: License) -> License:
        return self._upsert(
            license.id,
            changes={
                "status": license.status.value,
                "starts_at": license.starts_at,
                "expires_at": license.expires_at,
                "seat_limit": license.seat_limit,
                "updated_at": license.updated_at,
            },
            on_insert={
                "license_key_id": license.license_key_id,
                "product_id": license.product_id,
                "activated_at": license.activated_at,
                "created_at": license.created_at,
            },
        )

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return self._first(id=license_id)

    @sync_to_async
    def find_by_license_key(self, license_key_id: uuid.UUID) -> List[License]:
        licenses = self._objects.filter(license_key_id=license_key_id)
        return self._each(licenses.order_by("-created_at"))

    @sync_to_async
    def find_by_license_key_and_product(
        self, license_key_id: uuid.UUID, product_id: uuid.UUID
    ) -> Optional[License]:
        return self._first(license_key_id=license_key_id, product_id=product_id)

    @sync_to_async
    def find_expired(self, now: datetime) -> List[License]:
        overdue = self._objects.filter(expires_at__lt=now)
        return self._each(overdue.exclude(status=LicenseStatus.EXPIRED.value))

    @sync_to_async
    def exists(self, license_id: uuid.UUID) -> bool:
        return self._exists(id=license_id)

    @sync_to_async
    def record_activation(self, license_id: uuid.UUID, activated_at: datetime) -> bool:
        changed = self._objects.filter(
            id=license_id, activated_at__isnull=True, status=LicenseStatus.VALID.value
        ).update(activated_at=activated_at, updated_at=activated_at)
        return changed == 1

    @sync_to_async
    def expire(self, license_id: uuid.UUID, now: datetime) -> bool:
        changed = (
            self._objects.filter(id=license_id, expires_at__lt=now)
            .exclude(status=LicenseStatus.EXPIRED.value)
            .update(status=LicenseStatus.EXPIRED.value, updated_at=timezone.now())
        )
        return changed == 1
