"""
LicenseKeyRepository backed by the Django ORM.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import Email, LicenseKeyStatus
from core.repositories import OrmRepository
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.ports.license_key_repository import LicenseKeyRepository


class DjangoLicenseKeyRepository(OrmRepository, LicenseKeyRepository):
    """
    Stores license keys in the ``license_keys`` table.

    The key string, the owning brand and the issuing brand are fixed at
    insert; later saves only touch the email and the status.
    """

    model = LicenseKeyModel
    conflict_message = "License key already exists"

    def _to_domain(self, row: LicenseKeyModel) -> LicenseKey:
        return LicenseKey(
            id=row.id,
            brand_id=row.brand_id,
            customer_email=Email(row.customer_email),
            key=row.key,
            status=LicenseKeyStatus(row.status),
            created_by_brand_id=row.created_by_brand_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @sync_to_async
    def save(self, license_key: LicenseKey) -> LicenseKey:
        return self._upsert(
            license_key.id,
            changes={
                "customer_email": str(license_key.customer_email),
                "status": license_key.status.value,
                "updated_at": license_key.updated_at,
            },
            on_insert={
                "brand_id": license_key.brand_id,
                "key": license_key.key,
                "created_by_brand_id": license_key.created_by_brand_id,
                "created_at": license_key.created_at,
            },
        )

    @sync_to_async
    def find_by_id(self, license_key_id: uuid.UUID) -> Optional[LicenseKey]:
        return self._first(id=license_key_id)

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[LicenseKey]:
        return self._first(key=key)

    @sync_to_async
    def find_by_customer_email(
        self, brand_id: uuid.UUID, email: str
    ) -> List[LicenseKey]:
        keys = self._objects.filter(brand_id=brand_id, customer_email=email)
        return self._each(keys.order_by("-created_at"))

    @sync_to_async
    def exists(self, license_key_id: uuid.UUID) -> bool:
        return self._exists(id=license_key_id)
