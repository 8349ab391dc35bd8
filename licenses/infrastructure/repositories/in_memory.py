"""
In-memory implementations of the license key and license repository ports.
"""
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from core.domain.exceptions import RepositoryConflictError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_key import LicenseKey
from licenses.ports.license_key_repository import LicenseKeyRepository
from licenses.ports.license_repository import LicenseRepository


class InMemoryLicenseKeyRepository(LicenseKeyRepository):
    """Dictionary-backed LicenseKeyRepository."""

    def __init__(self):
        self._keys: Dict[uuid.UUID, LicenseKey] = {}

    async def save(self, license_key: LicenseKey) -> LicenseKey:
        for other in self._keys.values():
            if other.id != license_key.id and other.key == license_key.key:
                raise RepositoryConflictError("License key already exists")
        self._keys[license_key.id] = license_key
        return license_key

    async def find_by_id(self, license_key_id: uuid.UUID) -> Optional[LicenseKey]:
        return self._keys.get(license_key_id)

    async def find_by_key(self, key: str) -> Optional[LicenseKey]:
        for license_key in self._keys.values():
            if license_key.key == key:
                return license_key
        return None

    async def find_by_customer_email(
        self, brand_id: uuid.UUID, email: str
    ) -> List[LicenseKey]:
        keys = [
            key
            for key in self._keys.values()
            if key.brand_id == brand_id and key.customer_email.value == email
        ]
        return sorted(keys, key=lambda key: key.created_at, reverse=True)

    async def exists(self, license_key_id: uuid.UUID) -> bool:
        return license_key_id in self._keys


class InMemoryLicenseRepository(LicenseRepository):
    """Dictionary-backed LicenseRepository."""

    def __init__(self):
        self._licenses: Dict[uuid.UUID, License] = {}

    async def save(self, license: License) -> License:
        for other in self._licenses.values():
            if (
                other.id != license.id
                and other.license_key_id == license.license_key_id
                and other.product_id == license.product_id
            ):
                raise RepositoryConflictError("License already exists for this key and product")
        stored = self._licenses.get(license.id)
        if stored is not None:
            license = replace(license, activated_at=stored.activated_at)
        self._licenses[license.id] = license
        return license

    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return self._licenses.get(license_id)

    async def find_by_license_key(self, license_key_id: uuid.UUID) -> List[License]:
        licenses = [
            lic for lic in self._licenses.values() if lic.license_key_id == license_key_id
        ]
        return sorted(licenses, key=lambda lic: lic.created_at, reverse=True)

    async def find_by_license_key_and_product(
        self, license_key_id: uuid.UUID, product_id: uuid.UUID
    ) -> Optional[License]:
        for lic in self._licenses.values():
            if lic.license_key_id == license_key_id and lic.product_id == product_id:
                return lic
        return None

    async def find_expired(self, now: datetime) -> List[License]:
        return [
            lic
            for lic in self._licenses.values()
            if lic.expires_at < now and lic.status != LicenseStatus.EXPIRED
        ]

    async def exists(self, license_id: uuid.UUID) -> bool:
        return license_id in self._licenses

    async def record_activation(self, license_id: uuid.UUID, activated_at: datetime) -> bool:
        stored = self._licenses.get(license_id)
        if stored is None or not stored.can_activate():
            return False
        self._licenses[license_id] = stored.activate(activated_at)
        return True

    async def expire(self, license_id: uuid.UUID, now: datetime) -> bool:
        stored = self._licenses.get(license_id)
        if stored is None or stored.status is LicenseStatus.EXPIRED or stored.expires_at >= now:
            return False
        self._licenses[license_id] = stored.mark_expired()
        return True
