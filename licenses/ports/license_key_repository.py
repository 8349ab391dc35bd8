"""
Persistence contract for license keys.

The key string is unique system-wide; a customer may hold any number of
keys per brand.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from licenses.domain.license_key import LicenseKey


class LicenseKeyRepository(ABC):
    """Storage for LicenseKey entities."""

    @abstractmethod
    async def save(self, license_key: LicenseKey) -> LicenseKey:
        """
        Insert or replace the license key stored under ``license_key.id``.

        Raises:
            RepositoryConflictError: when the key string is already taken.
                Callers generating random keys retry on it.
        """
        ...

    @abstractmethod
    async def find_by_id(self, license_key_id: uuid.UUID) -> Optional[LicenseKey]:
        ...

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[LicenseKey]:
        """Exact, case-sensitive match on the key string."""
        ...

    @abstractmethod
    async def find_by_customer_email(
        self, brand_id: uuid.UUID, email: str
    ) -> List[LicenseKey]:
        """Keys the customer holds with ``brand_id``, newest first."""
        ...

    @abstractmethod
    async def exists(self, license_key_id: uuid.UUID) -> bool:
        ...
