"""
Persistence contract for licenses.

At most one license exists per (license key, product) pair.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """Storage for License entities."""

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Insert or replace the license stored under ``license.id``.

        ``activated_at`` is only written on insert; once a license exists
        its activation goes through record_activation, so a stale snapshot
        can never clear it.

        Raises:
            RepositoryConflictError: when the key already has a license for
                the same product.
        """
        ...

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        ...

    @abstractmethod
    async def find_by_license_key(self, license_key_id: uuid.UUID) -> List[License]:
        """Licenses granted through the key, newest first."""
        ...

    @abstractmethod
    async def find_by_license_key_and_product(
        self, license_key_id: uuid.UUID, product_id: uuid.UUID
    ) -> Optional[License]:
        ...

    @abstractmethod
    async def find_expired(self, now: datetime) -> List[License]:
        """
        Licenses whose ``expires_at`` is before ``now`` and whose status is
        not EXPIRED yet. This is the work list of the expiry sweep.
        """
        ...

    @abstractmethod
    async def exists(self, license_id: uuid.UUID) -> bool:
        ...

    @abstractmethod
    async def record_activation(self, license_id: uuid.UUID, activated_at: datetime) -> bool:
        """
        Set ``activated_at`` if the stored license is VALID and not yet
        activated. Returns False, writing nothing, otherwise.
        """
        ...

    @abstractmethod
    async def expire(self, license_id: uuid.UUID, now: datetime) -> bool:
        """
        Move the stored license to EXPIRED if it is still past ``expires_at``
        and not expired already. Only the status and ``updated_at`` change.
        Returns whether the license was updated.
        """
        ...
