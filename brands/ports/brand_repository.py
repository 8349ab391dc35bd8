"""
Persistence contract for brands.

Brands are looked up three ways: by id for the admin side, by slug when
registering, and by one of their two API keys when authenticating a
request. Slugs are unique among non-deleted brands; each API key is
unique across every brand, whichever of the two kinds it is.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from brands.domain.brand import Brand


class BrandRepository(ABC):
    """Storage for Brand entities."""

    @abstractmethod
    async def save(self, brand: Brand) -> Brand:
        """
        Insert or replace the brand stored under ``brand.id``.

        Raises:
            RepositoryConflictError: when the slug or an API key is already
                held by another brand. Nothing is written in that case.
        """
        ...

    @abstractmethod
    async def find_by_id(self, brand_id: uuid.UUID) -> Optional[Brand]:
        ...

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Brand]:
        """Deleted brands are never returned."""
        ...

    @abstractmethod
    async def find_by_provisioning_key(self, api_key: str) -> Optional[Brand]:
        """Resolve the brand whose provisioning key is ``api_key``."""
        ...

    @abstractmethod
    async def find_by_validation_key(self, api_key: str) -> Optional[Brand]:
        """Resolve the brand whose validation key is ``api_key``."""
        ...

    @abstractmethod
    async def exists(self, brand_id: uuid.UUID) -> bool:
        ...

    @abstractmethod
    async def list_all(self) -> List[Brand]:
        """Every stored brand, ordered by name."""
        ...
