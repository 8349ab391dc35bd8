"""
Persistence contract for products.

A product always belongs to one brand and its slug only has to be unique
inside that brand.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from brands.domain.product import Product


class ProductRepository(ABC):
    """Storage for Product entities, keyed by id and by (brand, slug)."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """
        Insert or replace the product stored under ``product.id``.

        Raises:
            RepositoryConflictError: when the brand already has a product
                with the same slug.
        """
        ...

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        ...

    @abstractmethod
    async def find_by_slug(self, brand_id: uuid.UUID, slug: str) -> Optional[Product]:
        ...

    @abstractmethod
    async def list_by_brand(self, brand_id: uuid.UUID) -> List[Product]:
        """All products of the brand ordered by name, whatever their status."""
        ...

    @abstractmethod
    async def list_active_by_brand(self, brand_id: uuid.UUID) -> List[Product]:
        """Same as list_by_brand, restricted to ACTIVE products."""
        ...

    @abstractmethod
    async def exists(self, product_id: uuid.UUID) -> bool:
        ...
