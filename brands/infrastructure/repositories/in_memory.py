"""
In-memory implementations of the brand and product repository ports.

They enforce the same uniqueness constraints as the Django adapters and
are used by the unit tests and anywhere a throwaway store is enough.
"""

import uuid
from dataclasses import replace
from typing import Dict, List, Optional

from brands.domain.brand import Brand
from brands.domain.product import Product
from brands.ports.brand_repository import BrandRepository
from brands.ports.product_repository import ProductRepository
from core.domain.exceptions import RepositoryConflictError
from core.domain.value_objects import ProductStatus


class InMemoryBrandRepository(BrandRepository):
    """Dictionary-backed BrandRepository."""

    def __init__(self):
        self._brands: Dict[uuid.UUID, Brand] = {}

    async def save(self, brand: Brand) -> Brand:
        for other in self._brands.values():
            if other.id == brand.id:
                continue
            if (
                other.slug == brand.slug
                and not other.is_deleted()
                and not brand.is_deleted()
            ):
                raise RepositoryConflictError(f"Brand slug already in use: {brand.slug}")
            if {other.provisioning_api_key, other.validation_api_key} & {
                brand.provisioning_api_key,
                brand.validation_api_key,
            }:
                raise RepositoryConflictError("Brand API key already in use")
        stored = self._brands.get(brand.id)
        if stored is not None:
            # API keys are immutable once issued
            brand = replace(
                brand,
                provisioning_api_key=stored.provisioning_api_key,
                validation_api_key=stored.validation_api_key,
                created_at=stored.created_at,
            )
        self._brands[brand.id] = brand
        return brand

    async def find_by_id(self, brand_id: uuid.UUID) -> Optional[Brand]:
        return self._brands.get(brand_id)

    async def find_by_slug(self, slug: str) -> Optional[Brand]:
        for brand in self._brands.values():
            if brand.slug.value == slug and not brand.is_deleted():
                return brand
        return None

    async def find_by_provisioning_key(self, api_key: str) -> Optional[Brand]:
        for brand in self._brands.values():
            if brand.provisioning_api_key == api_key:
                return brand
        return None

    async def find_by_validation_key(self, api_key: str) -> Optional[Brand]:
        for brand in self._brands.values():
            if brand.validation_api_key == api_key:
                return brand
        return None

    async def exists(self, brand_id: uuid.UUID) -> bool:
        return brand_id in self._brands

    async def list_all(self) -> List[Brand]:
        return sorted(self._brands.values(), key=lambda brand: brand.name)


class InMemoryProductRepository(ProductRepository):
    """Dictionary-backed ProductRepository."""

    def __init__(self):
        self._products: Dict[uuid.UUID, Product] = {}

    async def save(self, product: Product) -> Product:
        for other in self._products.values():
            if (
                other.id != product.id
                and other.brand_id == product.brand_id
                and other.slug == product.slug
            ):
                raise RepositoryConflictError(
                    f"Product slug already in use for brand: {product.slug}"
                )
        self._products[product.id] = product
        return product

    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        return self._products.get(product_id)

    async def find_by_slug(self, brand_id: uuid.UUID, slug: str) -> Optional[Product]:
        for product in self._products.values():
            if product.brand_id == brand_id and product.slug.value == slug:
                return product
        return None

    async def list_by_brand(self, brand_id: uuid.UUID) -> List[Product]:
        products = [p for p in self._products.values() if p.brand_id == brand_id]
        return sorted(products, key=lambda product: product.name)

    async def list_active_by_brand(self, brand_id: uuid.UUID) -> List[Product]:
        return [
            product
            for product in await self.list_by_brand(brand_id)
            if product.status == ProductStatus.ACTIVE
        ]

    async def exists(self, product_id: uuid.UUID) -> bool:
        return product_id in self._products
