"""
ProductRepository backed by the Django ORM.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from brands.domain.product import Product
from brands.ports.product_repository import ProductRepository
from core.domain.value_objects import ProductSlug, ProductStatus
from core.repositories import OrmRepository
from products.infrastructure.models import Product as ProductModel


class DjangoProductRepository(OrmRepository, ProductRepository):
    """Stores products in the ``products`` table; the owning brand never changes."""

    model = ProductModel
    conflict_message = "Product conflicts with an existing product"

    def _to_domain(self, row: ProductModel) -> Product:
        return Product(
            id=row.id,
            brand_id=row.brand_id,
            name=row.name,
            slug=ProductSlug(row.slug),
            description=row.description,
            status=ProductStatus(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @sync_to_async
    def save(self, product: Product) -> Product:
        return self._upsert(
            product.id,
            changes={
                "name": product.name,
                "slug": str(product.slug),
                "description": product.description,
                "status": product.status.value,
                "updated_at": product.updated_at,
            },
            on_insert={"brand_id": product.brand_id, "created_at": product.created_at},
        )

    @sync_to_async
    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        return self._first(id=product_id)

    @sync_to_async
    def find_by_slug(self, brand_id: uuid.UUID, slug: str) -> Optional[Product]:
        return self._first(brand_id=brand_id, slug=slug)

    @sync_to_async
    def list_by_brand(self, brand_id: uuid.UUID) -> List[Product]:
        return self._each(self._objects.filter(brand_id=brand_id))

    @sync_to_async
    def list_active_by_brand(self, brand_id: uuid.UUID) -> List[Product]:
        return self._each(
            self._objects.filter(brand_id=brand_id, status=ProductStatus.ACTIVE.value)
        )

    @sync_to_async
    def exists(self, product_id: uuid.UUID) -> bool:
        return self._exists(id=product_id)
