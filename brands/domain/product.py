"""
Product domain entity.

A product is something a brand sells licenses for. Licenses reference
products by id, so a product is never deleted; a brand that stops selling
one marks it inactive instead.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.identifiers import new_id
from core.domain.value_objects import ProductSlug, ProductStatus

MAX_NAME_LENGTH = 255


@dataclass(frozen=True)
class Product:
    """A brand's product. The slug is unique within the owning brand only."""

    id: uuid.UUID
    brand_id: uuid.UUID
    name: str
    slug: ProductSlug
    description: str
    status: ProductStatus
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        if self.brand_id is None:
            raise ValueError("Product must belong to a brand")
        if not self.name.strip():
            raise ValueError("Product name cannot be empty")
        if len(self.name) > MAX_NAME_LENGTH:
            raise ValueError(f"Product name exceeds {MAX_NAME_LENGTH} characters")

    @classmethod
    def create(
        cls,
        brand_id: uuid.UUID,
        name: str,
        slug: str,
        description: str = "",
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """Build a new, active product for ``brand_id``."""
        now = datetime.now(timezone.utc)
        return cls(
            id=product_id or new_id(),
            brand_id=brand_id,
            name=name.strip(),
            slug=ProductSlug(slug),
            description=description or "",
            status=ProductStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    def is_active(self) -> bool:
        return self.status is ProductStatus.ACTIVE

    def belongs_to(self, brand_id: Optional[uuid.UUID]) -> bool:
        return brand_id is not None and brand_id == self.brand_id

    def deactivate(self) -> "Product":
        return self._with_status(ProductStatus.INACTIVE)

    def activate(self) -> "Product":
        return self._with_status(ProductStatus.ACTIVE)

    def _with_status(self, status: ProductStatus) -> "Product":
        return replace(self, status=status, updated_at=datetime.now(timezone.utc))
