"""
Brand domain entity.

A brand is a tenant of the licensing service. It owns products and
license keys and authenticates with one of its two API keys.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidBrandStateError
from core.domain.identifiers import (
    ACRONYM_LENGTH,
    PROVISIONING_KEY_PREFIX,
    SLUG_SEPARATOR,
    VALIDATION_KEY_PREFIX,
    extract_acronym,
    generate_api_key,
    new_id,
)
from core.domain.value_objects import BrandSlug, BrandStatus


@dataclass(frozen=True)
class Brand:
    """
    Represents a brand/tenant in the system. A brand holds two API keys
    for two disjoint trust domains: the provisioning key authorizes
    brand-scoped writes, the validation key authorizes product-facing
    validation and activation.
    """

    id: uuid.UUID
    name: str
    slug: BrandSlug
    provisioning_api_key: str
    validation_api_key: str
    status: BrandStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate brand entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Brand name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Brand name too long")
        if len(self.slug.value.replace(SLUG_SEPARATOR, "")) < ACRONYM_LENGTH:
            raise ValueError(
                f"Brand slug must contain at least {ACRONYM_LENGTH} characters "
                "besides separators"
            )
        if not self.provisioning_api_key or not self.validation_api_key:
            raise ValueError("Brand API keys are required")
        if self.provisioning_api_key == self.validation_api_key:
            raise ValueError("Provisioning and validation API keys must differ")

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        brand_id: Optional[uuid.UUID] = None,
    ) -> "Brand":
        """
        Create a new Brand entity with freshly issued API keys.

        Args:
            name: Brand display name
            slug: Brand slug (human-readable tenant key)
            brand_id: Optional UUID (generated if not provided)

        Returns:
            Brand entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=brand_id or new_id(),
            name=name.strip(),
            slug=BrandSlug(slug),
            provisioning_api_key=generate_api_key(PROVISIONING_KEY_PREFIX),
            validation_api_key=generate_api_key(VALIDATION_KEY_PREFIX),
            status=BrandStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @property
    def acronym(self) -> str:
        """License key acronym derived from the slug."""
        return extract_acronym(self.slug.value)

    def is_active(self) -> bool:
        """Check if the brand can authenticate and issue licenses."""
        return self.status == BrandStatus.ACTIVE and self.deleted_at is None

    def is_deleted(self) -> bool:
        """Check if the brand has been deleted."""
        return self.deleted_at is not None

    def update_name(self, new_name: str) -> "Brand":
        """
        Create a new Brand instance with updated name.

        Args:
            new_name: New brand name

        Returns:
            New Brand instance with updated name
        """
        return replace(self, name=new_name.strip(), updated_at=datetime.now(timezone.utc))

    def suspend(self) -> "Brand":
        """
        Create a new Brand instance with suspended status.

        Raises:
            InvalidBrandStateError: If the brand is not active
        """
        if not self.is_active():
            raise InvalidBrandStateError(f"Cannot suspend brand in {self.status} status")
        return replace(self, status=BrandStatus.SUSPENDED, updated_at=datetime.now(timezone.utc))

    def reactivate(self) -> "Brand":
        """
        Create a new Brand instance with active status.

        Raises:
            InvalidBrandStateError: If the brand is not suspended
        """
        if self.status != BrandStatus.SUSPENDED or self.is_deleted():
            raise InvalidBrandStateError("Can only reactivate suspended brands")
        return replace(self, status=BrandStatus.ACTIVE, updated_at=datetime.now(timezone.utc))

    def delete(self) -> "Brand":
        """
        Create a new Brand instance marked as deleted.

        Deletion is terminal; there is no transition back.
        """
        if self.is_deleted():
            raise InvalidBrandStateError("Brand is already deleted")
        now = datetime.now(timezone.utc)
        return replace(self, status=BrandStatus.DELETED, deleted_at=now, updated_at=now)
