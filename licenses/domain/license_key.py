"""
LicenseKey domain entity.

The string a customer enters in a product. Keys are scoped to the brand
that issued them and carry their own status on top of their licenses.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidLicenseKeyStateError
from core.domain.identifiers import new_id
from core.domain.value_objects import Email, LicenseKeyStatus


@dataclass(frozen=True)
class LicenseKey:
    """
    Represents a customer-facing license key that can back multiple
    licenses, at most one per product.
    """

    id: uuid.UUID
    brand_id: uuid.UUID
    customer_email: Email
    key: str
    status: LicenseKeyStatus
    created_by_brand_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license key entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > 100:
            raise ValueError("License key too long")
        if not self.brand_id:
            raise ValueError("Brand ID is required")

    @classmethod
    def create(
        cls,
        brand_id: uuid.UUID,
        customer_email: str,
        key: str,
        license_key_id: Optional[uuid.UUID] = None,
    ) -> "LicenseKey":
        """
        Create a new LicenseKey entity.

        Args:
            brand_id: Brand UUID
            customer_email: Customer email address
            key: Generated license key string
            license_key_id: Optional UUID (generated if not provided)

        Returns:
            LicenseKey entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_key_id or new_id(),
            brand_id=brand_id,
            customer_email=Email(customer_email),
            key=key,
            status=LicenseKeyStatus.ACTIVE,
            created_by_brand_id=brand_id,
            created_at=now,
            updated_at=now,
        )

    def is_active(self) -> bool:
        """Check if the key is active."""
        return self.status == LicenseKeyStatus.ACTIVE

    def belongs_to(self, brand_id: Optional[uuid.UUID]) -> bool:
        """Check if the key was issued under a brand."""
        return brand_id is not None and self.brand_id == brand_id

    def suspend(self) -> "LicenseKey":
        """
        Create a new LicenseKey instance with inactive status.

        Licenses backed by this key are not touched.

        Raises:
            InvalidLicenseKeyStateError: If the key is not active
        """
        if self.status != LicenseKeyStatus.ACTIVE:
            raise InvalidLicenseKeyStateError(
                f"Cannot suspend license key in {self.status} status"
            )
        return replace(
            self, status=LicenseKeyStatus.INACTIVE, updated_at=datetime.now(timezone.utc)
        )

    def reactivate(self) -> "LicenseKey":
        """
        Create a new LicenseKey instance with active status.

        Raises:
            InvalidLicenseKeyStateError: If the key is not inactive
        """
        if self.status != LicenseKeyStatus.INACTIVE:
            raise InvalidLicenseKeyStateError("Can only reactivate inactive license keys")
        return replace(
            self, status=LicenseKeyStatus.ACTIVE, updated_at=datetime.now(timezone.utc)
        )

    def cancel(self) -> "LicenseKey":
        """
        Create a new LicenseKey instance with cancelled status.

        Unconditional: cancelling a cancelled key is accepted.
        """
        return replace(
            self, status=LicenseKeyStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )
