"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


@dataclass
class LicenseView:
    """License joined with the display name of its product."""

    id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    status: str
    starts_at: datetime
    expires_at: datetime
    activated_at: Optional[datetime]
    seat_limit: Optional[int]

    @classmethod
    def from_license(cls, license: License, product_name: str) -> "LicenseView":
        """Build the view from a License entity."""
        return cls(
            id=license.id,
            product_id=license.product_id,
            product_name=product_name,
            status=license.status.value,
            starts_at=license.starts_at,
            expires_at=license.expires_at,
            activated_at=license.activated_at,
            seat_limit=license.seat_limit,
        )


@dataclass
class LicenseValidation:
    """Result of a successful license validation."""

    license_id: uuid.UUID
    license_key_id: uuid.UUID
    product_id: uuid.UUID
    status: str
    expires_at: datetime
    activated_at: Optional[datetime]
    valid: bool = True

    @classmethod
    def from_license(cls, license: License) -> "LicenseValidation":
        """Build the result from a valid License entity."""
        return cls(
            license_id=license.id,
            license_key_id=license.license_key_id,
            product_id=license.product_id,
            status=license.status.value,
            expires_at=license.expires_at,
            activated_at=license.activated_at,
        )
