"""
License domain entity.

A license entitles one license key to one product between starts_at and
expires_at. Every state change returns a new instance.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidLicenseStateError
from core.domain.identifiers import new_id
from core.domain.value_objects import LicenseStatus


def _now(current_time: Optional[datetime]) -> datetime:
    return current_time or datetime.now(timezone.utc)


@dataclass(frozen=True)
class License:
    """
    Represents a single (license key, product) entitlement with its own
    status, validity window and one-shot activation flag.

    Status transitions:
        valid -> suspended -> valid      (suspend / reactivate)
        valid | suspended -> cancelled   (cancel, terminal)
        any -> expired                   (mark_expired, sweep only)
    """

    id: uuid.UUID
    license_key_id: uuid.UUID
    product_id: uuid.UUID
    status: LicenseStatus
    starts_at: datetime
    expires_at: datetime
    created_at: datetime
    updated_at: datetime
    activated_at: Optional[datetime] = None
    seat_limit: Optional[int] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key_id:
            raise ValueError("License key ID is required")
        if not self.product_id:
            raise ValueError("Product ID is required")
        if self.expires_at <= self.starts_at:
            raise ValueError("Expiration date must be after start date")
        if self.seat_limit is not None and self.seat_limit < 1:
            raise ValueError("Seat limit must be at least 1")

    @classmethod
    def create(
        cls,
        license_key_id: uuid.UUID,
        product_id: uuid.UUID,
        starts_at: datetime,
        expires_at: datetime,
        seat_limit: Optional[int] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new License entity.

        Args:
            license_key_id: License key UUID
            product_id: Product UUID
            starts_at: Start of the validity window
            expires_at: End of the validity window, strictly after starts_at
            seat_limit: Optional seat capacity, carried as-is
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance

        Raises:
            ValueError: If expires_at is not after starts_at
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or new_id(),
            license_key_id=license_key_id,
            product_id=product_id,
            status=LicenseStatus.VALID,
            starts_at=starts_at,
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
            seat_limit=seat_limit,
        )

    def is_valid(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if license is currently valid.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if status is valid and starts_at <= now <= expires_at
        """
        if self.status != LicenseStatus.VALID:
            return False
        check_time = _now(current_time)
        return self.starts_at <= check_time <= self.expires_at

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """Check if the validity window has passed."""
        return _now(current_time) > self.expires_at

    def is_activated(self) -> bool:
        """Check if the license has been activated by a product."""
        return self.activated_at is not None

    def can_activate(self) -> bool:
        """Check if license can be activated."""
        return self.activated_at is None and self.status == LicenseStatus.VALID

    def can_suspend(self) -> bool:
        """Check if license can be suspended."""
        return self.status == LicenseStatus.VALID

    def activate(self, current_time: Optional[datetime] = None) -> "License":
        """
        Create a new License instance marked as activated.

        Raises:
            InvalidLicenseStateError: If already activated or not valid
        """
        if not self.can_activate():
            raise InvalidLicenseStateError(
                "License cannot be activated in its current state"
            )
        now = _now(current_time)
        return replace(self, activated_at=now, updated_at=now)

    def suspend(self) -> "License":
        """
        Create a new License instance with suspended status.

        Raises:
            InvalidLicenseStateError: If the license is not valid
        """
        if not self.can_suspend():
            raise InvalidLicenseStateError(f"Cannot suspend license in {self.status} status")
        return replace(self, status=LicenseStatus.SUSPENDED, updated_at=datetime.now(timezone.utc))

    def reactivate(self) -> "License":
        """
        Create a new License instance with valid status.

        Raises:
            InvalidLicenseStateError: If the license is not suspended
        """
        if self.status != LicenseStatus.SUSPENDED:
            raise InvalidLicenseStateError("Can only reactivate suspended licenses")
        return replace(self, status=LicenseStatus.VALID, updated_at=datetime.now(timezone.utc))

    def cancel(self) -> "License":
        """
        Create a new License instance with cancelled status.

        Raises:
            InvalidLicenseStateError: If the license is already cancelled
        """
        if self.status == LicenseStatus.CANCELLED:
            raise InvalidLicenseStateError("License is already cancelled")
        return replace(self, status=LicenseStatus.CANCELLED, updated_at=datetime.now(timezone.utc))

    def mark_expired(self) -> "License":
        """Create a new License instance with expired status."""
        return replace(self, status=LicenseStatus.EXPIRED, updated_at=datetime.now(timezone.utc))
