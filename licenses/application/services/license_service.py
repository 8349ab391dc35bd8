"""
License application service.

Orchestrates license issuance, validation, activation and lifecycle
management, and the expiry sweep.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from brands.ports.product_repository import ProductRepository
from core import metrics
from core.domain.exceptions import (
    DuplicateLicenseError,
    InvalidLicenseStateError,
    LicenseKeyNotFoundError,
    LicenseNotFoundError,
    ProductNotFoundError,
    RepositoryConflictError,
)
from core.domain.value_objects import LicenseStatus
from licenses.application.dto.license_dto import LicenseValidation, LicenseView
from licenses.domain.license import License
from licenses.domain.services import ensure_same_brand
from licenses.ports.license_key_repository import LicenseKeyRepository
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown"


class LicenseService:
    """Service for licenses."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        license_key_repository: LicenseKeyRepository,
        product_repository: ProductRepository,
    ):
        """Initialize service with repositories."""
        self.license_repository = license_repository
        self.license_key_repository = license_key_repository
        self.product_repository = product_repository

    async def create_license(
        self,
        license_key_id: uuid.UUID,
        product_id: uuid.UUID,
        starts_at: datetime,
        expires_at: datetime,
        seat_limit: Optional[int] = None,
    ) -> License:
        """
        Create a license for a (license key, product) pair.

        Args:
            license_key_id: License key UUID
            product_id: Product UUID
            starts_at: Start of the validity window
            expires_at: End of the validity window, strictly after starts_at
            seat_limit: Optional seat capacity

        Returns:
            Saved License entity with status valid

        Raises:
            LicenseKeyNotFoundError: If the license key does not exist
            ProductNotFoundError: If the product does not exist
            InvalidBrandError: If key and product belong to different brands
            DuplicateLicenseError: If the key already holds a license for the product
            ValueError: If expires_at is not after starts_at
        """
        license_key = await self.license_key_repository.find_by_id(license_key_id)
        if license_key is None:
            raise LicenseKeyNotFoundError(f"License key not found: {license_key_id}")

        product = await self.product_repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product not found: {product_id}")

        ensure_same_brand(license_key, product)

        if await self.license_repository.find_by_license_key_and_product(
            license_key_id, product_id
        ):
            raise DuplicateLicenseError()

        license = License.create(
            license_key_id=license_key_id,
            product_id=product_id,
            starts_at=starts_at,
            expires_at=expires_at,
            seat_limit=seat_limit,
        )
        try:
            saved = await self.license_repository.save(license)
        except RepositoryConflictError as exc:
            raise DuplicateLicenseError() from exc

        metrics.licenses_created_total.labels(product_id=str(product_id)).inc()
        logger.info(
            "License created",
            extra={
                "license_id": str(saved.id),
                "license_key_id": str(license_key_id),
                "product_id": str(product_id),
            },
        )
        return saved

    async def get_license(self, license_id: uuid.UUID) -> License:
        """
        Get a license by ID.

        Raises:
            LicenseNotFoundError: If the license does not exist
        """
        license = await self.license_repository.find_by_id(license_id)
        if license is None:
            raise LicenseNotFoundError(f"License not found: {license_id}")
        return license

    async def get_license_by_key_and_product(
        self, license_key_id: uuid.UUID, product_id: uuid.UUID
    ) -> Optional[License]:
        """Get the license a key holds for a product, if any."""
        return await self.license_repository.find_by_license_key_and_product(
            license_key_id, product_id
        )

    async def get_licenses_by_key(self, license_key_id: uuid.UUID) -> List[LicenseView]:
        """
        List the licenses of a key with their product names, newest first.

        A license whose product cannot be found is reported as "Unknown".
        """
        views = []
        for license in await self.license_repository.find_by_license_key(license_key_id):
            product = await self.product_repository.find_by_id(license.product_id)
            name = product.name if product else UNKNOWN_PRODUCT_NAME
            views.append(LicenseView.from_license(license, name))
        return views

    async def validate_license(
        self,
        license_key: str,
        product_id: uuid.UUID,
        brand_id: Optional[uuid.UUID] = None,
        current_time: Optional[datetime] = None,
    ) -> Optional[LicenseValidation]:
        """
        Validate a license key string for a product.

        Args:
            license_key: Customer-facing key string
            product_id: Product UUID
            brand_id: Authenticated brand; when given, keys of other
                brands are treated as not found
            current_time: Reference time (defaults to now, UTC)

        Returns:
            LicenseValidation, or None if the key or license is missing,
            belongs to another brand, or is not currently valid
        """
        license = await self._resolve(license_key, product_id, brand_id)
        if license is None or not license.is_valid(current_time):
            metrics.license_validations_total.labels(result="invalid").inc()
            return None

        metrics.license_validations_total.labels(result="valid").inc()
        return LicenseValidation.from_license(license)

    async def _resolve(
        self,
        license_key: str,
        product_id: uuid.UUID,
        brand_id: Optional[uuid.UUID],
    ) -> Optional[License]:
        key = await self.license_key_repository.find_by_key(license_key)
        if key is None:
            return None
        if brand_id is not None and not key.belongs_to(brand_id):
            logger.warning(
                "License key used by another brand",
                extra={"license_key_id": str(key.id), "brand_id": str(brand_id)},
            )
            return None
        return await self.license_repository.find_by_license_key_and_product(key.id, product_id)

    async def activate_license(self, license_id: uuid.UUID) -> License:
        """
        Activate a license. Activation happens at most once.

        Raises:
            LicenseNotFoundError: If the license does not exist
            InvalidLicenseStateError: If already activated or not valid
        """
        license = await self.get_license(license_id)
        activated = license.activate()
        # The write is conditional on the stored row, so of two concurrent
        # activations only one succeeds.
        if not await self.license_repository.record_activation(
            license_id, activated.activated_at
        ):
            raise InvalidLicenseStateError(
                "License cannot be activated in its current state"
            )
        metrics.licenses_activated_total.labels(product_id=str(activated.product_id)).inc()
        logger.info("License activated", extra={"license_id": str(license_id)})
        return activated

    async def suspend_license(self, license_id: uuid.UUID) -> License:
        """
        Suspend a valid license.

        Raises:
            LicenseNotFoundError: If the license does not exist
            InvalidLicenseStateError: If the license is not valid
        """
        license = await self.get_license(license_id)
        return await self._store(license.suspend())

    async def reactivate_license(self, license_id: uuid.UUID) -> License:
        """
        Reactivate a suspended license.

        Raises:
            LicenseNotFoundError: If the license does not exist
            InvalidLicenseStateError: If the license is not suspended
        """
        license = await self.get_license(license_id)
        return await self._store(license.reactivate())

    async def cancel_license(self, license_id: uuid.UUID) -> License:
        """
        Cancel a license permanently.

        Raises:
            LicenseNotFoundError: If the license does not exist
            InvalidLicenseStateError: If the license is already cancelled
        """
        license = await self.get_license(license_id)
        return await self._store(license.cancel())

    async def _store(self, license: License) -> License:
        saved = await self.license_repository.save(license)
        metrics.license_transitions_total.labels(to_status=saved.status.value).inc()
        logger.info(
            "License status changed",
            extra={"license_id": str(saved.id), "status": saved.status.value},
        )
        return saved

    async def mark_expired_licenses(self, current_time: Optional[datetime] = None) -> int:
        """
        Mark every license past its expiry as expired.

        Suspended and cancelled licenses are expired as well. Running the
        sweep twice has the same effect as running it once.

        Args:
            current_time: Reference time (defaults to now, UTC)

        Returns:
            Number of licenses marked expired
        """
        now = current_time or datetime.now(timezone.utc)
        expired_count = 0

        for license in await self.license_repository.find_expired(now):
            # Status-only update; columns written concurrently by requests
            # (activated_at) are left alone.
            if not await self.license_repository.expire(license.id, now):
                continue
            expired_count += 1
            if license.status == LicenseStatus.CANCELLED:
                logger.warning(
                    "Cancelled license overwritten as expired",
                    extra={"license_id": str(license.id)},
                )

        metrics.licenses_expired_total.inc(expired_count)
        logger.info("Expiry sweep finished", extra={"expired_count": expired_count})
        return expired_count
