"""
License key application service.

Issues customer-facing license keys and drives their
suspend/reactivate/cancel lifecycle.
"""
import logging
import uuid
from typing import List

from brands.ports.brand_repository import BrandRepository
from core import metrics
from core.domain.exceptions import (
    BrandNotFoundError,
    InvalidBrandError,
    LicenseKeyNotFoundError,
    RepositoryConflictError,
)
from core.domain.identifiers import generate_license_key
from core.domain.value_objects import Email
from licenses.domain.license_key import LicenseKey
from licenses.ports.license_key_repository import LicenseKeyRepository

logger = logging.getLogger(__name__)

# Save attempts before a key string conflict is reported to the caller
MAX_KEY_GENERATION_ATTEMPTS = 5


class LicenseKeyService:
    """Service for license keys."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        brand_repository: BrandRepository,
    ):
        """Initialize service with repositories."""
        self.license_key_repository = license_key_repository
        self.brand_repository = brand_repository

    async def create_license_key(self, brand_id: uuid.UUID, customer_email: str) -> LicenseKey:
        """
        Issue a new license key for a customer of an active brand.

        The key string is {ACRONYM}-{YEAR}-{RANDOM} with the acronym taken
        from the brand slug. Candidates already in use are regenerated;
        a uniqueness conflict at save time is retried with a fresh key.

        Args:
            brand_id: Owning brand UUID
            customer_email: Customer email address

        Returns:
            Saved LicenseKey entity with status active

        Raises:
            BrandNotFoundError: If the brand does not exist
            InvalidBrandError: If the brand is not active
            RepositoryConflictError: If every save attempt collided
            ValueError: If the email is malformed
        """
        brand = await self.brand_repository.find_by_id(brand_id)
        if brand is None:
            raise BrandNotFoundError(f"Brand not found: {brand_id}")
        if not brand.is_active():
            raise InvalidBrandError(f"Brand is not active: {brand_id}")

        # Validate before spending key generation on a bad request
        email = Email(customer_email).value

        for attempt in range(1, MAX_KEY_GENERATION_ATTEMPTS + 1):
            key = await self._generate_unused_key(brand.acronym)
            license_key = LicenseKey.create(brand_id=brand.id, customer_email=email, key=key)
            try:
                saved = await self.license_key_repository.save(license_key)
            except RepositoryConflictError:
                metrics.license_key_collisions_total.inc()
                logger.warning(
                    "License key conflict on save, regenerating",
                    extra={"brand_id": str(brand_id), "attempt": attempt},
                )
                if attempt == MAX_KEY_GENERATION_ATTEMPTS:
                    raise
                continue

            metrics.license_keys_created_total.labels(brand_id=str(brand_id)).inc()
            logger.info(
                "License key created",
                extra={"brand_id": str(brand_id), "license_key_id": str(saved.id)},
            )
            return saved

        raise RepositoryConflictError("Could not allocate a unique license key")

    async def _generate_unused_key(self, acronym: str) -> str:
        key = generate_license_key(acronym)
        while await self.license_key_repository.find_by_key(key) is not None:
            metrics.license_key_collisions_total.inc()
            key = generate_license_key(acronym)
        return key

    async def get_license_key(self, license_key_id: uuid.UUID) -> LicenseKey:
        """
        Get a license key by ID.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.license_key_repository.find_by_id(license_key_id)
        if license_key is None:
            raise LicenseKeyNotFoundError(f"License key not found: {license_key_id}")
        return license_key

    async def get_license_key_by_string(self, key: str) -> LicenseKey:
        """
        Get a license key by its key string.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.license_key_repository.find_by_key(key)
        if license_key is None:
            raise LicenseKeyNotFoundError("License key not found")
        return license_key

    async def get_license_keys_by_customer(
        self, brand_id: uuid.UUID, email: str
    ) -> List[LicenseKey]:
        """List a customer's keys within a brand, newest first."""
        return await self.license_key_repository.find_by_customer_email(brand_id, email)

    async def suspend_license_key(self, license_key_id: uuid.UUID) -> LicenseKey:
        """
        Suspend an active license key. Its licenses are left as they are.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
            InvalidLicenseKeyStateError: If the key is not active
        """
        license_key = await self.get_license_key(license_key_id)
        return await self._store(license_key.suspend(), "License key suspended")

    async def reactivate_license_key(self, license_key_id: uuid.UUID) -> LicenseKey:
        """
        Reactivate an inactive license key.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
            InvalidLicenseKeyStateError: If the key is not inactive
        """
        license_key = await self.get_license_key(license_key_id)
        return await self._store(license_key.reactivate(), "License key reactivated")

    async def cancel_license_key(self, license_key_id: uuid.UUID) -> LicenseKey:
        """
        Cancel a license key. Cancelling twice is accepted.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.get_license_key(license_key_id)
        return await self._store(license_key.cancel(), "License key cancelled")

    async def _store(self, license_key: LicenseKey, event: str) -> LicenseKey:
        saved = await self.license_key_repository.save(license_key)
        logger.info(
            event,
            extra={"license_key_id": str(saved.id), "status": saved.status.value},
        )
        return saved
