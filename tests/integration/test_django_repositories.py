"""
Integration tests for the Django repository implementations.

Repository coroutines are driven through async_to_sync so ORM access runs
on the test thread inside the test transaction.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync

from brands.domain.brand import Brand
from brands.domain.product import Product
from brands.infrastructure.repositories.django_brand_repository import DjangoBrandRepository
from brands.infrastructure.repositories.django_product_repository import DjangoProductRepository
from core.domain.exceptions import RepositoryConflictError
from core.domain.value_objects import BrandStatus, LicenseKeyStatus, LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def brands():
    return DjangoBrandRepository()


@pytest.fixture
def products():
    return DjangoProductRepository()


@pytest.fixture
def license_keys():
    return DjangoLicenseKeyRepository()


@pytest.fixture
def licenses():
    return DjangoLicenseRepository()


@pytest.fixture
def brand(db, brands):
    return async_to_sync(brands.save)(Brand.create(name="RankMath", slug="rankmath"))


@pytest.fixture
def product(brand, products):
    return async_to_sync(products.save)(
        Product.create(brand_id=brand.id, name="RankMath Pro", slug="rankmath-pro")
    )


@pytest.fixture
def license_key(brand, license_keys):
    return async_to_sync(license_keys.save)(
        LicenseKey.create(
            brand_id=brand.id, customer_email="user@example.com", key="RANK-2025-A1B2C3D4E5F6"
        )
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoBrandRepository:
    """Integration tests for DjangoBrandRepository."""

    def test_save_and_find(self, brands, brand):
        """Test saving and finding a brand by every key."""
        assert async_to_sync(brands.find_by_id)(brand.id) == brand
        assert async_to_sync(brands.find_by_slug)("rankmath").id == brand.id
        assert async_to_sync(brands.find_by_provisioning_key)(brand.provisioning_api_key).id == (
            brand.id
        )
        assert async_to_sync(brands.find_by_validation_key)(brand.validation_api_key).id == (
            brand.id
        )
        assert async_to_sync(brands.exists)(brand.id)
        assert not async_to_sync(brands.exists)(uuid.uuid4())

    def test_key_columns_are_not_interchangeable(self, brands, brand):
        """Test each key is only found through its own column."""
        assert async_to_sync(brands.find_by_provisioning_key)(brand.validation_api_key) is None
        assert async_to_sync(brands.find_by_validation_key)(brand.provisioning_api_key) is None

    def test_update_keeps_api_keys(self, brands, brand):
        """Test updates do not rotate the issued keys."""
        suspended = async_to_sync(brands.save)(brand.suspend())

        assert suspended.status == BrandStatus.SUSPENDED
        assert suspended.provisioning_api_key == brand.provisioning_api_key
        assert suspended.validation_api_key == brand.validation_api_key

    def test_duplicate_slug_conflicts(self, brands, brand):
        """Test two live brands cannot share a slug."""
        with pytest.raises(RepositoryConflictError):
            async_to_sync(brands.save)(Brand.create(name="Copy", slug="rankmath"))

    def test_deleted_brand_frees_slug(self, brands, brand):
        """Test the slug constraint only covers non-deleted brands."""
        async_to_sync(brands.save)(brand.delete())

        replacement = async_to_sync(brands.save)(Brand.create(name="RankMath", slug="rankmath"))

        assert async_to_sync(brands.find_by_slug)("rankmath").id == replacement.id
        assert len(async_to_sync(brands.list_all)()) == 2


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoProductRepository:
    """Integration tests for DjangoProductRepository."""

    def test_save_and_find(self, products, brand, product):
        """Test saving and finding a product."""
        assert async_to_sync(products.find_by_id)(product.id) == product
        assert async_to_sync(products.find_by_slug)(brand.id, "rankmath-pro").id == product.id
        assert async_to_sync(products.find_by_slug)(uuid.uuid4(), "rankmath-pro") is None

    def test_duplicate_slug_conflicts(self, products, brand, product):
        """Test (brand, slug) is unique."""
        with pytest.raises(RepositoryConflictError):
            async_to_sync(products.save)(
                Product.create(brand_id=brand.id, name="Copy", slug="rankmath-pro")
            )

    def test_list_by_brand(self, products, brand, product):
        """Test listing all and active products."""
        inactive = async_to_sync(products.save)(
            Product.create(brand_id=brand.id, name="Content AI", slug="content-ai").deactivate()
        )

        assert [p.id for p in async_to_sync(products.list_by_brand)(brand.id)] == [
            inactive.id,
            product.id,
        ]
        assert [p.id for p in async_to_sync(products.list_active_by_brand)(brand.id)] == [
            product.id
        ]


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoLicenseKeyRepository:
    """Integration tests for DjangoLicenseKeyRepository."""

    def test_save_and_find(self, license_keys, brand, license_key):
        """Test saving and finding a license key."""
        assert async_to_sync(license_keys.find_by_id)(license_key.id) == license_key
        assert async_to_sync(license_keys.find_by_key)(license_key.key).id == license_key.id
        assert async_to_sync(license_keys.find_by_customer_email)(
            brand.id, "user@example.com"
        ) == [license_key]

    def test_status_update(self, license_keys, license_key):
        """Test status changes are persisted."""
        async_to_sync(license_keys.save)(license_key.suspend())

        found = async_to_sync(license_keys.find_by_id)(license_key.id)
        assert found.status == LicenseKeyStatus.INACTIVE
        assert found.key == license_key.key

    def test_duplicate_key_conflicts(self, license_keys, brand, license_key):
        """Test key strings are globally unique."""
        with pytest.raises(RepositoryConflictError):
            async_to_sync(license_keys.save)(
                LicenseKey.create(
                    brand_id=brand.id, customer_email="other@example.com", key=license_key.key
                )
            )


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoLicenseRepository:
    """Integration tests for DjangoLicenseRepository."""

    def _license(self, license_key, product, expires_at=NOW + timedelta(days=365)):
        return License.create(
            license_key_id=license_key.id,
            product_id=product.id,
            starts_at=NOW - timedelta(days=400),
            expires_at=expires_at,
            seat_limit=3,
        )

    def test_save_and_find(self, licenses, license_key, product):
        """Test saving and finding a license."""
        license = async_to_sync(licenses.save)(self._license(license_key, product))

        assert async_to_sync(licenses.find_by_id)(license.id) == license
        assert async_to_sync(licenses.find_by_license_key)(license_key.id) == [license]
        assert async_to_sync(licenses.find_by_license_key_and_product)(
            license_key.id, product.id
        ) == license
        assert async_to_sync(licenses.exists)(license.id)

    def test_activation_is_recorded_once(self, licenses, license_key, product):
        """Test activated_at is set once and survives saves of older snapshots."""
        license = async_to_sync(licenses.save)(self._license(license_key, product))

        assert async_to_sync(licenses.record_activation)(license.id, NOW) is True
        assert async_to_sync(licenses.record_activation)(
            license.id, NOW + timedelta(hours=1)
        ) is False
        async_to_sync(licenses.save)(license.suspend())

        stored = async_to_sync(licenses.find_by_id)(license.id)
        assert stored.activated_at == NOW
        assert stored.status == LicenseStatus.SUSPENDED

    def test_suspended_license_is_not_activated(self, licenses, license_key, product):
        """Test activation requires a valid license."""
        license = async_to_sync(licenses.save)(self._license(license_key, product))
        async_to_sync(licenses.save)(license.suspend())

        assert async_to_sync(licenses.record_activation)(license.id, NOW) is False
        assert async_to_sync(licenses.find_by_id)(license.id).activated_at is None

    def test_duplicate_pair_conflicts(self, licenses, license_key, product):
        """Test (license key, product) is unique."""
        async_to_sync(licenses.save)(self._license(license_key, product))

        with pytest.raises(RepositoryConflictError):
            async_to_sync(licenses.save)(self._license(license_key, product))

    def test_find_expired_and_expire(self, licenses, products, brand, license_key, product):
        """Test the sweep work list and the status-only expire update."""
        other = async_to_sync(products.save)(
            Product.create(brand_id=brand.id, name="Content AI", slug="content-ai")
        )
        expired = async_to_sync(licenses.save)(
            self._license(license_key, product, expires_at=NOW - timedelta(days=1))
        )
        async_to_sync(licenses.save)(self._license(license_key, other))

        assert [lic.id for lic in async_to_sync(licenses.find_expired)(NOW)] == [expired.id]

        async_to_sync(licenses.record_activation)(expired.id, NOW - timedelta(days=2))
        assert async_to_sync(licenses.expire)(expired.id, NOW) is True
        assert async_to_sync(licenses.expire)(expired.id, NOW) is False
        assert async_to_sync(licenses.find_expired)(NOW) == []

        stored = async_to_sync(licenses.find_by_id)(expired.id)
        assert stored.status == LicenseStatus.EXPIRED
        assert stored.activated_at == NOW - timedelta(days=2)
