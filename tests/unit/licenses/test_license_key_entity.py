"""
Unit tests for LicenseKey domain entity.
"""

import uuid

import pytest

from core.domain.exceptions import InvalidBrandError, InvalidLicenseKeyStateError
from core.domain.value_objects import LicenseKeyStatus
from licenses.domain.license_key import LicenseKey
from licenses.domain.services import ensure_same_brand


class TestLicenseKeyEntity:
    """Tests for LicenseKey domain entity."""

    def test_create_license_key(self, sample_brand):
        """Test creating a license key."""
        key = LicenseKey.create(
            brand_id=sample_brand.id,
            customer_email="user@example.com",
            key="RANK-2025-A1B2C3D4E5F6",
        )

        assert key.status == LicenseKeyStatus.ACTIVE
        assert key.customer_email.value == "user@example.com"
        assert key.created_by_brand_id == sample_brand.id
        assert key.belongs_to(sample_brand.id)
        assert not key.belongs_to(uuid.uuid4())

    def test_invalid_email_rejected(self, sample_brand):
        """Test malformed emails are rejected."""
        with pytest.raises(ValueError):
            LicenseKey.create(brand_id=sample_brand.id, customer_email="nope", key="RANK-1")

    def test_empty_key_rejected(self, sample_brand):
        """Test an empty key string is rejected."""
        with pytest.raises(ValueError):
            LicenseKey.create(brand_id=sample_brand.id, customer_email="a@b.com", key="")

    def test_suspend_and_reactivate(self, sample_license_key):
        """Test active -> inactive -> active."""
        inactive = sample_license_key.suspend()
        assert inactive.status == LicenseKeyStatus.INACTIVE
        assert not inactive.is_active()

        active = inactive.reactivate()
        assert active.is_active()

    def test_suspend_inactive_fails(self, sample_license_key):
        """Test suspending twice fails."""
        with pytest.raises(InvalidLicenseKeyStateError):
            sample_license_key.suspend().suspend()

    def test_reactivate_active_fails(self, sample_license_key):
        """Test reactivating an active key fails."""
        with pytest.raises(InvalidLicenseKeyStateError):
            sample_license_key.reactivate()

    def test_cancel_is_unconditional(self, sample_license_key):
        """Test cancel works from any status, including cancelled."""
        cancelled = sample_license_key.cancel()
        assert cancelled.status == LicenseKeyStatus.CANCELLED
        assert cancelled.cancel().status == LicenseKeyStatus.CANCELLED
        assert sample_license_key.suspend().cancel().status == LicenseKeyStatus.CANCELLED

    def test_cancelled_key_cannot_come_back(self, sample_license_key):
        """Test cancelled keys cannot be reactivated or suspended."""
        cancelled = sample_license_key.cancel()
        with pytest.raises(InvalidLicenseKeyStateError):
            cancelled.reactivate()
        with pytest.raises(InvalidLicenseKeyStateError):
            cancelled.suspend()


class TestEnsureSameBrand:
    """Tests for the license key / product tenant check."""

    def test_same_brand_passes(self, sample_license_key, sample_product):
        """Test matching brands pass."""
        ensure_same_brand(sample_license_key, sample_product)

    def test_different_brand_fails(self, sample_license_key, sample_product):
        """Test a product of another brand is rejected."""
        other_key = LicenseKey.create(
            brand_id=uuid.uuid4(),
            customer_email="user@example.com",
            key="WPRO-2025-A1B2C3D4E5F6",
        )

        with pytest.raises(InvalidBrandError) as exc_info:
            ensure_same_brand(other_key, sample_product)

        assert exc_info.value.tenant_mismatch is True
        assert exc_info.value.code == "INVALID_BRAND"
