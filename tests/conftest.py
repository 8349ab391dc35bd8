"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync

from api.dependencies import build_services
from brands.application.services.brand_service import BrandService
from brands.domain.brand import Brand
from brands.domain.product import Product
from brands.infrastructure.repositories.in_memory import (
    InMemoryBrandRepository,
    InMemoryProductRepository,
)
from licenses.application.services.license_key_service import LicenseKeyService
from licenses.application.services.license_service import LicenseService
from licenses.domain.license import License
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.repositories.in_memory import (
    InMemoryLicenseKeyRepository,
    InMemoryLicenseRepository,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def unique_slug(prefix: str = "brand") -> str:
    """Return a letters-only slug that does not collide across tests."""
    suffix = "".join(chr(ord("a") + int(digit, 16)) for digit in uuid.uuid4().hex[:8])
    return f"{prefix}{suffix}"


# In-memory repositories and services


@pytest.fixture
def brand_repository():
    """Fixture for an in-memory BrandRepository."""
    return InMemoryBrandRepository()


@pytest.fixture
def product_repository():
    """Fixture for an in-memory ProductRepository."""
    return InMemoryProductRepository()


@pytest.fixture
def license_key_repository():
    """Fixture for an in-memory LicenseKeyRepository."""
    return InMemoryLicenseKeyRepository()


@pytest.fixture
def license_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def brand_service(brand_repository, product_repository):
    """Fixture for BrandService over in-memory repositories."""
    return BrandService(brand_repository, product_repository)


@pytest.fixture
def license_key_service(license_key_repository, brand_repository):
    """Fixture for LicenseKeyService over in-memory repositories."""
    return LicenseKeyService(license_key_repository, brand_repository)


@pytest.fixture
def license_service(license_repository, license_key_repository, product_repository):
    """Fixture for LicenseService over in-memory repositories."""
    return LicenseService(license_repository, license_key_repository, product_repository)


# Sample entities (not persisted)


@pytest.fixture
def sample_brand():
    """Fixture for a sample Brand entity."""
    return Brand.create(name="RankMath", slug="rankmath")


@pytest.fixture
def sample_product(sample_brand):
    """Fixture for a sample Product entity."""
    return Product.create(
        brand_id=sample_brand.id,
        name="RankMath Pro",
        slug="rankmath-pro",
    )


@pytest.fixture
def sample_license_key(sample_brand):
    """Fixture for a sample LicenseKey entity."""
    return LicenseKey.create(
        brand_id=sample_brand.id,
        customer_email="user@example.com",
        key="RANK-2025-A1B2C3D4E5F6",
    )


@pytest.fixture
def sample_license(sample_license_key, sample_product):
    """Fixture for a sample License entity valid for one year from NOW."""
    return License.create(
        license_key_id=sample_license_key.id,
        product_id=sample_product.id,
        starts_at=NOW,
        expires_at=NOW + timedelta(days=365),
    )


# Database-backed fixtures. Service calls run through async_to_sync so the
# ORM work stays on the test thread and its connection.


@pytest.fixture
def services(db):
    """Fixture for the Django-backed services bundle."""
    return build_services()


@pytest.fixture
def db_brand(services):
    """Fixture for a Brand registered in the database."""
    return async_to_sync(services.brands.register_brand)("RankMath", unique_slug("rank"))


@pytest.fixture
def db_product(services, db_brand):
    """Fixture for a Product saved in the database."""
    return async_to_sync(services.brands.create_product)(
        db_brand.id, "RankMath Pro", "rankmath-pro"
    )


@pytest.fixture
def db_license_key(services, db_brand):
    """Fixture for a LicenseKey saved in the database."""
    return async_to_sync(services.license_keys.create_license_key)(
        db_brand.id, "user@example.com"
    )


@pytest.fixture
def db_license(services, db_license_key, db_product):
    """Fixture for a License saved in the database, valid for one year from now."""
    starts_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    return async_to_sync(services.licenses.create_license)(
        license_key_id=db_license_key.id,
        product_id=db_product.id,
        starts_at=starts_at,
        expires_at=starts_at + timedelta(days=365),
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def brand_client(api_client, db_brand):
    """API client authenticated with the brand's provisioning key."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {db_brand.provisioning_api_key}")
    return api_client


@pytest.fixture
def product_client(db_brand):
    """API client authenticated with the brand's validation key."""
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_X_API_KEY=db_brand.validation_api_key)
    return client
