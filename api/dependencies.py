"""
Service wiring for the HTTP layer.

Services are built per call from repositories bound to an explicit
database alias; nothing here is a process-wide singleton.
"""
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from brands.application.services.brand_service import BrandService
from brands.infrastructure.repositories.django_brand_repository import DjangoBrandRepository
from brands.infrastructure.repositories.django_product_repository import DjangoProductRepository
from licenses.application.services.license_key_service import LicenseKeyService
from licenses.application.services.license_service import LicenseService
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


@dataclass(frozen=True)
class Services:
    """The three application services, sharing one set of repositories."""

    brands: BrandService
    license_keys: LicenseKeyService
    licenses: LicenseService


def build_services(using: Optional[str] = None) -> Services:
    """
    Build the application services on top of the Django repositories.

    Args:
        using: Database alias (defaults to settings.LICENSING_DATABASE_ALIAS)

    Returns:
        Services bundle
    """
    alias = using or getattr(settings, "LICENSING_DATABASE_ALIAS", "default")
    brand_repo = DjangoBrandRepository(using=alias)
    product_repo = DjangoProductRepository(using=alias)
    license_key_repo = DjangoLicenseKeyRepository(using=alias)
    license_repo = DjangoLicenseRepository(using=alias)

    return Services(
        brands=BrandService(brand_repo, product_repo),
        license_keys=LicenseKeyService(license_key_repo, brand_repo),
        licenses=LicenseService(license_repo, license_key_repo, product_repo),
    )
