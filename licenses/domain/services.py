"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from brands.domain.product import Product
from core.domain.exceptions import InvalidBrandError
from licenses.domain.license_key import LicenseKey


def ensure_same_brand(license_key: LicenseKey, product: Product) -> None:
    """
    Check that a license key and a product belong to the same brand.

    Ownership is compared explicitly; foreign keys alone never imply it.

    Args:
        license_key: License key the license would be issued under
        product: Product the license would grant

    Raises:
        InvalidBrandError: With tenant_mismatch set, if the brands differ
    """
    if not product.belongs_to(license_key.brand_id):
        raise InvalidBrandError(
            "Product and license key must belong to same brand",
            tenant_mismatch=True,
        )
