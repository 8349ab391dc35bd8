"""
Brand application service.

Tenant registration, lookup and dual API key authentication, plus
product management for a brand.
"""
import logging
import uuid
from typing import List

from brands.domain.brand import Brand
from brands.domain.product import Product
from brands.ports.brand_repository import BrandRepository
from brands.ports.product_repository import ProductRepository
from core import metrics
from core.domain.exceptions import (
    BrandNotFoundError,
    InvalidBrandError,
    ProductNotFoundError,
    RepositoryConflictError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class BrandService:
    """Service for brands and their products."""

    def __init__(
        self,
        brand_repository: BrandRepository,
        product_repository: ProductRepository,
    ):
        """Initialize service with repositories."""
        self.brand_repository = brand_repository
        self.product_repository = product_repository

    async def register_brand(self, name: str, slug: str) -> Brand:
        """
        Register a new brand with freshly issued API keys.

        Not idempotent: a second registration with the same slug fails.

        Args:
            name: Brand display name
            slug: Brand slug, unique among non-deleted brands

        Returns:
            Saved Brand entity

        Raises:
            InvalidBrandError: If the slug is already in use
            ValueError: If name or slug is malformed
        """
        if await self.brand_repository.find_by_slug(slug):
            raise InvalidBrandError(f"Brand slug already in use: {slug}")

        brand = Brand.create(name=name, slug=slug)
        try:
            saved = await self.brand_repository.save(brand)
        except RepositoryConflictError as exc:
            # Lost a race against a concurrent registration
            raise InvalidBrandError(f"Brand slug already in use: {slug}") from exc

        metrics.brands_registered_total.inc()
        logger.info("Brand registered", extra={"brand_id": str(saved.id), "slug": slug})
        return saved

    async def get_brand(self, brand_id: uuid.UUID) -> Brand:
        """
        Get a brand by ID.

        Raises:
            BrandNotFoundError: If the brand does not exist
        """
        brand = await self.brand_repository.find_by_id(brand_id)
        if brand is None:
            raise BrandNotFoundError(f"Brand not found: {brand_id}")
        return brand

    async def get_brand_by_slug(self, slug: str) -> Brand:
        """
        Get a non-deleted brand by slug.

        Raises:
            BrandNotFoundError: If no such brand exists
        """
        brand = await self.brand_repository.find_by_slug(slug)
        if brand is None:
            raise BrandNotFoundError(f"Brand not found: {slug}")
        return brand

    async def authenticate_brand_by_provisioning_key(self, api_key: str) -> Brand:
        """
        Authenticate a brand by its provisioning API key.

        Only the provisioning key column is consulted; a validation key
        never authenticates here.

        Raises:
            UnauthorizedError: If no active brand holds the key
        """
        brand = await self.brand_repository.find_by_provisioning_key(api_key)
        return self._require_active(brand, "provisioning")

    async def authenticate_brand_by_validation_key(self, api_key: str) -> Brand:
        """
        Authenticate a brand by its validation API key.

        Raises:
            UnauthorizedError: If no active brand holds the key
        """
        brand = await self.brand_repository.find_by_validation_key(api_key)
        return self._require_active(brand, "validation")

    def _require_active(self, brand, key_type: str) -> Brand:
        if brand is None or not brand.is_active():
            metrics.authentication_failures_total.labels(key_type=key_type).inc()
            logger.warning(
                "Brand authentication refused",
                extra={"key_type": key_type, "brand_id": str(brand.id) if brand else None},
            )
            raise UnauthorizedError()
        return brand

    async def delete_brand(self, brand_id: uuid.UUID) -> Brand:
        """
        Soft-delete a brand. There is no way back.

        Raises:
            BrandNotFoundError: If the brand does not exist
            InvalidBrandStateError: If the brand is already deleted
        """
        brand = await self.get_brand(brand_id)
        saved = await self.brand_repository.save(brand.delete())
        logger.info("Brand deleted", extra={"brand_id": str(brand_id)})
        return saved

    async def create_product(
        self,
        brand_id: uuid.UUID,
        name: str,
        slug: str,
        description: str = "",
    ) -> Product:
        """
        Create a product under an active brand.

        Args:
            brand_id: Owning brand UUID
            name: Product display name
            slug: Product slug, unique within the brand
            description: Free-form description

        Returns:
            Saved Product entity

        Raises:
            BrandNotFoundError: If the brand does not exist
            InvalidBrandError: If the brand is inactive or the slug is taken
        """
        brand = await self.get_brand(brand_id)
        if not brand.is_active():
            raise InvalidBrandError(f"Brand is not active: {brand_id}")

        if await self.product_repository.find_by_slug(brand_id, slug):
            raise InvalidBrandError(f"Product slug already exists for this brand: {slug}")

        product = Product.create(
            brand_id=brand_id, name=name, slug=slug, description=description
        )
        try:
            saved = await self.product_repository.save(product)
        except RepositoryConflictError as exc:
            raise InvalidBrandError(
                f"Product slug already exists for this brand: {slug}"
            ) from exc

        logger.info(
            "Product created",
            extra={"brand_id": str(brand_id), "product_id": str(saved.id), "slug": slug},
        )
        return saved

    async def get_product(self, product_id: uuid.UUID) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        product = await self.product_repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product not found: {product_id}")
        return product

    async def get_product_by_brand_and_slug(self, brand_id: uuid.UUID, slug: str) -> Product:
        """
        Get a product by brand and slug.

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        product = await self.product_repository.find_by_slug(brand_id, slug)
        if product is None:
            raise ProductNotFoundError(f"Product not found: {slug}")
        return product

    async def get_brand_products(self, brand_id: uuid.UUID) -> List[Product]:
        """List every product of a brand."""
        return await self.product_repository.list_by_brand(brand_id)

    async def get_active_brand_products(self, brand_id: uuid.UUID) -> List[Product]:
        """List the active products of a brand."""
        return await self.product_repository.list_active_by_brand(brand_id)
