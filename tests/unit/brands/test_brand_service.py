"""
Unit tests for BrandService.
"""

import uuid

import pytest

from brands.application.services.brand_service import BrandService
from brands.infrastructure.repositories.in_memory import (
    InMemoryBrandRepository,
    InMemoryProductRepository,
)
from core.domain.exceptions import (
    BrandNotFoundError,
    InvalidBrandError,
    ProductNotFoundError,
    RepositoryConflictError,
    UnauthorizedError,
)


class RacedBrandRepository(InMemoryBrandRepository):
    """Repository where another registration takes the slug after the lookup."""

    async def find_by_slug(self, slug):
        return None

    async def save(self, brand):
        raise RepositoryConflictError("Brand conflicts with an existing brand")


class RacedProductRepository(InMemoryProductRepository):
    """Repository where another request takes the product slug after the lookup."""

    async def find_by_slug(self, brand_id, slug):
        return None

    async def save(self, product):
        raise RepositoryConflictError("Product conflicts with an existing product")


class TestRegisterBrand:
    """Tests for brand registration and lookup."""

    @pytest.mark.asyncio
    async def test_register_brand(self, brand_service):
        """Test registering a brand issues keys and persists it."""
        brand = await brand_service.register_brand("RankMath", "rankmath")

        assert brand.is_active()
        assert (await brand_service.get_brand(brand.id)) == brand
        assert (await brand_service.get_brand_by_slug("rankmath")).id == brand.id

    @pytest.mark.asyncio
    async def test_duplicate_slug_rejected(self, brand_service):
        """Test registration is not idempotent."""
        await brand_service.register_brand("RankMath", "rankmath")

        with pytest.raises(InvalidBrandError):
            await brand_service.register_brand("Rank Math Again", "rankmath")

    @pytest.mark.asyncio
    async def test_conflict_on_save_is_invalid_brand(self, product_repository):
        """Test a slug taken between lookup and save is reported as in use."""
        service = BrandService(RacedBrandRepository(), product_repository)

        with pytest.raises(InvalidBrandError, match="already in use"):
            await service.register_brand("RankMath", "rankmath")

    @pytest.mark.asyncio
    async def test_slug_reusable_after_delete(self, brand_service):
        """Test a deleted brand frees its slug."""
        first = await brand_service.register_brand("RankMath", "rankmath")
        await brand_service.delete_brand(first.id)

        second = await brand_service.register_brand("RankMath", "rankmath")

        assert second.id != first.id
        assert (await brand_service.get_brand_by_slug("rankmath")).id == second.id

    @pytest.mark.asyncio
    async def test_malformed_slug_is_value_error(self, brand_service):
        """Test invariant violations surface as ValueError."""
        with pytest.raises(ValueError):
            await brand_service.register_brand("Tiny", "abc")

    @pytest.mark.asyncio
    async def test_unknown_brand(self, brand_service):
        """Test lookups of unknown brands."""
        with pytest.raises(BrandNotFoundError):
            await brand_service.get_brand(uuid.uuid4())
        with pytest.raises(BrandNotFoundError):
            await brand_service.get_brand_by_slug("missing")


class TestAuthentication:
    """Tests for the two API key classes."""

    @pytest.mark.asyncio
    async def test_provisioning_key(self, brand_service):
        """Test the provisioning key authenticates on its own path only."""
        brand = await brand_service.register_brand("RankMath", "rankmath")

        authenticated = await brand_service.authenticate_brand_by_provisioning_key(
            brand.provisioning_api_key
        )
        assert authenticated.id == brand.id

        with pytest.raises(UnauthorizedError):
            await brand_service.authenticate_brand_by_validation_key(brand.provisioning_api_key)

    @pytest.mark.asyncio
    async def test_validation_key(self, brand_service):
        """Test the validation key authenticates on its own path only."""
        brand = await brand_service.register_brand("RankMath", "rankmath")

        authenticated = await brand_service.authenticate_brand_by_validation_key(
            brand.validation_api_key
        )
        assert authenticated.id == brand.id

        with pytest.raises(UnauthorizedError):
            await brand_service.authenticate_brand_by_provisioning_key(brand.validation_api_key)

    @pytest.mark.asyncio
    async def test_unknown_key(self, brand_service):
        """Test unknown keys are refused."""
        with pytest.raises(UnauthorizedError):
            await brand_service.authenticate_brand_by_provisioning_key("sk_unknown")

    @pytest.mark.asyncio
    async def test_inactive_brand_refused(self, brand_service, brand_repository, caplog):
        """Test keys of suspended or deleted brands are refused and logged."""
        brand = await brand_service.register_brand("RankMath", "rankmath")
        await brand_repository.save(brand.suspend())

        with pytest.raises(UnauthorizedError):
            await brand_service.authenticate_brand_by_provisioning_key(
                brand.provisioning_api_key
            )
        assert "Brand authentication refused" in caplog.text


class TestProducts:
    """Tests for product management."""

    @pytest.mark.asyncio
    async def test_create_and_list_products(self, brand_service):
        """Test products are created under a brand and listed."""
        brand = await brand_service.register_brand("RankMath", "rankmath")
        pro = await brand_service.create_product(brand.id, "RankMath Pro", "rankmath-pro")
        await brand_service.create_product(brand.id, "Content AI", "content-ai")

        products = await brand_service.get_brand_products(brand.id)

        assert [p.name for p in products] == ["Content AI", "RankMath Pro"]
        assert (await brand_service.get_product(pro.id)) == pro
        found = await brand_service.get_product_by_brand_and_slug(brand.id, "rankmath-pro")
        assert found.id == pro.id

    @pytest.mark.asyncio
    async def test_duplicate_product_slug_rejected(self, brand_service):
        """Test (brand, slug) is unique."""
        brand = await brand_service.register_brand("RankMath", "rankmath")
        await brand_service.create_product(brand.id, "RankMath Pro", "rankmath-pro")

        with pytest.raises(InvalidBrandError):
            await brand_service.create_product(brand.id, "Other", "rankmath-pro")

    @pytest.mark.asyncio
    async def test_product_conflict_on_save_is_invalid_brand(self, brand_repository):
        """Test a product slug taken between lookup and save is rejected."""
        service = BrandService(brand_repository, RacedProductRepository())
        brand = await service.register_brand("RankMath", "rankmath")

        with pytest.raises(InvalidBrandError, match="already exists"):
            await service.create_product(brand.id, "RankMath Pro", "rankmath-pro")

    @pytest.mark.asyncio
    async def test_same_product_slug_in_two_brands(self, brand_service):
        """Test product slugs are scoped to their brand."""
        rankmath = await brand_service.register_brand("RankMath", "rankmath")
        rocket = await brand_service.register_brand("WP Rocket", "wp-rocket")

        await brand_service.create_product(rankmath.id, "Pro", "pro")
        await brand_service.create_product(rocket.id, "Pro", "pro")

        assert len(await brand_service.get_brand_products(rocket.id)) == 1

    @pytest.mark.asyncio
    async def test_active_products(self, brand_service, product_repository):
        """Test inactive products are filtered."""
        brand = await brand_service.register_brand("RankMath", "rankmath")
        product = await brand_service.create_product(brand.id, "RankMath Pro", "rankmath-pro")
        await product_repository.save(product.deactivate())

        assert await brand_service.get_active_brand_products(brand.id) == []

    @pytest.mark.asyncio
    async def test_product_for_inactive_brand_rejected(self, brand_service):
        """Test deleted brands cannot get new products."""
        brand = await brand_service.register_brand("RankMath", "rankmath")
        await brand_service.delete_brand(brand.id)

        with pytest.raises(InvalidBrandError):
            await brand_service.create_product(brand.id, "RankMath Pro", "rankmath-pro")

    @pytest.mark.asyncio
    async def test_unknown_product(self, brand_service):
        """Test lookups of unknown products."""
        with pytest.raises(ProductNotFoundError):
            await brand_service.get_product(uuid.uuid4())
