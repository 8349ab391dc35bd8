"""
Django management command to seed demo data for development.

Creates, or reuses when they already exist:
- The RankMath and WP Rocket brands
- Their products
- A demo customer license key per brand
- One-year licenses for every product of the brand

Running the command repeatedly leaves a single copy of each record.
"""

import logging
from datetime import datetime, timedelta, timezone

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from api.dependencies import build_services
from core.domain.exceptions import DuplicateLicenseError, InvalidBrandError
from core.domain.outcome import capture

logger = logging.getLogger(__name__)

DEMO_BRANDS = [
    {
        "name": "RankMath",
        "slug": "rankmath",
        "products": [
            ("RankMath Pro", "rankmath-pro", "SEO plugin for WordPress"),
            ("Content AI", "content-ai", "AI writing assistant add-on"),
        ],
    },
    {
        "name": "WP Rocket",
        "slug": "wp-rocket",
        "products": [
            ("WP Rocket", "wp-rocket", "Caching plugin for WordPress"),
        ],
    },
]

DEFAULT_CUSTOMER_EMAIL = "customer@example.com"
LICENSE_DURATION = timedelta(days=365)


class Command(BaseCommand):
    """Command to seed demo brands, products, keys and licenses."""

    help = "Seed demo brands, products, license keys and licenses (idempotent)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--customer-email",
            type=str,
            default=DEFAULT_CUSTOMER_EMAIL,
            help=f"Customer email for the demo keys (default: {DEFAULT_CUSTOMER_EMAIL})",
        )
        parser.add_argument(
            "--skip-licenses",
            action="store_true",
            help="Only create brands and products",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        async_to_sync(self._seed)(options["customer_email"], options["skip_licenses"])
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Demo data ready"))

    async def _seed(self, customer_email: str, skip_licenses: bool):
        services = build_services()

        for demo_brand in DEMO_BRANDS:
            brand = await self._ensure_brand(services, demo_brand["name"], demo_brand["slug"])
            self.stdout.write(f"Brand {brand.name} ({brand.id})")
            self.stdout.write(f"  provisioning key: {brand.provisioning_api_key}")
            self.stdout.write(f"  validation key:   {brand.validation_api_key}")

            products = []
            for name, slug, description in demo_brand["products"]:
                product = await self._ensure_product(services, brand.id, name, slug, description)
                products.append(product)
                self.stdout.write(f"  product {product.slug.value} ({product.id})")

            if skip_licenses:
                continue

            license_key = await self._ensure_license_key(services, brand.id, customer_email)
            self.stdout.write(f"  license key: {license_key.key}")

            starts_at = datetime.now(timezone.utc)
            for product in products:
                outcome = await capture(
                    services.licenses.create_license(
                        license_key_id=license_key.id,
                        product_id=product.id,
                        starts_at=starts_at,
                        expires_at=starts_at + LICENSE_DURATION,
                    )
                )
                if outcome.failed_with(DuplicateLicenseError):
                    logger.info(
                        "Demo license already exists",
                        extra={"product_id": str(product.id)},
                    )
                    continue
                outcome.unwrap()

    async def _ensure_brand(self, services, name: str, slug: str):
        outcome = await capture(services.brands.register_brand(name, slug))
        if outcome.failed_with(InvalidBrandError):
            return await services.brands.get_brand_by_slug(slug)
        return outcome.unwrap()

    async def _ensure_product(self, services, brand_id, name: str, slug: str, description: str):
        outcome = await capture(
            services.brands.create_product(brand_id, name, slug, description=description)
        )
        if outcome.failed_with(InvalidBrandError):
            return await services.brands.get_product_by_brand_and_slug(brand_id, slug)
        return outcome.unwrap()

    async def _ensure_license_key(self, services, brand_id, customer_email: str):
        existing = await services.license_keys.get_license_keys_by_customer(
            brand_id, customer_email
        )
        if existing:
            return existing[0]
        return await services.license_keys.create_license_key(brand_id, customer_email)
