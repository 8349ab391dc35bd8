"""
Brand API views.

These endpoints are used by brand systems to:
- Manage their products
- Issue license keys and manage their lifecycle
- Issue licenses and manage their lifecycle

Every request is authenticated by the provisioning key (see
core.middleware.auth) and may only touch the authenticated brand's data.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import build_services
from api.exceptions import error_body
from api.v1.brand.serializers import (
    CreateLicenseKeyRequestSerializer,
    CreateLicenseRequestSerializer,
    CreateProductRequestSerializer,
    LicenseKeyDetailSerializer,
    LicenseKeySerializer,
    LicenseSerializer,
    LicenseViewSerializer,
    ProductSerializer,
    UpdateLicenseKeyStatusRequestSerializer,
    UpdateLicenseStatusRequestSerializer,
)
from core.domain.exceptions import ForbiddenError

ERROR_RESPONSES = {
    400: {"description": "Bad Request"},
    401: {"description": "Unauthorized - Missing or invalid provisioning key"},
    403: {"description": "Forbidden - Resource belongs to another brand"},
    404: {"description": "Not Found"},
}


class BrandScopedView(APIView):
    """Base view for endpoints under /api/v1/brands/{brand_id}/."""

    def check_brand_access(self, request: Request, brand_id: uuid.UUID):
        """
        Ensure the path brand is the authenticated brand.

        Raises:
            ForbiddenError: If the brands differ
        """
        brand = getattr(request, "brand", None)
        if brand is None or brand.id != brand_id:
            raise ForbiddenError("No access to this brand")
        return brand


class ProductListCreateView(BrandScopedView):
    """List and create products of a brand."""

    @extend_schema(
        operation_id="list_products",
        summary="List Products",
        tags=["Brand API"],
        responses={200: ProductSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request: Request, brand_id: uuid.UUID) -> Response:
        """List the brand's products."""
        return async_to_sync(self._handle_list)(request, brand_id)

    async def _handle_list(self, request: Request, brand_id: uuid.UUID) -> Response:
        self.check_brand_access(request, brand_id)
        products = await build_services().brands.get_brand_products(brand_id)
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(
        operation_id="create_product",
        summary="Create Product",
        tags=["Brand API"],
        request=CreateProductRequestSerializer,
        responses={201: ProductSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request, brand_id: uuid.UUID) -> Response:
        """Create a product for the brand."""
        return async_to_sync(self._handle_create)(request, brand_id)

    async def _handle_create(self, request: Request, brand_id: uuid.UUID) -> Response:
        self.check_brand_access(request, brand_id)
        serializer = CreateProductRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = await build_services().brands.create_product(
            brand_id=brand_id,
            name=serializer.validated_data["name"],
            slug=serializer.validated_data["slug"],
            description=serializer.validated_data.get("description", ""),
        )
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class LicenseKeyListCreateView(BrandScopedView):
    """List a customer's license keys and issue new ones."""

    @extend_schema(
        operation_id="list_license_keys",
        summary="List License Keys by Customer",
        tags=["Brand API"],
        parameters=[
            OpenApiParameter(
                name="customer_email",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Customer email address",
            ),
        ],
        responses={200: LicenseKeySerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request: Request, brand_id: uuid.UUID) -> Response:
        """List license keys of a customer, newest first."""
        return async_to_sync(self._handle_list)(request, brand_id)

    async def _handle_list(self, request: Request, brand_id: uuid.UUID) -> Response:
        self.check_brand_access(request, brand_id)
        email = request.query_params.get("customer_email")
        if not email:
            return Response(
                error_body("VALIDATION_ERROR", "customer_email query parameter is required"),
                status=status.HTTP_400_BAD_REQUEST,
            )

        keys = await build_services().license_keys.get_license_keys_by_customer(brand_id, email)
        return Response(LicenseKeySerializer(keys, many=True).data)

    @extend_schema(
        operation_id="create_license_key",
        summary="Create License Key",
        description="Issue a new license key for a customer.",
        tags=["Brand API"],
        request=CreateLicenseKeyRequestSerializer,
        responses={201: LicenseKeySerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request, brand_id: uuid.UUID) -> Response:
        """Issue a license key."""
        return async_to_sync(self._handle_create)(request, brand_id)

    async def _handle_create(self, request: Request, brand_id: uuid.UUID) -> Response:
        self.check_brand_access(request, brand_id)
        serializer = CreateLicenseKeyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        license_key = await build_services().license_keys.create_license_key(
            brand_id, serializer.validated_data["customer_email"]
        )
        return Response(LicenseKeySerializer(license_key).data, status=status.HTTP_201_CREATED)


class LicenseKeyDetailView(BrandScopedView):
    """Read a license key with its licenses and change its status."""

    @extend_schema(
        operation_id="get_license_key",
        summary="Get License Key",
        tags=["Brand API"],
        responses={200: LicenseKeyDetailSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request, brand_id: uuid.UUID, license_key_id: uuid.UUID) -> Response:
        """Get a license key and its licenses."""
        return async_to_sync(self._handle_get)(request, brand_id, license_key_id)

    async def _handle_get(
        self, request: Request, brand_id: uuid.UUID, license_key_id: uuid.UUID
    ) -> Response:
        self.check_brand_access(request, brand_id)
        services = build_services()
        license_key = await self._owned_key(services, brand_id, license_key_id)
        licenses = await services.licenses.get_licenses_by_key(license_key.id)

        data = LicenseKeySerializer(license_key).data
        data["licenses"] = LicenseViewSerializer(licenses, many=True).data
        return Response(data)

    @extend_schema(
        operation_id="update_license_key_status",
        summary="Update License Key Status",
        description="Suspend (inactive), reactivate (active) or cancel a license key.",
        tags=["Brand API"],
        request=UpdateLicenseKeyStatusRequestSerializer,
        responses={200: LicenseKeySerializer, 409: {"description": "Invalid transition"}},
    )
    def patch(self, request: Request, brand_id: uuid.UUID, license_key_id: uuid.UUID) -> Response:
        """Change the status of a license key."""
        return async_to_sync(self._handle_patch)(request, brand_id, license_key_id)

    async def _handle_patch(
        self, request: Request, brand_id: uuid.UUID, license_key_id: uuid.UUID
    ) -> Response:
        self.check_brand_access(request, brand_id)
        serializer = UpdateLicenseKeyStatusRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services = build_services()
        await self._owned_key(services, brand_id, license_key_id)

        transition = {
            "inactive": services.license_keys.suspend_license_key,
            "active": services.license_keys.reactivate_license_key,
            "cancelled": services.license_keys.cancel_license_key,
        }[serializer.validated_data["status"]]
        license_key = await transition(license_key_id)
        return Response(LicenseKeySerializer(license_key).data)

    async def _owned_key(self, services, brand_id: uuid.UUID, license_key_id: uuid.UUID):
        license_key = await services.license_keys.get_license_key(license_key_id)
        if not license_key.belongs_to(brand_id):
            raise ForbiddenError("License key does not belong to this brand")
        return license_key


class LicenseCreateView(BrandScopedView):
    """Issue licenses."""

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Grant a license key access to a product for a validity window. "
            "Key and product must belong to the authenticated brand."
        ),
        tags=["Brand API"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            409: {"description": "License already exists for this key and product"},
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request, brand_id: uuid.UUID) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create)(request, brand_id)

    async def _handle_create(self, request: Request, brand_id: uuid.UUID) -> Response:
        self.check_brand_access(request, brand_id)
        serializer = CreateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        services = build_services()
        license_key = await services.license_keys.get_license_key(data["license_key_id"])
        if not license_key.belongs_to(brand_id):
            raise ForbiddenError("License key does not belong to this brand")

        license = await services.licenses.create_license(
            license_key_id=data["license_key_id"],
            product_id=data["product_id"],
            starts_at=data["starts_at"],
            expires_at=data["expires_at"],
            seat_limit=data.get("seat_limit"),
        )
        return Response(LicenseSerializer(license).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(BrandScopedView):
    """Read a license and change its status."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        tags=["Brand API"],
        responses={200: LicenseSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request, brand_id: uuid.UUID, license_id: uuid.UUID) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get)(request, brand_id, license_id)

    async def _handle_get(
        self, request: Request, brand_id: uuid.UUID, license_id: uuid.UUID
    ) -> Response:
        self.check_brand_access(request, brand_id)
        license = await self._owned_license(build_services(), brand_id, license_id)
        return Response(LicenseSerializer(license).data)

    @extend_schema(
        operation_id="update_license_status",
        summary="Update License Status",
        description="Suspend, reactivate (valid) or cancel a license.",
        tags=["Brand API"],
        request=UpdateLicenseStatusRequestSerializer,
        responses={
            200: LicenseSerializer,
            409: {"description": "Invalid transition"},
            **ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, brand_id: uuid.UUID, license_id: uuid.UUID) -> Response:
        """Change the status of a license."""
        return async_to_sync(self._handle_patch)(request, brand_id, license_id)

    async def _handle_patch(
        self, request: Request, brand_id: uuid.UUID, license_id: uuid.UUID
    ) -> Response:
        self.check_brand_access(request, brand_id)
        serializer = UpdateLicenseStatusRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services = build_services()
        await self._owned_license(services, brand_id, license_id)

        transition = {
            "suspended": services.licenses.suspend_license,
            "valid": services.licenses.reactivate_license,
            "cancelled": services.licenses.cancel_license,
        }[serializer.validated_data["status"]]
        license = await transition(license_id)
        return Response(LicenseSerializer(license).data)

    async def _owned_license(self, services, brand_id: uuid.UUID, license_id: uuid.UUID):
        license = await services.licenses.get_license(license_id)
        license_key = await services.license_keys.get_license_key(license.license_key_id)
        if not license_key.belongs_to(brand_id):
            raise ForbiddenError("License does not belong to this brand")
        return license
