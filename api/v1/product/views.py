"""
Product API views.

These endpoints are used by end-user products to:
- Validate a license key for a product
- Activate a license
- List the licenses attached to a key

Requests are authenticated by the brand's validation key. Keys owned by
another brand are indistinguishable from unknown keys.
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import build_services
from api.exceptions import error_body
from api.v1.brand.serializers import LicenseViewSerializer
from api.v1.product.serializers import (
    ActivateLicenseResponseSerializer,
    LicensesByKeyResponseSerializer,
    LicenseValidationSerializer,
    ValidateLicenseRequestSerializer,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "License not found or invalid"


class ValidateLicenseView(APIView):
    """View for validating licenses."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description="Check whether a license key currently grants access to a product.",
        tags=["Product API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: LicenseValidationSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized - Missing or invalid validation key"},
            404: {"description": "License not found or invalid"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key for a product."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        serializer = ValidateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        validation = await build_services().licenses.validate_license(
            serializer.validated_data["license_key"],
            serializer.validated_data["product_id"],
            brand_id=request.brand.id,
        )
        if validation is None:
            return Response(
                {"valid": False, "message": NOT_FOUND_MESSAGE},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(LicenseValidationSerializer(validation).data)


class ActivateLicenseView(APIView):
    """View for activating licenses."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Activate a valid license. A license can be activated only once; "
            "a second attempt is rejected with 409."
        ),
        tags=["Product API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ActivateLicenseResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized - Missing or invalid validation key"},
            404: {"description": "License not found or invalid"},
            409: {"description": "License already activated"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        serializer = ValidateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services = build_services()
        validation = await services.licenses.validate_license(
            serializer.validated_data["license_key"],
            serializer.validated_data["product_id"],
            brand_id=request.brand.id,
        )
        if validation is None:
            return Response(
                {"activated": False, "message": NOT_FOUND_MESSAGE},
                status=status.HTTP_404_NOT_FOUND,
            )

        license = await services.licenses.activate_license(validation.license_id)
        data = {
            "activated": True,
            "license_id": license.id,
            "activated_at": license.activated_at,
        }
        return Response(ActivateLicenseResponseSerializer(data).data)


class LicensesByKeyView(APIView):
    """View for listing the licenses attached to a key."""

    @extend_schema(
        operation_id="get_licenses_by_key",
        summary="Get Licenses by Key",
        tags=["Product API"],
        responses={
            200: LicensesByKeyResponseSerializer,
            401: {"description": "Unauthorized - Missing or invalid validation key"},
            404: {"description": "License key not found"},
        },
    )
    def get(self, request: Request, license_key: str) -> Response:
        """List the licenses of a key with their product names."""
        return async_to_sync(self._handle_get)(request, license_key)

    async def _handle_get(self, request: Request, license_key: str) -> Response:
        services = build_services()
        key = await services.license_keys.get_license_key_by_string(license_key)
        if not key.belongs_to(request.brand.id):
            logger.warning(
                "License key lookup by another brand",
                extra={"license_key_id": str(key.id), "brand_id": str(request.brand.id)},
            )
            return Response(
                error_body("NOT_FOUND", "License key not found"),
                status=status.HTTP_404_NOT_FOUND,
            )

        licenses = await services.licenses.get_licenses_by_key(key.id)
        return Response(
            {
                "license_key": key.key,
                "licenses": LicenseViewSerializer(licenses, many=True).data,
            }
        )
