"""
API key authentication middleware.

This middleware validates brand API keys. The brand API is authenticated
with the provisioning key, the product API with the validation key; the
two never substitute for one another.
"""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from api.dependencies import build_services
from core.domain.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

BRAND_API_PREFIX = "/api/v1/brands/"
PRODUCT_API_PREFIX = "/api/v1/products/"


def extract_api_key(request: HttpRequest) -> Optional[str]:
    """
    Read the API key from the request headers.

    Accepts "Authorization: Bearer <key>" or "X-API-Key: <key>".
    """
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return request.headers.get("X-API-Key") or None


def _unauthorized(message: str) -> JsonResponse:
    return JsonResponse({"error": {"code": "UNAUTHORIZED", "message": message}}, status=401)


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for API key authentication.

    This middleware:
    1. Validates provisioning keys for brand APIs (/api/v1/brands/*)
    2. Validates validation keys for product APIs (/api/v1/products/*)
    3. Returns 401 Unauthorized if authentication fails
    4. Stores the authenticated Brand entity on request.brand
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if request.path.startswith(BRAND_API_PREFIX):
            return self._authenticate(request, "provisioning")

        if request.path.startswith(PRODUCT_API_PREFIX):
            return self._authenticate(request, "validation")

        return None

    def _authenticate(self, request: HttpRequest, key_type: str) -> Optional[HttpResponse]:
        """
        Authenticate the request against one key class.

        Args:
            request: HTTP request
            key_type: "provisioning" or "validation"

        Returns:
            HttpResponse with 401 if auth fails, None if successful
        """
        api_key = extract_api_key(request)
        if not api_key:
            return _unauthorized("Missing API key. Provide Authorization: Bearer <key>.")

        brands = build_services().brands
        authenticate = (
            brands.authenticate_brand_by_provisioning_key
            if key_type == "provisioning"
            else brands.authenticate_brand_by_validation_key
        )
        try:
            brand = async_to_sync(authenticate)(api_key)
        except UnauthorizedError:
            logger.warning("Invalid %s key attempted: %s...", key_type, api_key[:6])
            return _unauthorized("Invalid API key")

        request.brand = brand  # type: ignore
        return None
