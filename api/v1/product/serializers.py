"""
Serializers for Product API endpoints.
"""

from rest_framework import serializers

from api.v1.brand.serializers import LicenseViewSerializer


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate and activate requests."""

    license_key = serializers.CharField(max_length=255)
    product_id = serializers.UUIDField()


class LicenseValidationSerializer(serializers.Serializer):
    """Serializer for LicenseValidation."""

    valid = serializers.BooleanField()
    license_id = serializers.UUIDField()
    license_key_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    status = serializers.CharField()
    expires_at = serializers.DateTimeField()
    activated_at = serializers.DateTimeField(allow_null=True)


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    activated = serializers.BooleanField()
    license_id = serializers.UUIDField()
    activated_at = serializers.DateTimeField()


class LicensesByKeyResponseSerializer(serializers.Serializer):
    """Serializer for the licenses attached to a key."""

    license_key = serializers.CharField()
    licenses = LicenseViewSerializer(many=True)
