"""
Serializers for Brand API endpoints.
"""

from rest_framework import serializers


class CreateProductRequestSerializer(serializers.Serializer):
    """Serializer for create product request."""

    name = serializers.CharField(max_length=255)
    slug = serializers.RegexField(r"^[A-Za-z0-9_-]+$", max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class ProductSerializer(serializers.Serializer):
    """Serializer for the Product entity."""

    id = serializers.UUIDField()
    brand_id = serializers.UUIDField()
    name = serializers.CharField()
    slug = serializers.CharField(source="slug.value")
    description = serializers.CharField()
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class CreateLicenseKeyRequestSerializer(serializers.Serializer):
    """Serializer for create license key request."""

    customer_email = serializers.EmailField()


class LicenseKeySerializer(serializers.Serializer):
    """Serializer for the LicenseKey entity."""

    id = serializers.UUIDField()
    brand_id = serializers.UUIDField()
    key = serializers.CharField()
    customer_email = serializers.CharField(source="customer_email.value")
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseViewSerializer(serializers.Serializer):
    """Serializer for LicenseView."""

    id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    status = serializers.CharField()
    starts_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    activated_at = serializers.DateTimeField(allow_null=True)
    seat_limit = serializers.IntegerField(allow_null=True)


class LicenseKeyDetailSerializer(LicenseKeySerializer):
    """Serializer for a license key together with its licenses."""

    licenses = LicenseViewSerializer(many=True)


class UpdateLicenseKeyStatusRequestSerializer(serializers.Serializer):
    """Serializer for license key status change."""

    status = serializers.ChoiceField(choices=["active", "inactive", "cancelled"])


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    license_key_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    starts_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    seat_limit = serializers.IntegerField(required=False, allow_null=True, min_value=1)

    def validate(self, attrs):
        """Validate the validity window."""
        if attrs["expires_at"] <= attrs["starts_at"]:
            raise serializers.ValidationError(
                {"expires_at": "Expiration date must be after start date"}
            )
        return attrs


class LicenseSerializer(serializers.Serializer):
    """Serializer for the License entity."""

    id = serializers.UUIDField()
    license_key_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    status = serializers.CharField(source="status.value")
    starts_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    activated_at = serializers.DateTimeField(allow_null=True)
    seat_limit = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class UpdateLicenseStatusRequestSerializer(serializers.Serializer):
    """Serializer for license status change."""

    status = serializers.ChoiceField(choices=["valid", "suspended", "cancelled"])
