"""
Tables for license keys and the licenses granted through them.
"""
import uuid

from django.db import models

from core.domain.value_objects import LicenseKeyStatus, LicenseStatus


class LicenseKey(models.Model):
    """
    The credential a customer types into a product.

    ``brand`` owns the key and ``created_by_brand`` records which brand
    issued it. The two are the same for every key issued over the API.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    brand = models.ForeignKey("brands.Brand", on_delete=models.CASCADE, related_name="license_keys")
    key = models.CharField(max_length=100, unique=True)
    customer_email = models.CharField(max_length=254)
    status = models.CharField(
        max_length=20,
        choices=LicenseKeyStatus.choices(),
        default=LicenseKeyStatus.ACTIVE.value,
    )
    created_by_brand = models.ForeignKey(
        "brands.Brand", on_delete=models.CASCADE, related_name="issued_license_keys"
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "license_keys"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["brand", "customer_email"])]

    def __str__(self):
        return self.key


class License(models.Model):
    """Entitlement of one license key to one product for a time window."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.ForeignKey(LicenseKey, on_delete=models.CASCADE, related_name="licenses")
    product = models.ForeignKey(
        "products.Product", on_delete=models.CASCADE, related_name="licenses"
    )
    status = models.CharField(
        max_length=20,
        choices=LicenseStatus.choices(),
        default=LicenseStatus.VALID.value,
    )
    starts_at = models.DateTimeField()
    expires_at = models.DateTimeField()
    activated_at = models.DateTimeField(null=True, blank=True)
    seat_limit = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            # Expiry sweep: status <> expired AND expires_at < now.
            models.Index(fields=["expires_at", "status"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["license_key", "product"], name="one_license_per_key_and_product"
            ),
        ]

    def __str__(self):
        return f"{self.license_key_id}:{self.product_id}"
