"""
Product model.
"""
import uuid

from django.db import models

from core.domain.value_objects import ProductStatus


class Product(models.Model):
    """
    Represents a product that can be licensed (e.g., RankMath Pro, Content AI).
    Products belong to a brand.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    brand = models.ForeignKey("brands.Brand", on_delete=models.CASCADE, related_name="products")
    name = models.CharField(max_length=255, help_text="Product display name")
    slug = models.CharField(max_length=100, help_text="URL-safe identifier")
    description = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=20, choices=ProductStatus.choices(), default=ProductStatus.ACTIVE.value
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "products"
        ordering = ["brand", "name"]
        indexes = [
            models.Index(fields=["brand", "status"]),
        ]
        constraints = [
            models.UniqueConstraint(fields=["brand", "slug"], name="unique_brand_product_slug"),
        ]

    def __str__(self):
        return f"{self.brand_id} - {self.name}"
