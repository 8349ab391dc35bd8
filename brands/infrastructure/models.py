"""
Brand model.
"""

import uuid

from django.db import models
from django.db.models import Q

from core.domain.value_objects import BrandStatus


class Brand(models.Model):
    """
    Represents a brand/tenant in the system (e.g., RankMath, WP Rocket).
    Each brand has isolated data access.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Brand display name")
    slug = models.CharField(max_length=100, help_text="Human-readable tenant key")
    provisioning_api_key = models.CharField(
        max_length=100,
        unique=True,
        help_text="Authorizes brand-scoped provisioning",
    )
    validation_api_key = models.CharField(
        max_length=100,
        unique=True,
        help_text="Authorizes product-facing validation and activation",
    )
    status = models.CharField(
        max_length=20, choices=BrandStatus.choices(), default=BrandStatus.ACTIVE.value
    )
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "brands"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["slug"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["slug"],
                condition=Q(deleted_at__isnull=True),
                name="unique_active_brand_slug",
            ),
        ]

    def __str__(self):
        return self.name
