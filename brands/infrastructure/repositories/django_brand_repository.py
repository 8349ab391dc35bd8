"""
BrandRepository backed by the Django ORM.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from brands.domain.brand import Brand
from brands.infrastructure.models import Brand as BrandModel
from brands.ports.brand_repository import BrandRepository
from core.domain.value_objects import BrandSlug, BrandStatus
from core.repositories import OrmRepository


class DjangoBrandRepository(OrmRepository, BrandRepository):
    """
    Stores brands in the ``brands`` table.

    API keys are only written when the row is created; rotating a key is
    not something the service supports.
    """

    model = BrandModel
    conflict_message = "Brand conflicts with an existing brand"

    def _to_domain(self, row: BrandModel) -> Brand:
        return Brand(
            id=row.id,
            name=row.name,
            slug=BrandSlug(row.slug),
            provisioning_api_key=row.provisioning_api_key,
            validation_api_key=row.validation_api_key,
            status=BrandStatus(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
            deleted_at=row.deleted_at,
        )

    @sync_to_async
    def save(self, brand: Brand) -> Brand:
        return self._upsert(
            brand.id,
            changes={
                "name": brand.name,
                "slug": str(brand.slug),
                "status": brand.status.value,
                "deleted_at": brand.deleted_at,
                "updated_at": brand.updated_at,
            },
            on_insert={
                "provisioning_api_key": brand.provisioning_api_key,
                "validation_api_key": brand.validation_api_key,
                "created_at": brand.created_at,
            },
        )

    @sync_to_async
    def find_by_id(self, brand_id: uuid.UUID) -> Optional[Brand]:
        return self._first(id=brand_id)

    @sync_to_async
    def find_by_slug(self, slug: str) -> Optional[Brand]:
        return self._first(slug=slug, deleted_at__isnull=True)

    @sync_to_async
    def find_by_provisioning_key(self, api_key: str) -> Optional[Brand]:
        return self._first(provisioning_api_key=api_key)

    @sync_to_async
    def find_by_validation_key(self, api_key: str) -> Optional[Brand]:
        return self._first(validation_api_key=api_key)

    @sync_to_async
    def exists(self, brand_id: uuid.UUID) -> bool:
        return self._exists(id=brand_id)

    @sync_to_async
    def list_all(self) -> List[Brand]:
        return self._each(self._objects.all())
