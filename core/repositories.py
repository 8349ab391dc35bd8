"""
Shared plumbing for the Django ORM adapters.

Each adapter names its model and how a row maps to a domain entity; this
base routes every query to one database alias and turns integrity errors
into RepositoryConflictError so the application layer never sees Django.
"""
from typing import Any, Dict, List, Optional

from django.db import IntegrityError, transaction

from core.domain.exceptions import RepositoryConflictError


class OrmRepository:
    """Base for repositories backed by a single Django model."""

    model = None
    conflict_message = "Row conflicts with an existing row"

    def __init__(self, using: str = "default"):
        self.using = using

    @property
    def _objects(self):
        # pylint: disable=no-member
        return self.model.objects.using(self.using)

    def _to_domain(self, row):
        raise NotImplementedError

    def _first(self, **lookup) -> Optional[Any]:
        row = self._objects.filter(**lookup).first()
        return None if row is None else self._to_domain(row)

    def _each(self, queryset) -> List[Any]:
        return [self._to_domain(row) for row in queryset]

    def _exists(self, **lookup) -> bool:
        return self._objects.filter(**lookup).exists()

    def _upsert(self, pk, changes: Dict[str, Any], on_insert: Dict[str, Any]):
        """
        Write ``changes`` to the row ``pk``, creating it when missing.

        ``on_insert`` holds the columns that are fixed once the row exists
        (ownership, generated keys, creation time).
        """
        try:
            with transaction.atomic(using=self.using):
                row, _ = self._objects.update_or_create(
                    id=pk, defaults=changes, create_defaults={**changes, **on_insert}
                )
        except IntegrityError as exc:
            raise RepositoryConflictError(f"{self.conflict_message}: {exc}") from exc
        return self._to_domain(row)
