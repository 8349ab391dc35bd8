"""
Value objects shared by the brand and license domains.

Wrapped strings validate themselves on construction, so an entity holding
an Email or a slug never has to check it again. Statuses serialize to
their lowercase ``value``, which is also what the database stores.
"""
import re
from dataclasses import dataclass
from enum import Enum

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")
_SLUG_RE = re.compile(r"^[A-Za-z0-9_-]+$")
# Brand slugs feed the license-key acronym, which must be letters only.
_BRAND_SLUG_RE = re.compile(r"^[A-Za-z]+(?:-[A-Za-z]+)*$")


@dataclass(frozen=True)
class ValueObject:
    """Immutable wrapper around one string; equal when the strings are."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email(ValueObject):
    """Customer email. Only the shape ``local@domain`` is enforced."""

    def __post_init__(self):
        if not self.value or not _EMAIL_RE.match(self.value):
            raise ValueError(f"Invalid email address: {self.value!r}")


@dataclass(frozen=True)
class _Slug(ValueObject):
    kind = "slug"
    pattern = _SLUG_RE

    def __post_init__(self):
        if not self.value:
            raise ValueError(f"{self.kind.capitalize()} slug cannot be empty")
        if not self.pattern.match(self.value):
            raise ValueError(f"Invalid {self.kind} slug format: {self.value!r}")


@dataclass(frozen=True)
class BrandSlug(_Slug):
    """Letters in hyphen-separated segments, e.g. ``wp-rocket``."""

    kind = "brand"
    pattern = _BRAND_SLUG_RE


@dataclass(frozen=True)
class ProductSlug(_Slug):
    kind = "product"


class _Status(Enum):
    def __str__(self) -> str:
        return self.value

    @classmethod
    def choices(cls):
        """(value, label) pairs for model field choices."""
        return [(member.value, member.name.title()) for member in cls]


class BrandStatus(_Status):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class ProductStatus(_Status):
    ACTIVE = "active"
    INACTIVE = "inactive"


class LicenseKeyStatus(_Status):
    """INACTIVE is a reversible suspension; CANCELLED is final."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    CANCELLED = "cancelled"


class LicenseStatus(_Status):
    """
    Lifecycle of a license.

    EXPIRED is only ever set by the expiry sweep; brands move licenses
    between VALID and SUSPENDED, or to CANCELLED for good.
    """

    VALID = "valid"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
