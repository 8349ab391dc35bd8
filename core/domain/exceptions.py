"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.

Every exception carries an ErrorKind so the calling layer can decide
the transport-level representation without inspecting the class tree.
Invariant violations (malformed construction arguments) are plain
ValueError and are never represented here.
"""
from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure kinds surfaced by the services."""

    NOT_FOUND = "not_found"
    BUSINESS_RULE = "business_rule"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"

    def __str__(self) -> str:
        """Return kind as string."""
        return self.value


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    kind = ErrorKind.BUSINESS_RULE

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NotFoundError(DomainException):
    """Base exception for a referenced entity that does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, code="NOT_FOUND")


class BrandNotFoundError(NotFoundError):
    """Raised when a brand is not found."""

    def __init__(self, message: str = "Brand not found"):
        super().__init__(message)


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class LicenseKeyNotFoundError(NotFoundError):
    """Raised when a license key is not found."""

    def __init__(self, message: str = "License key not found"):
        super().__init__(message)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message)


class InvalidBrandError(DomainException):
    """
    Raised when a brand-level business rule is violated.

    Covers duplicate brand or product slugs, operations against an
    inactive brand, and product/license-key tenant mismatches.
    """

    def __init__(self, message: str = "Invalid brand", tenant_mismatch: bool = False):
        super().__init__(message, code="INVALID_BRAND")
        self.tenant_mismatch = tenant_mismatch


class DuplicateLicenseError(DomainException):
    """Raised when a license already exists for a license key and product."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "License already exists for this key and product"):
        super().__init__(message, code="DUPLICATE_LICENSE")


class InvalidLicenseStateError(DomainException):
    """Raised when a license transition is invalid for the current status."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Invalid license state"):
        super().__init__(message, code="INVALID_STATE")


class InvalidLicenseKeyStateError(DomainException):
    """Raised when a license key transition is invalid for the current status."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Invalid license key state"):
        super().__init__(message, code="INVALID_STATE")


class InvalidBrandStateError(DomainException):
    """Raised when a brand transition is invalid for the current status."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Invalid brand state"):
        super().__init__(message, code="INVALID_STATE")


class UnauthorizedError(DomainException):
    """Raised when an API key does not authenticate an active brand."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Invalid or inactive brand API key"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(DomainException):
    """Raised when an authenticated brand reaches for another brand's data."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "No access to this brand"):
        super().__init__(message, code="FORBIDDEN")


class RepositoryConflictError(DomainException):
    """
    Raised by repositories when a save violates a uniqueness constraint.

    The write is not applied. Services translate this into the matching
    business failure or retry, depending on the constraint.
    """

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Uniqueness constraint violated"):
        super().__init__(message, code="CONFLICT")
