"""
Identifier and key generation.

Produces entity ids, brand API keys, and the customer-facing license key
strings. The license key format and the acronym derivation are part of
the contract with customers who type these keys, so both are fixed:

    {ACRONYM}-{YEAR}-{RANDOM}     e.g. RANK-2025-A1B2C3D4E5F6
"""
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

PROVISIONING_KEY_PREFIX = "sk_"
VALIDATION_KEY_PREFIX = "pk_"

ACRONYM_LENGTH = 4
SLUG_SEPARATOR = "-"

# 48 bits of randomness -> 12 hex characters
LICENSE_KEY_RANDOM_BYTES = 6


def new_id() -> uuid.UUID:
    """Return a new random entity identifier."""
    return uuid.uuid4()


def generate_api_key(prefix: str) -> str:
    """
    Generate an API key.

    Args:
        prefix: Key class prefix (provisioning or validation)

    Returns:
        Prefix followed by 256 random bits as lowercase hex
    """
    return f"{prefix}{secrets.token_hex(32)}"


def extract_acronym(slug: str) -> str:
    """
    Derive the license key acronym from a brand slug.

    Examples:
        rankmath   -> RANK
        wp-rocket  -> WPRO
        a-b-c-d-e  -> ABCD

    Args:
        slug: Brand slug

    Returns:
        Uppercase acronym, at most 4 characters
    """
    parts = slug.split(SLUG_SEPARATOR)

    if len(parts) == 1:
        return slug[:ACRONYM_LENGTH].upper()

    acronym = "".join(part[0].upper() for part in parts if part)

    if len(acronym) < ACRONYM_LENGTH:
        acronym = slug.replace(SLUG_SEPARATOR, "").upper()[:ACRONYM_LENGTH]

    return acronym[:ACRONYM_LENGTH]


def generate_license_key(acronym: str, year: Optional[int] = None) -> str:
    """
    Generate a license key in format: ACRONYM-YEAR-RANDOM.

    Args:
        acronym: Brand acronym (e.g., 'RANK' for rankmath)
        year: Year component (defaults to the current UTC year)

    Returns:
        Generated license key string
    """
    if year is None:
        year = datetime.now(timezone.utc).year
    random_part = secrets.token_hex(LICENSE_KEY_RANDOM_BYTES).upper()
    return f"{acronym}-{year:04d}-{random_part}"
