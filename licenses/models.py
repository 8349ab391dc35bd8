"""
ORM models for the licenses app.
"""
from licenses.infrastructure.models import License, LicenseKey  # noqa: F401
