"""
ORM models for the brands app.

The models live in brands.infrastructure; importing them here registers
them with Django's app registry.
"""
from brands.infrastructure.models import Brand  # noqa: F401
