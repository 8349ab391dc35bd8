"""
Licenses module - License key and License management.

This module handles:
- LicenseKey entity and its suspend/reactivate/cancel lifecycle
- License entity, validation, activation and lifecycle
- The expiry sweep
"""
