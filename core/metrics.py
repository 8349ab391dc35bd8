"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Tenant metrics
brands_registered_total = Counter(
    "brands_registered_total",
    "Total brands registered",
)

authentication_failures_total = Counter(
    "authentication_failures_total",
    "Total rejected brand API keys",
    ["key_type"],
)

# License metrics
license_keys_created_total = Counter(
    "license_keys_created_total",
    "Total license keys issued",
    ["brand_id"],
)

license_key_collisions_total = Counter(
    "license_key_collisions_total",
    "Generated license key strings that were already taken",
)

licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["product_id"],
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total licenses activated",
    ["product_id"],
)

license_transitions_total = Counter(
    "license_transitions_total",
    "License status transitions",
    ["to_status"],
)

license_validations_total = Counter(
    "license_validations_total",
    "License validation checks",
    ["result"],
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Licenses moved to expired by the sweep",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
