"""
Prometheus metrics for the license token service.

Custom metrics for token lifecycle and performance monitoring.
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

# Key metrics
key_pairs_generated_total = Counter(
    "key_pairs_generated_total",
    "Total RSA key pairs generated",
)

# License metrics
license_issuance_total = Counter(
    "license_issuance_total",
    "License issuance attempts by terminal stage",
    ["stage", "outcome"],
)

token_validations_total = Counter(
    "token_validations_total",
    "Token validations by outcome",
    ["outcome"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
