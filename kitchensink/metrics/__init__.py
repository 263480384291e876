# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""
from prometheus_client import Counter, Gauge, Histogram

# ── Business Metrics (updated by service layer only) ──
MEMBERS_REGISTERED = Counter(
    "members_registered_total", "Total members successfully registered"
)
REGISTRATION_FAILURES = Counter(
    "members_registration_failures_total",
    "Registration attempts that did not persist a member",
    ["reason"],
)
REGISTRATION_LATENCY = Histogram(
    "members_registration_duration_seconds",
    "Time taken to register a member via the service",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)
MEMBERS_TOTAL = Gauge(
    "members_total", "Members currently stored"
)
SEQUENCE_VALUES_ISSUED = Counter(
    "sequence_values_issued_total", "Sequence values handed out", ["sequence"]
)
EVENT_DELIVERY_FAILURES = Counter(
    "member_event_delivery_failures_total",
    "Registration observers that raised",
    ["observer"],
)

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)
