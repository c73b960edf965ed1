from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

UPSTREAM_REQUESTS = Counter(
    "lingua_relay_upstream_requests_total",
    "Outbound calls to Google APIs",
    ["api", "outcome"],
)

UPSTREAM_DURATION = Histogram(
    "lingua_relay_upstream_duration_seconds",
    "Outbound call duration in seconds",
    ["api"],
    buckets=[0.1, 0.25, 0.5, 1.0, 1.5, 2.0, 3.0, 5.0, 10.0, 30.0],
)


def setup_metrics(app):
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics", "/docs", "/openapi.json", "/health"],
    ).instrument(app).expose(app, endpoint="/metrics")
