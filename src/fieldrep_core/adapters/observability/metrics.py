from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()

REQUESTS_SUBMITTED = Counter(
    "fieldrep_requests_submitted_total",
    "Form submissions by outcome",
    ["kind", "outcome"],
    registry=registry,
)

STORE_CALL_DURATION = Histogram(
    "fieldrep_store_call_seconds",
    "Duration of document store calls",
    ["operation", "collection"],
    registry=registry,
)


def render_metrics() -> bytes:
    return generate_latest(registry)
