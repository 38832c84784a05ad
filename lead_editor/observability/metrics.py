"""
Prometheus metrics for lead-editor

Counts save attempts, change-set sizes, validation failures, room name
format checks and cache behaviour. All metrics live in a private
registry so embedding applications can expose or ignore them.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# SUBMISSION METRICS
# =======================

# status: success, noop, failure
submissions_total = Counter(
    name="lead_editor_submissions_total",
    documentation="Total number of change-set submissions",
    labelnames=["entity_type", "status"],
    registry=REGISTRY,
)

changed_fields_per_submission = Histogram(
    name="lead_editor_changed_fields_per_submission",
    documentation="Number of fields carried by each non-empty submission",
    labelnames=["entity_type"],
    buckets=[1, 2, 3, 5, 8, 13, 21, 34],
    registry=REGISTRY,
)

submit_duration_seconds = Histogram(
    name="lead_editor_submit_duration_seconds",
    documentation="Time spent in the record store per submission",
    labelnames=["entity_type"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

store_errors_total = Counter(
    name="lead_editor_store_errors_total",
    documentation="Total number of record store failures",
    labelnames=["entity_type", "operation"],
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

validation_failures_total = Counter(
    name="lead_editor_validation_failures_total",
    documentation="Total number of validation failures",
    labelnames=["entity_type", "rule_type", "field_name"],
    registry=REGISTRY,
)

# reason: correct, incorrect, missing
name_format_checks_total = Counter(
    name="lead_editor_name_format_checks_total",
    documentation="Room name format checks by outcome",
    labelnames=["reason"],
    registry=REGISTRY,
)

# =======================
# CACHE METRICS
# =======================

# result: hit, miss, expired
cache_lookups_total = Counter(
    name="lead_editor_cache_lookups_total",
    documentation="Response cache lookups by result",
    labelnames=["result"],
    registry=REGISTRY,
)

cache_invalidations_total = Counter(
    name="lead_editor_cache_invalidations_total",
    documentation="Response cache entries evicted explicitly",
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Content type for the Prometheus text format."""
    return CONTENT_TYPE_LATEST


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    histogram.labels(**labels).observe(value)


def get_sample_value(name: str, labels: dict[str, str] | None = None) -> float | None:
    """Read the current value of a sample from the registry (used by tests and health checks)."""
    return REGISTRY.get_sample_value(name, labels or {})


def record_submission(entity_type: str, status: str, changed_fields: int = 0) -> None:
    """
    Record the outcome of one submission.

    Args:
        entity_type: room, room_type or property
        status: success, noop or failure
        changed_fields: Number of fields submitted
    """
    increment_counter(submissions_total, 1, entity_type=entity_type, status=status)
    if changed_fields > 0:
        observe_histogram(changed_fields_per_submission, changed_fields, entity_type=entity_type)


def record_validation_failure(entity_type: str, rule_type: str, field_name: str) -> None:
    """Record a validation failure."""
    increment_counter(
        validation_failures_total, 1,
        entity_type=entity_type, rule_type=rule_type, field_name=field_name
    )
