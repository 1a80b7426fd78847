"""
Prometheus metrics collection for railcheck

Counts validated rows, validation errors per rule and configured rules per
table, and times validation runs. Metrics live on a private registry so that
embedding applications decide whether and how to expose them.
"""
from collections.abc import Iterable

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
# VALIDATION METRICS
# =======================

rows_validated_total = Counter(
    name="railcheck_rows_validated_total",
    documentation="Total number of rows validated",
    labelnames=["validator"],
    registry=REGISTRY,
)

validation_errors_total = Counter(
    name="railcheck_validation_errors_total",
    documentation="Total number of validation errors produced",
    labelnames=["validator", "rule_name"],
    registry=REGISTRY,
)

validation_duration_seconds = Histogram(
    name="railcheck_validation_duration_seconds",
    documentation="Time spent in one validate_all call in seconds",
    labelnames=["validator"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
    registry=REGISTRY,
)

# =======================
# CONFIGURATION METRICS
# =======================

rules_configured_total = Counter(
    name="railcheck_rules_configured_total",
    documentation="Total number of rules registered by the rule configurator",
    labelnames=["table"],
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
    """Content type of generate_metrics() output."""
    return CONTENT_TYPE_LATEST


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(validation_duration_seconds, validator="rail_gauge"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def record_validation_run(validator: str, row_count: int, rule_names: Iterable[str]) -> None:
    """
    Record the outcome of one validation run

    Args:
        validator: Validator name
        row_count: Number of rows validated
        rule_names: Rule name of every error produced (one entry per error)
    """
    if row_count:
        increment_counter(rows_validated_total, row_count, validator=validator)

    for rule_name in rule_names:
        increment_counter(validation_errors_total, validator=validator, rule_name=rule_name)
