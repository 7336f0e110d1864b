"""Pure functions over in-memory disputes: metrics, filtering and aging."""
from dispute_portal.processing.aging import AGE_BUCKETS, age_bucket, age_buckets, days_since
from dispute_portal.processing.filters import (
    ALL,
    DisputeFilters,
    filter_disputes,
    filter_options,
    matches_filters,
    normalize_filters,
)
from dispute_portal.processing.metrics import DisputeMetrics, calculate_metrics, resolution_rate, status_tally

__all__ = [
    "AGE_BUCKETS",
    "ALL",
    "DisputeFilters",
    "DisputeMetrics",
    "age_bucket",
    "age_buckets",
    "calculate_metrics",
    "days_since",
    "filter_disputes",
    "filter_options",
    "matches_filters",
    "normalize_filters",
    "resolution_rate",
    "status_tally",
]
