"""Supplier return dispute portal: sheet-backed disputes, metrics and exports."""
from dispute_portal.core import (
    Dispute,
    Identity,
    PortalError,
    PortalSettings,
    configure_logging,
    load_settings,
)
from dispute_portal.ingestion import normalize_row, normalize_rows
from dispute_portal.processing import (
    age_buckets,
    calculate_metrics,
    filter_disputes,
    normalize_filters,
    status_tally,
)
from dispute_portal.repository import DisputeRepository, RemoteDisputeRepository, build_repository

__all__ = [
    "Dispute",
    "DisputeRepository",
    "Identity",
    "PortalError",
    "PortalSettings",
    "RemoteDisputeRepository",
    "age_buckets",
    "build_repository",
    "calculate_metrics",
    "configure_logging",
    "filter_disputes",
    "load_settings",
    "normalize_filters",
    "normalize_row",
    "normalize_rows",
    "status_tally",
]
