"""Normalization of raw sheet rows into canonical disputes."""
from dispute_portal.ingestion.normalizer import (
    FIELD_SYNONYMS,
    canonical_priority,
    canonical_status,
    derive_dispute_id,
    get_first,
    normalize_row,
    normalize_rows,
    resolve_header,
    split_supplier_field,
)

__all__ = [
    "FIELD_SYNONYMS",
    "canonical_priority",
    "canonical_status",
    "derive_dispute_id",
    "get_first",
    "normalize_row",
    "normalize_rows",
    "resolve_header",
    "split_supplier_field",
]
