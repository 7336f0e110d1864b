"""Row shaping for spreadsheet exports and for the destination sheets."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Sequence

from dispute_portal.core.models import Dispute
from dispute_portal.core.utils import parse_timestamp
from dispute_portal.ingestion.normalizer import COMBINED_SUPPLIER_KEYS, resolve_header
from dispute_portal.processing.aging import days_since

EXPORT_HEADERS = [
    "Supplier ID",
    "Supplier Name",
    "Supplier Email",
    "Order Number",
    "Tracking ID",
    "Dispute Type",
    "Category",
    "Priority",
    "Amount",
    "Status",
    "Description",
    "Submission Date",
    "Days Since Submission",
    "Contact Phone",
    "Expected Resolution",
]

# Header row used when the portal has to create a dispute sheet itself.
DEFAULT_DISPUTE_HEADERS = [
    "ID",
    "Timestamp",
    "Order Item ID",
    "Tracking ID",
    "Supplier Name",
    "Supplier Email",
    "Supplier ID",
    "City",
    "Delivery Partner",
    "Dispute Type",
    "Category",
    "Subcategory",
    "Priority",
    "Reason for Dispute",
    "Dispute Amount",
    "Attachments",
    "Contact Phone",
    "Preferred Contact Method",
    "Expected Resolution",
    "Status",
    "Last Update",
]


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


def _normalize_date(raw: str | None) -> str:
    parsed = parse_timestamp(raw)
    return parsed.date().isoformat() if parsed else _clean_text(raw)


def combined_supplier(dispute: Dispute) -> str:
    """Legacy "Name (email)" value for sheets with a single Supplier column."""

    if dispute.supplier_email:
        return f"{dispute.supplier_name} ({dispute.supplier_email})".strip()
    return dispute.supplier_name


def destination_row(headers: Sequence[str], dispute: Dispute) -> List[Any]:
    """Values for one new sheet row, ordered by that sheet's own header row.

    Unmapped headers receive an empty string.
    """

    values: List[Any] = []
    for header in headers:
        if header in COMBINED_SUPPLIER_KEYS:
            values.append(combined_supplier(dispute))
            continue
        field = resolve_header(str(header))
        values.append(getattr(dispute, field) if field else "")
    return values


def dispute_to_export_row(dispute: Dispute, now: datetime) -> Dict[str, Any]:
    """Convert a dispute into the Excel export dictionary."""

    return {
        "Supplier ID": dispute.supplier_id,
        "Supplier Name": _clean_text(dispute.supplier_name),
        "Supplier Email": dispute.supplier_email,
        "Order Number": dispute.order_item_id,
        "Tracking ID": dispute.tracking_id,
        "Dispute Type": _clean_text(dispute.dispute_type),
        "Category": _clean_text(dispute.category),
        "Priority": dispute.priority,
        "Amount": dispute.amount,
        "Status": dispute.status,
        "Description": _clean_text(dispute.narrative),
        "Submission Date": _normalize_date(dispute.submission_date),
        "Days Since Submission": days_since(dispute.submission_date, now),
        "Contact Phone": dispute.contact_phone,
        "Expected Resolution": dispute.expected_resolution,
    }


def disputes_to_export_rows(disputes: Iterable[Dispute], now: datetime) -> List[Dict[str, Any]]:
    return [dispute_to_export_row(dispute, now) for dispute in disputes]


def export_filename(now: datetime) -> str:
    return f"disputes_export_{now.date().isoformat()}.xlsx"
