"""Map heterogeneous sheet rows onto the canonical ``Dispute`` shape.

Three generations of the dispute sheets name the same column differently
("OrderItemID", "Order Item ID", "orderItemId", ...). Every canonical field
owns an ordered tuple of accepted source keys; the first key holding a
non-empty value wins. Exact key lookups are tried for every key before any
case-insensitive lookup.
"""
from __future__ import annotations

import hashlib
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from dispute_portal.core.models import DEFAULT_PRIORITY, PRIORITIES, STATUS_PENDING, STATUSES, Dispute

logger = logging.getLogger(__name__)

# Matches what create() accepts: local@domain without whitespace.
EMAIL_PATTERN = re.compile(r"[^\s()<>@]+@[^\s()<>@]+")

# Combined "Name (email)" column written by the first form generation.
COMBINED_SUPPLIER_KEYS = ("Supplier", "supplier")

FIELD_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "ID", "Id", "Dispute ID", "disputeId"),
    "order_item_id": ("orderItemId", "orderNumber", "Order Item ID", "OrderItemID", "Order Number"),
    "tracking_id": ("trackingId", "Tracking ID", "TrackingID", "TrackingId"),
    "supplier_name": ("supplierName", "Supplier Name", "SupplierName") + COMBINED_SUPPLIER_KEYS,
    "supplier_email": ("supplierEmail", "Supplier Email", "supplier_email", "SupplierEmail"),
    "supplier_id": ("supplierId", "Supplier ID", "SupplierID", "supplier_id"),
    "supplier_city": ("supplierCity", "city", "City", "Supplier City"),
    "delivery_partner": ("deliveryPartner", "Delivery Partner", "DeliveryPartner"),
    "dispute_type": ("disputeType", "Dispute Type", "DisputeType"),
    "category": ("category", "Category"),
    "subcategory": ("subcategory", "Subcategory"),
    "priority": ("priority", "Priority"),
    "description": (
        "disputeDescription",
        "description",
        "reason",
        "ReasonforDispute",
        "Reason for Dispute",
        "Reason",
    ),
    "reason": (
        "reason",
        "ReasonforDispute",
        "Reason for Dispute",
        "Reason",
        "disputeDescription",
        "description",
    ),
    "status": ("status", "Status"),
    "submission_date": ("Timestamp", "submissionDate", "Submission Date", "SubmissionDate"),
    "last_update_date": ("lastUpdateDate", "Last Update", "Last Update Date", "LastUpdateDate"),
    "attachments": ("attachments", "Attachments"),
    "amount": ("disputeAmount", "Dispute Amount", "amount", "Amount"),
    "contact_phone": ("contactPhone", "Contact Phone", "phone"),
    "preferred_contact_method": ("preferredContactMethod", "Preferred Contact Method"),
    "expected_resolution": ("expectedResolution", "Expected Resolution"),
}

FIELD_DEFAULTS: Dict[str, str] = {
    "priority": DEFAULT_PRIORITY,
    "status": STATUS_PENDING,
}


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def get_first(row: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-empty value found under ``keys``, or ``""``.

    Every key is probed exactly before any key is matched case-insensitively.
    """

    if not row:
        return ""
    for key in keys:
        value = row.get(key)
        if _has_value(value):
            return value
    lowered_row = {}
    for candidate, candidate_value in row.items():
        if _has_value(candidate_value):
            lowered_row.setdefault(str(candidate).lower(), candidate_value)
    for key in keys:
        if key.lower() in lowered_row:
            return lowered_row[key.lower()]
    return ""


def _text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip() if _has_value(value) else ""


def split_supplier_field(text: str) -> Tuple[str, str]:
    """Split ``"Acme Co (supplier@acme.com)"`` into name and email.

    Returns ``(text, "")`` when no email address is embedded.
    """

    match = EMAIL_PATTERN.search(text or "")
    if not match:
        return (text or "").strip(), ""
    name = (text[: match.start()] + text[match.end():])
    name = re.sub(r"[()<>]", "", name).strip()
    return name, match.group(0)


def canonical_status(value: Any) -> Optional[str]:
    """Return the canonical spelling of a known status, else ``None``."""

    text = _text(value).lower()
    for status in STATUSES:
        if status.lower() == text:
            return status
    return None


def canonical_priority(value: Any) -> Optional[str]:
    text = _text(value).lower()
    for priority in PRIORITIES:
        if priority.lower() == text:
            return priority
    return None


def derive_dispute_id(submission_date: str, order_item_id: str, tracking_id: str, supplier_email: str) -> str:
    """Stable identifier for rows without an id column, built from immutable fields only."""

    fingerprint = "|".join([submission_date, order_item_id, tracking_id, supplier_email.lower()])
    return "DSP-" + hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()[:10].upper()


def resolve_header(header: str) -> Optional[str]:
    """Return the canonical field a column header feeds, or ``None``.

    Exact matches across all fields are preferred over case-insensitive ones,
    so "Reason" maps to the same field on every call.
    """

    for field, synonyms in FIELD_SYNONYMS.items():
        if header in synonyms:
            return field
    lowered = header.strip().lower()
    for field, synonyms in FIELD_SYNONYMS.items():
        if any(lowered == synonym.lower() for synonym in synonyms):
            return field
    return None


def normalize_row(row: Mapping[str, Any]) -> Dispute:
    """Build a canonical ``Dispute`` from one raw row. Pure and deterministic."""

    values: Dict[str, str] = {
        field: _text(get_first(row, *synonyms)) or FIELD_DEFAULTS.get(field, "")
        for field, synonyms in FIELD_SYNONYMS.items()
    }

    name, embedded_email = split_supplier_field(values["supplier_name"])
    values["supplier_name"] = name
    if embedded_email:
        values["supplier_email"] = embedded_email

    status = canonical_status(values["status"])
    if status is None:
        logger.warning("Unknown dispute status %r, treating as %s", values["status"], STATUS_PENDING)
        status = STATUS_PENDING
    values["status"] = status
    values["priority"] = canonical_priority(values["priority"]) or values["priority"]

    if not values["id"]:
        values["id"] = derive_dispute_id(
            values["submission_date"],
            values["order_item_id"],
            values["tracking_id"],
            values["supplier_email"],
        )

    return Dispute(**values)


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> List[Dispute]:
    return [normalize_row(row) for row in rows]
