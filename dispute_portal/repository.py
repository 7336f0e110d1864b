"""Dispute repository: list, create and update canonical disputes.

``DisputeRepository`` works directly on a ``RowStore`` (Google Sheets in
production, memory in tests and demo mode). ``RemoteDisputeRepository``
offers the same operations through the HTTP endpoint. The UI and the CLI
only depend on the shared ``Repository`` protocol.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence
from uuid import uuid4

from dispute_portal.core.config import PortalSettings
from dispute_portal.core.errors import NotFoundError, ValidationError
from dispute_portal.core.models import STATUS_PENDING, Dispute
from dispute_portal.core.utils import format_timestamp, parse_timestamp, utc_now
from dispute_portal.ingestion.normalizer import (
    FIELD_SYNONYMS,
    canonical_priority,
    canonical_status,
    normalize_row,
    normalize_rows,
)
from dispute_portal.reporting.templates import destination_row
from dispute_portal.store.base import RowStore
from dispute_portal.store.client import PortalClient

logger = logging.getLogger(__name__)

# Canonical field -> name reported to the caller when it is missing.
REQUIRED_FIELDS = (
    ("order_item_id", "orderItemId"),
    ("tracking_id", "trackingId"),
    ("supplier_name", "supplierName"),
    ("supplier_email", "supplierEmail"),
)

EMAIL_FORMAT = re.compile(r"^[^@\s]+@[^@\s]+$")
STATUS_KEYS = FIELD_SYNONYMS["status"]
SERVER_ASSIGNED = {"id", "status", "submissionDate", "lastUpdateDate"}

Clock = Callable[[], datetime]


class Repository(Protocol):
    def list(self, owner: Optional[str] = None) -> List[Dispute]: ...

    def create(self, fields: Mapping[str, Any]) -> Dispute: ...

    def update_status(self, dispute_id: str, status: str) -> Dispute: ...


def new_dispute_id() -> str:
    return f"DISP-{uuid4().hex[:12].upper()}"


def filter_by_owner(disputes: Iterable[Dispute], owner: Optional[str]) -> List[Dispute]:
    """Keep disputes whose supplier id or supplier email equals ``owner``."""

    disputes = list(disputes)
    owner = (owner or "").strip()
    if not owner:
        return disputes
    return [d for d in disputes if owner in (d.supplier_id, d.supplier_email)]


def validate_new_dispute(fields: Mapping[str, Any]) -> Dispute:
    """Normalize a submission payload and reject it when it is incomplete.

    Raises ``ValidationError`` naming the first offending field.
    """

    payload = {key: value for key, value in fields.items() if key not in STATUS_KEYS}
    candidate = normalize_row(payload)

    for field, wire_name in REQUIRED_FIELDS:
        if not getattr(candidate, field).strip():
            raise ValidationError(wire_name)

    if not EMAIL_FORMAT.match(candidate.supplier_email):
        raise ValidationError("supplierEmail", f"Invalid email format: {candidate.supplier_email}")

    if candidate.amount:
        try:
            float(candidate.amount.replace(",", ""))
        except ValueError as exc:
            raise ValidationError("disputeAmount", f"Dispute amount must be a number: {candidate.amount}") from exc

    priority = canonical_priority(candidate.priority)
    if priority is None:
        raise ValidationError("priority", f"Unknown priority: {candidate.priority}")

    narrative = candidate.narrative
    return replace(candidate, priority=priority, description=narrative, reason=narrative, status=STATUS_PENDING)


def _stamp_after(submission_date: str, now: datetime) -> str:
    submitted = parse_timestamp(submission_date)
    if submitted is not None and submitted > now:
        now = submitted
    return format_timestamp(now)


def _field_header(headers: Sequence[str], field: str) -> Optional[str]:
    synonyms = FIELD_SYNONYMS[field]
    for synonym in synonyms:
        if synonym in headers:
            return synonym
    lowered = {synonym.lower() for synonym in synonyms}
    for header in headers:
        if header.lower() in lowered:
            return header
    return None


class DisputeRepository:
    """Repository over a row store with one or more duplicate dispute sheets."""

    def __init__(
        self,
        store: RowStore,
        settings: Optional[PortalSettings] = None,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = new_dispute_id,
    ) -> None:
        self.store = store
        self.settings = settings or PortalSettings()
        self.clock = clock
        self.id_factory = id_factory

    @property
    def tables(self) -> List[str]:
        """Primary table first, then every other destination, without repeats."""

        ordered = [self.settings.primary_table, *self.settings.destination_tables]
        return list(dict.fromkeys(ordered))

    def list(self, owner: Optional[str] = None) -> List[Dispute]:
        rows = self.store.read_rows(self.settings.primary_table)
        disputes = normalize_rows(rows)
        logger.info("Loaded %d disputes from %s", len(disputes), self.settings.primary_table)
        return filter_by_owner(disputes, owner)

    def create(self, fields: Mapping[str, Any]) -> Dispute:
        candidate = validate_new_dispute(fields)
        stamp = format_timestamp(self.clock())
        dispute = replace(candidate, id=self.id_factory(), submission_date=stamp, last_update_date=stamp)

        # Resolve every header row first so a missing sheet aborts before any write.
        headers_by_table: Dict[str, List[str]] = {}
        for table in self.settings.destination_tables:
            headers = self.store.headers(table)
            if not headers:
                raise NotFoundError(f"Sheet '{table}' has no header row")
            headers_by_table[table] = headers

        for table, headers in headers_by_table.items():
            self.store.append_row(table, destination_row(headers, dispute))
        logger.info(
            "Created dispute %s for %s in %d sheet(s)", dispute.id, dispute.supplier_email, len(headers_by_table)
        )
        return dispute

    def update_status(self, dispute_id: str, status: str) -> Dispute:
        canonical = canonical_status(status)
        if canonical is None:
            raise ValidationError("status", f"Unknown status: {status}")
        dispute_id = (dispute_id or "").strip()
        if not dispute_id:
            raise ValidationError("id")

        matches = []
        for table in self.tables:
            if not self.store.has_table(table):
                continue
            headers = self.store.headers(table)
            status_header = _field_header(headers, "status")
            if status_header is None:
                continue
            for index, row in enumerate(self.store.read_rows(table)):
                dispute = normalize_row(row)
                if dispute.id == dispute_id:
                    matches.append((table, index, status_header, _field_header(headers, "last_update_date"), dispute))

        if not matches:
            raise NotFoundError(f"Dispute {dispute_id} not found")

        stamp = _stamp_after(matches[0][4].submission_date, self.clock())
        for table, index, status_header, last_update_header, _ in matches:
            values = {status_header: canonical}
            if last_update_header:
                values[last_update_header] = stamp
            self.store.update_row(table, index, values)
        logger.info("Dispute %s moved to %s in %d sheet(s)", dispute_id, canonical, len(matches))
        return replace(matches[0][4], status=canonical, last_update_date=stamp)


class RemoteDisputeRepository:
    """Repository backed by the portal endpoint instead of a direct store."""

    def __init__(self, client: PortalClient, table: Optional[str] = None) -> None:
        self.client = client
        self.table = table

    def list(self, owner: Optional[str] = None) -> List[Dispute]:
        disputes = normalize_rows(self.client.get_table(self.table))
        return filter_by_owner(disputes, owner)

    def create(self, fields: Mapping[str, Any]) -> Dispute:
        candidate = validate_new_dispute(fields)
        payload = {
            key: value
            for key, value in candidate.to_wire().items()
            if value and key not in SERVER_ASSIGNED
        }
        payload["action"] = "createDispute"
        response = self.client.post(payload)
        created = response.get("dispute")
        return normalize_row(created) if isinstance(created, dict) else candidate

    def update_status(self, dispute_id: str, status: str) -> Dispute:
        canonical = canonical_status(status)
        if canonical is None:
            raise ValidationError("status", f"Unknown status: {status}")
        response = self.client.post({"action": "updateStatus", "id": dispute_id, "status": canonical})
        updated = response.get("dispute")
        if isinstance(updated, dict):
            return normalize_row(updated)
        return Dispute(id=dispute_id, status=canonical)


def build_store(settings: PortalSettings) -> RowStore:
    """Google Sheets when configured and demo mode is off, else seeded memory."""

    if settings.uses_sheets:
        from dispute_portal.store.sheets import GoogleSheetsRowStore

        return GoogleSheetsRowStore(settings.spreadsheet_id, settings.service_account_path)
    from dispute_portal.store.seed import demo_store

    logger.info("Using the in-memory demo store")
    return demo_store(settings)


def build_repository(settings: PortalSettings, store: Optional[RowStore] = None) -> Repository:
    if settings.uses_remote_api and store is None:
        return RemoteDisputeRepository(PortalClient(settings.api_url, timeout=settings.request_timeout))
    return DisputeRepository(store or build_store(settings), settings)
