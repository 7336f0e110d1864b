"""Dispute actions used by the Streamlit portal and the CLI."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping

from dispute_portal.auth.credentials import require_admin
from dispute_portal.core.models import Dispute, Identity
from dispute_portal.core.utils import parse_timestamp
from dispute_portal.repository import Repository

logger = logging.getLogger(__name__)


def load_disputes(repository: Repository, identity: Identity) -> List[Dispute]:
    """Admins see every dispute; suppliers only their own."""

    if identity.is_admin:
        return repository.list()
    return repository.list(owner=identity.owner_key)


def submit_dispute(repository: Repository, identity: Identity, fields: Mapping[str, Any]) -> Dispute:
    """Create a dispute, filling supplier details the form left blank from the identity."""

    payload: Dict[str, Any] = {key: value for key, value in fields.items() if value not in (None, "")}
    payload.setdefault("supplierName", identity.supplier_name)
    payload.setdefault("supplierEmail", identity.email)
    if identity.supplier_id:
        payload.setdefault("supplierId", identity.supplier_id)
    return repository.create(payload)


def change_status(repository: Repository, identity: Identity, dispute_id: str, status: str) -> Dispute:
    """Admin-only status change; the supplier notification is a log line for now."""

    require_admin(identity)
    updated = repository.update_status(dispute_id, status)
    logger.info("Notification sent for dispute %s: status changed to %s", dispute_id, updated.status)
    return updated


def recent_activity(disputes: Iterable[Dispute], limit: int = 5) -> List[Dispute]:
    """Most recently submitted disputes first."""

    def _submitted(dispute: Dispute) -> float:
        moment = parse_timestamp(dispute.submission_date)
        return moment.timestamp() if moment else 0.0

    return sorted(disputes, key=_submitted, reverse=True)[:limit]


def records_to_rows(disputes: Iterable[Dispute]) -> List[Dict[str, Any]]:
    """Convert disputes to dictionaries for tabular rendering."""

    def _sanitize(value: Any) -> Any:
        if isinstance(value, str):
            return " ".join(value.split())
        return value

    return [{key: _sanitize(value) for key, value in dispute.to_dict().items()} for dispute in disputes]
