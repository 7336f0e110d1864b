"""Interactive search and filtering over the in-memory dispute list."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from dispute_portal.core.models import STATUSES, Dispute

ALL = "all"

SEARCH_FIELDS = (
    "order_item_id",
    "tracking_id",
    "supplier_name",
    "supplier_email",
    "supplier_id",
    "description",
)


@dataclass(frozen=True)
class DisputeFilters:
    search: str = ""
    status: str = ALL
    priority: str = ALL
    dispute_type: str = ALL
    city: str = ALL


def _choice(value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    return ALL if not text or text.lower() == ALL else text


def normalize_filters(raw: Mapping[str, Any]) -> DisputeFilters:
    """Build filters from loose UI/CLI input; blank or "all" means unset."""

    return DisputeFilters(
        search=str(raw.get("search") or "").strip(),
        status=_choice(raw.get("status")),
        priority=_choice(raw.get("priority")),
        dispute_type=_choice(raw.get("dispute_type")),
        city=_choice(raw.get("city")),
    )


def matches_search(dispute: Dispute, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in (getattr(dispute, field) or "").lower() for field in SEARCH_FIELDS)


def matches_filters(dispute: Dispute, filters: DisputeFilters) -> bool:
    return (
        matches_search(dispute, filters.search)
        and (filters.status == ALL or dispute.status == filters.status)
        and (filters.priority == ALL or dispute.priority == filters.priority)
        and (filters.dispute_type == ALL or dispute.dispute_type == filters.dispute_type)
        and (filters.city == ALL or dispute.supplier_city == filters.city)
    )


def filter_disputes(disputes: Iterable[Dispute], filters: DisputeFilters) -> List[Dispute]:
    """Return the disputes matching every active criterion, in input order."""

    return [dispute for dispute in disputes if matches_filters(dispute, filters)]


def filter_options(disputes: Iterable[Dispute]) -> Dict[str, List[str]]:
    """Distinct non-empty values for each select box."""

    disputes = list(disputes)
    present = {dispute.status for dispute in disputes}
    return {
        "status": [status for status in STATUSES if status in present]
        + sorted(present.difference(STATUSES)),
        "priority": sorted({d.priority for d in disputes if d.priority}),
        "dispute_type": sorted({d.dispute_type for d in disputes if d.dispute_type}),
        "city": sorted({d.supplier_city for d in disputes if d.supplier_city}),
    }
