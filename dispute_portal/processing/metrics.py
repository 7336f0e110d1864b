"""Status tally behind the dashboard metric cards and charts."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable

from dispute_portal.core.models import (
    STATUS_FAKE_SIGNATURES,
    STATUS_IN_PROGRESS,
    STATUS_PAID,
    STATUS_PENDING,
    STATUS_REJECTED,
    STATUS_RESOLVED,
    STATUS_UNDER_REVIEW,
    STATUSES,
    Dispute,
)

OTHER_BUCKET = "Other"


@dataclass(frozen=True)
class DisputeMetrics:
    total_submitted: int = 0
    total_pending: int = 0
    total_in_progress: int = 0
    total_resolved: int = 0
    total_rejected: int = 0
    total_fake_signatures: int = 0
    total_paid: int = 0
    total_under_review: int = 0
    total_other: int = 0

    def status_data(self) -> Dict[str, int]:
        """Counts keyed by status label, in display order, for charts."""

        data = {
            STATUS_PENDING: self.total_pending,
            STATUS_IN_PROGRESS: self.total_in_progress,
            STATUS_RESOLVED: self.total_resolved,
            STATUS_REJECTED: self.total_rejected,
            STATUS_FAKE_SIGNATURES: self.total_fake_signatures,
            STATUS_PAID: self.total_paid,
            STATUS_UNDER_REVIEW: self.total_under_review,
        }
        if self.total_other:
            data[OTHER_BUCKET] = self.total_other
        return data

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def status_tally(disputes: Iterable[Dispute]) -> Dict[str, int]:
    """Single pass count per status; unrecognised statuses land in ``Other``."""

    tally = {status: 0 for status in STATUSES}
    tally[OTHER_BUCKET] = 0
    for dispute in disputes:
        key = dispute.status if dispute.status in tally else OTHER_BUCKET
        tally[key] += 1
    return tally


def calculate_metrics(disputes: Iterable[Dispute]) -> DisputeMetrics:
    tally = status_tally(disputes)
    return DisputeMetrics(
        total_submitted=sum(tally.values()),
        total_pending=tally[STATUS_PENDING],
        total_in_progress=tally[STATUS_IN_PROGRESS],
        total_resolved=tally[STATUS_RESOLVED],
        total_rejected=tally[STATUS_REJECTED],
        total_fake_signatures=tally[STATUS_FAKE_SIGNATURES],
        total_paid=tally[STATUS_PAID],
        total_under_review=tally[STATUS_UNDER_REVIEW],
        total_other=tally[OTHER_BUCKET],
    )


def resolution_rate(metrics: DisputeMetrics) -> int:
    """Resolved share of all submitted disputes, as a rounded percentage."""

    if not metrics.total_submitted:
        return 0
    return round(metrics.total_resolved / metrics.total_submitted * 100)
