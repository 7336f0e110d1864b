"""Age of pending disputes, bucketed for the admin chart."""
from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dispute_portal.core.models import STATUS_PENDING, Dispute
from dispute_portal.core.utils import parse_timestamp

SECONDS_PER_DAY = 86400

# (label, lowest day, highest day); ``None`` leaves the last bucket open.
AGE_BUCKETS: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("0-3 days", 0, 3),
    ("4-7 days", 4, 7),
    ("8-14 days", 8, 14),
    ("15+ days", 15, None),
)


def days_since(submitted: Any, now: datetime) -> int:
    """Whole days between ``submitted`` and ``now``, rounded up, never below 1.

    Unparseable timestamps count as submitted at ``now``.
    """

    moment = parse_timestamp(submitted)
    reference = parse_timestamp(now)
    if moment is None or reference is None:
        return 1
    elapsed = abs((reference - moment).total_seconds())
    return max(1, math.ceil(elapsed / SECONDS_PER_DAY))


def age_bucket(days: int) -> str:
    for label, low, high in AGE_BUCKETS:
        if days >= low and (high is None or days <= high):
            return label
    return AGE_BUCKETS[0][0]


def age_buckets(disputes: Iterable[Dispute], now: datetime) -> List[Dict[str, Any]]:
    """Count pending disputes per age range; every range is always present."""

    counts = {label: 0 for label, _, _ in AGE_BUCKETS}
    for dispute in disputes:
        if dispute.status != STATUS_PENDING:
            continue
        counts[age_bucket(days_since(dispute.submission_date, now))] += 1
    return [{"days": label, "count": counts[label]} for label, _, _ in AGE_BUCKETS]
