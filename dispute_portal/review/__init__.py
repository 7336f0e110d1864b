"""Portal actions for suppliers and administrators."""
from dispute_portal.review.workflow import (
    change_status,
    load_disputes,
    recent_activity,
    records_to_rows,
    submit_dispute,
)

__all__ = [
    "change_status",
    "load_disputes",
    "recent_activity",
    "records_to_rows",
    "submit_dispute",
]
