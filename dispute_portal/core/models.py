"""Data models for disputes and the identities that work on them."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

STATUS_PENDING = "Pending"
STATUS_IN_PROGRESS = "In Progress"
STATUS_RESOLVED = "Resolved"
STATUS_REJECTED = "Rejected"
STATUS_FAKE_SIGNATURES = "Fake Signatures"
STATUS_PAID = "Paid"
STATUS_UNDER_REVIEW = "Under Review"

# Display order used by metric cards, charts and select boxes.
STATUSES = (
    STATUS_PENDING,
    STATUS_IN_PROGRESS,
    STATUS_RESOLVED,
    STATUS_REJECTED,
    STATUS_FAKE_SIGNATURES,
    STATUS_PAID,
    STATUS_UNDER_REVIEW,
)

PRIORITIES = ("Low", "Medium", "High", "Urgent")
DEFAULT_PRIORITY = "Medium"

ROLE_ADMIN = "admin"
ROLE_SUPPLIER = "supplier"

WIRE_NAMES = {
    "id": "id",
    "order_item_id": "orderItemId",
    "tracking_id": "trackingId",
    "supplier_name": "supplierName",
    "supplier_email": "supplierEmail",
    "supplier_id": "supplierId",
    "supplier_city": "supplierCity",
    "delivery_partner": "deliveryPartner",
    "dispute_type": "disputeType",
    "category": "category",
    "subcategory": "subcategory",
    "priority": "priority",
    "description": "disputeDescription",
    "reason": "reason",
    "status": "status",
    "submission_date": "submissionDate",
    "last_update_date": "lastUpdateDate",
    "attachments": "attachments",
    "amount": "disputeAmount",
    "contact_phone": "contactPhone",
    "preferred_contact_method": "preferredContactMethod",
    "expected_resolution": "expectedResolution",
}


@dataclass
class Dispute:
    """A supplier-reported issue against an order, tracked through a status lifecycle."""

    id: str = ""
    order_item_id: str = ""
    tracking_id: str = ""
    supplier_name: str = ""
    supplier_email: str = ""
    supplier_id: str = ""
    supplier_city: str = ""
    delivery_partner: str = ""
    dispute_type: str = ""
    category: str = ""
    subcategory: str = ""
    priority: str = DEFAULT_PRIORITY
    description: str = ""
    reason: str = ""
    status: str = STATUS_PENDING
    submission_date: str = ""
    last_update_date: str = ""
    attachments: str = ""
    amount: str = ""
    contact_phone: str = ""
    preferred_contact_method: str = ""
    expected_resolution: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dictionary representation for tables and CSV output."""

        return asdict(self)

    def to_wire(self) -> Dict[str, str]:
        """Return the camelCase mapping used by the HTTP endpoint."""

        return {WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}

    @property
    def narrative(self) -> str:
        return self.description or self.reason


@dataclass(frozen=True)
class Identity:
    """Authenticated caller of the portal; the role gates admin-only actions."""

    email: str
    role: str = ROLE_SUPPLIER
    supplier_name: str = ""
    supplier_id: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def owner_key(self) -> str:
        """Value used to filter a supplier's own disputes."""

        return self.supplier_id or self.email

    def to_dict(self) -> Dict[str, str]:
        return {
            "supplierId": self.supplier_id,
            "supplierName": self.supplier_name,
            "email": self.email,
            "role": self.role,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["Identity"]:
        email = str(data.get("email") or "").strip()
        if not email:
            return None
        role = str(data.get("role") or ROLE_SUPPLIER).strip().lower()
        return cls(
            email=email,
            role=role if role in (ROLE_ADMIN, ROLE_SUPPLIER) else ROLE_SUPPLIER,
            supplier_name=str(data.get("supplierName") or ""),
            supplier_id=str(data.get("supplierId") or ""),
        )
