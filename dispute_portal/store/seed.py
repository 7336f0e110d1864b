"""Demo dataset: the three dispute sheets and the credentials table."""
from __future__ import annotations

from typing import Any, Dict, List

from dispute_portal.core.config import CREDENTIALS_TABLE, PortalSettings
from dispute_portal.core.models import Dispute
from dispute_portal.reporting.templates import DEFAULT_DISPUTE_HEADERS, destination_row
from dispute_portal.store.memory import MemoryRowStore

DEMO_PASSWORD = "Passw0rd!"

DEMO_USERS: List[Dict[str, str]] = [
    {
        "Email": "admin@demo",
        "Password": DEMO_PASSWORD,
        "Supplier ID": "",
        "Supplier Name": "Admin User",
        "Role": "admin",
    },
    {
        "Email": "supplier@demo",
        "Password": DEMO_PASSWORD,
        "Supplier ID": "SUP001",
        "Supplier Name": "Demo Supplier",
        "Role": "supplier",
    },
]

CREDENTIAL_HEADERS = ["Email", "Password", "Supplier ID", "Supplier Name", "Role"]

TABLE_HEADERS: Dict[str, List[str]] = {
    "Newform": [
        "Timestamp",
        "OrderItemID",
        "TrackingID",
        "City",
        "DeliveryPartner",
        "Supplier",
        "ReasonforDispute",
    ],
    "Adminportal": DEFAULT_DISPUTE_HEADERS,
    "Supplierview": [
        "ID",
        "Timestamp",
        "OrderItemID",
        "TrackingID",
        "Supplier",
        "SupplierID",
        "City",
        "Status",
        "Last Update",
    ],
}


def _demo(
    number: int,
    city: str,
    partner: str,
    supplier: tuple[str, str, str],
    status: str,
    submitted: str,
    updated: str,
    reason: str,
    dispute_type: str,
    priority: str,
) -> Dispute:
    name, email, supplier_id = supplier
    return Dispute(
        id=str(number),
        order_item_id=f"ORD{number:03d}",
        tracking_id=f"TRK{number:03d}",
        supplier_name=name,
        supplier_email=email,
        supplier_id=supplier_id,
        supplier_city=city,
        delivery_partner=partner,
        dispute_type=dispute_type,
        priority=priority,
        description=reason,
        reason=reason,
        status=status,
        submission_date=submitted,
        last_update_date=updated,
    )


DEMO_SUPPLIER = ("Demo Supplier", "supplier@demo", "SUP001")

DEMO_DISPUTES: List[Dispute] = [
    _demo(1, "Karachi", "TCS", DEMO_SUPPLIER, "Pending", "2024-01-10", "2024-01-15",
          "Damaged item received", "Damaged Item", "High"),
    _demo(2, "Lahore", "Leopards", DEMO_SUPPLIER, "In Progress", "2024-01-08", "2024-01-14",
          "Wrong item delivered", "Wrong Item", "Medium"),
    _demo(3, "Islamabad", "M&P", DEMO_SUPPLIER, "Resolved", "2024-01-05", "2024-01-12",
          "Late delivery", "Late Delivery", "Low"),
    _demo(4, "Faisalabad", "TCS", ("Another Supplier", "another@supplier.com", "SUP002"), "Rejected",
          "2024-01-03", "2024-01-11", "Invalid claim", "Wrong Item", "Medium"),
    _demo(5, "Multan", "Leopards", ("Third Supplier", "third@supplier.com", "SUP003"), "Pending",
          "2024-01-15", "2024-01-16", "Quality issue", "Damaged Item", "Medium"),
    _demo(6, "Peshawar", "TCS", DEMO_SUPPLIER, "Fake Signatures", "2024-01-12", "2024-01-13",
          "Suspicious signature detected", "Proof of Delivery", "High"),
    _demo(7, "Quetta", "Leopards", ("Fourth Supplier", "fourth@supplier.com", "SUP004"), "Paid",
          "2024-01-16", "2024-01-17", "Payment compensation requested", "Payment", "Low"),
]


def demo_tables(settings: PortalSettings | None = None) -> Dict[str, List[List[Any]]]:
    """Grids for every demo table, header row first."""

    settings = settings or PortalSettings()
    tables: Dict[str, List[List[Any]]] = {}
    for table in settings.destination_tables:
        headers = TABLE_HEADERS.get(table, DEFAULT_DISPUTE_HEADERS)
        tables[table] = [list(headers)] + [destination_row(headers, dispute) for dispute in DEMO_DISPUTES]
    if settings.primary_table not in tables:
        headers = DEFAULT_DISPUTE_HEADERS
        tables[settings.primary_table] = [list(headers)] + [
            destination_row(headers, dispute) for dispute in DEMO_DISPUTES
        ]
    tables[settings.credentials_table or CREDENTIALS_TABLE] = [CREDENTIAL_HEADERS] + [
        [user[header] for header in CREDENTIAL_HEADERS] for user in DEMO_USERS
    ]
    return tables


def demo_store(settings: PortalSettings | None = None) -> MemoryRowStore:
    """A fresh in-memory store holding the demo data; nothing is shared between calls."""

    return MemoryRowStore(demo_tables(settings))
