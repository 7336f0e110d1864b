"""Tests for mapping raw sheet rows onto canonical disputes."""
from dispute_portal.ingestion.normalizer import (
    derive_dispute_id,
    get_first,
    normalize_row,
    normalize_rows,
    resolve_header,
    split_supplier_field,
)


def test_get_first_prefers_earlier_keys_and_skips_empty_values():
    row = {"orderItemId": "", "Order Item ID": "ORD-9", "OrderItemID": "ORD-X"}
    assert get_first(row, "orderItemId", "Order Item ID", "OrderItemID") == "ORD-9"


def test_get_first_falls_back_to_case_insensitive_match():
    assert get_first({"TRACKINGID": "TRK-1"}, "TrackingID") == "TRK-1"
    assert get_first({}, "anything") == ""


def test_normalize_row_reads_every_sheet_generation():
    legacy = normalize_row({"OrderItemID": "A1", "TrackingID": "T1", "ReasonforDispute": "Torn box"})
    modern = normalize_row({"orderItemId": "A1", "trackingId": "T1", "disputeDescription": "Torn box"})

    assert legacy.order_item_id == modern.order_item_id == "A1"
    assert legacy.tracking_id == modern.tracking_id == "T1"
    assert legacy.description == legacy.reason == "Torn box"
    assert modern.narrative == "Torn box"


def test_combined_supplier_column_is_split_into_name_and_email():
    dispute = normalize_row({"ID": "7", "Supplier": "Acme Co (ops@acme.com)"})
    assert dispute.supplier_name == "Acme Co"
    assert dispute.supplier_email == "ops@acme.com"


def test_split_supplier_field_without_email_keeps_text():
    assert split_supplier_field("Plain Name") == ("Plain Name", "")


def test_defaults_apply_to_missing_priority_and_status():
    dispute = normalize_row({"ID": "1"})
    assert dispute.priority == "Medium"
    assert dispute.status == "Pending"


def test_status_and_priority_are_canonicalised():
    dispute = normalize_row({"ID": "1", "Status": "in progress", "Priority": "high"})
    assert dispute.status == "In Progress"
    assert dispute.priority == "High"


def test_unknown_status_is_logged_and_treated_as_pending(caplog):
    caplog.set_level("WARNING")
    dispute = normalize_row({"ID": "1", "Status": "Escalated"})

    assert dispute.status == "Pending"
    assert "Escalated" in caplog.text


def test_whole_float_values_lose_their_decimal_part():
    dispute = normalize_row({"ID": 12.0, "OrderItemID": 4567.0, "Dispute Amount": 19.5})
    assert dispute.id == "12"
    assert dispute.order_item_id == "4567"
    assert dispute.amount == "19.5"


def test_missing_id_is_derived_from_immutable_fields():
    row = {"Timestamp": "2024-01-10", "OrderItemID": "A1", "TrackingID": "T1", "Status": "Pending"}
    first = normalize_row(row)
    moved = normalize_row({**row, "Status": "Resolved", "Last Update": "2024-02-01"})

    assert first.id.startswith("DSP-")
    assert first.id == moved.id
    assert first.id == derive_dispute_id("2024-01-10", "A1", "T1", "")


def test_resolve_header_prefers_exact_match():
    assert resolve_header("Reason for Dispute") == "description"
    assert resolve_header("order item id") == "order_item_id"
    assert resolve_header("Unrelated") is None


def test_normalize_rows_keeps_input_order():
    disputes = normalize_rows([{"ID": "b"}, {"ID": "a"}])
    assert [dispute.id for dispute in disputes] == ["b", "a"]


def test_exact_keys_win_over_case_insensitive_matches():
    row = {"orderitemid": "lower-case column", "Order Item ID": "ORD-9"}
    assert get_first(row, "orderItemId", "Order Item ID") == "ORD-9"
    assert normalize_row(row).order_item_id == "ORD-9"


def test_supplier_field_split_accepts_addresses_without_tld():
    assert split_supplier_field("Demo Supplier (supplier@demo)") == ("Demo Supplier", "supplier@demo")
