"""Streamlit portal: supplier and admin views over the dispute sheets."""
from pathlib import Path
from typing import List, Optional

import streamlit as st

# Allow running via "streamlit run dispute_portal/ui/dashboard.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from dispute_portal.auth.credentials import CredentialVerifier
from dispute_portal.auth.session import SessionStore
from dispute_portal.core.config import PortalSettings, load_settings
from dispute_portal.core.errors import PortalError
from dispute_portal.core.logging import configure_logging
from dispute_portal.core.models import PRIORITIES, STATUSES, Dispute, Identity
from dispute_portal.core.utils import utc_now
from dispute_portal.processing.aging import age_buckets
from dispute_portal.processing.filters import ALL, filter_disputes, filter_options, normalize_filters
from dispute_portal.processing.metrics import calculate_metrics, resolution_rate
from dispute_portal.reporting.sinks import excel_bytes
from dispute_portal.reporting.templates import disputes_to_export_rows, export_filename
from dispute_portal.repository import Repository, build_repository, build_store
from dispute_portal.review.workflow import change_status, load_disputes, recent_activity, records_to_rows, submit_dispute
from dispute_portal.store.client import PortalClient
from dispute_portal.store.seed import DEMO_PASSWORD, DEMO_USERS

DISPUTE_TYPES = ["Damaged Item", "Wrong Item", "Late Delivery", "Proof of Delivery", "Payment", "Other"]
CONTACT_METHODS = ["Email", "Phone", "WhatsApp"]


def _rerun_app() -> None:
    """Trigger a Streamlit rerun, compatible with newer and older APIs."""

    rerun = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if not rerun:
        raise RuntimeError("Streamlit does not expose a rerun helper.")
    rerun()


def _settings() -> PortalSettings:
    if "settings" not in st.session_state:
        st.session_state.settings = load_settings()
    return st.session_state.settings


def _repository(settings: PortalSettings) -> Repository:
    """Build the repository once per session so demo-mode writes survive reruns."""

    if "repository" not in st.session_state:
        if not settings.uses_remote_api:
            st.session_state.store = build_store(settings)
        st.session_state.repository = build_repository(settings, st.session_state.get("store"))
    return st.session_state.repository


def _session_store(settings: PortalSettings) -> SessionStore:
    return SessionStore(settings.session_file)


def _current_identity(settings: PortalSettings) -> Optional[Identity]:
    if "identity" not in st.session_state:
        st.session_state.identity = _session_store(settings).load()
    return st.session_state.identity


def _authenticate(settings: PortalSettings, email: str, password: str) -> Identity:
    if settings.uses_remote_api:
        client = PortalClient(settings.api_url, timeout=settings.request_timeout)
        return client.login(email, password)
    _repository(settings)
    return CredentialVerifier(st.session_state.store, settings).login(email, password)


def _reload_disputes() -> None:
    st.session_state.pop("disputes", None)


def _session_disputes(repository: Repository, identity: Identity) -> List[Dispute]:
    """Load disputes once per session; actions clear the cache to force a reload."""

    if "disputes" not in st.session_state:
        st.session_state.disputes = load_disputes(repository, identity)
    return st.session_state.disputes


def _login_view(settings: PortalSettings) -> None:
    st.title("Return Dispute Portal")
    st.caption("Sign in to submit and track return disputes.")

    if settings.demo_mode:
        st.info(f"Demo mode: every demo account uses the password `{DEMO_PASSWORD}`.")
        demo_cols = st.columns(len(DEMO_USERS))
        for column, user in zip(demo_cols, DEMO_USERS):
            with column:
                if st.button(f"Use {user['Role']} demo", key=f"demo_{user['Email']}"):
                    st.session_state["login_email"] = user["Email"]
                    st.session_state["login_password"] = user["Password"]

    with st.form("login_form"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Sign in", type="primary")

    if submitted:
        try:
            identity = _authenticate(settings, email, password)
        except PortalError as exc:
            st.error(exc.message)
            return
        _session_store(settings).save(identity)
        st.session_state.identity = identity
        _reload_disputes()
        _rerun_app()


def _metric_cards(disputes: List[Dispute], admin: bool) -> None:
    metrics = calculate_metrics(disputes)
    row1 = st.columns(4)
    row1[0].metric("Total disputes", metrics.total_submitted)
    row1[1].metric("Pending", metrics.total_pending)
    row1[2].metric("In progress", metrics.total_in_progress)
    row1[3].metric("Resolved", metrics.total_resolved)

    row2 = st.columns(4)
    row2[0].metric("Rejected", metrics.total_rejected)
    row2[1].metric("Fake signatures", metrics.total_fake_signatures)
    row2[2].metric("Paid", metrics.total_paid)
    if admin:
        row2[3].metric("Resolution rate", f"{resolution_rate(metrics)}%")
    else:
        row2[3].metric("Under review", metrics.total_under_review)


def _filter_controls(disputes: List[Dispute], key: str) -> List[Dispute]:
    options = filter_options(disputes)
    st.markdown("### Filters")
    cols = st.columns([1.6, 1, 1, 1, 1])
    with cols[0]:
        search = st.text_input("Search order, tracking, supplier or description", key=f"{key}_search")
    with cols[1]:
        status = st.selectbox("Status", [ALL, *options["status"]], key=f"{key}_status")
    with cols[2]:
        priority = st.selectbox("Priority", [ALL, *options["priority"]], key=f"{key}_priority")
    with cols[3]:
        dispute_type = st.selectbox("Type", [ALL, *options["dispute_type"]], key=f"{key}_type")
    with cols[4]:
        city = st.selectbox("City", [ALL, *options["city"]], key=f"{key}_city")

    filters = normalize_filters(
        {"search": search, "status": status, "priority": priority, "dispute_type": dispute_type, "city": city}
    )
    return filter_disputes(disputes, filters)


def _dispute_table(disputes: List[Dispute]) -> None:
    if not disputes:
        st.info("No disputes match the current filters.")
        return
    columns = [
        "id",
        "order_item_id",
        "tracking_id",
        "supplier_name",
        "supplier_city",
        "dispute_type",
        "priority",
        "status",
        "submission_date",
        "last_update_date",
    ]
    rows = [{column: row[column] for column in columns} for row in records_to_rows(disputes)]
    st.dataframe(rows, use_container_width=True, height=320, hide_index=True)


def _new_dispute_form(repository: Repository, identity: Identity) -> None:
    st.markdown("### Submit a new dispute")
    with st.form("new_dispute", clear_on_submit=True):
        cols = st.columns(2)
        with cols[0]:
            order_item_id = st.text_input("Order item ID *")
            tracking_id = st.text_input("Tracking ID *")
            city = st.text_input("City")
            delivery_partner = st.text_input("Delivery partner")
            dispute_type = st.selectbox("Dispute type", DISPUTE_TYPES)
            priority = st.selectbox("Priority", PRIORITIES, index=PRIORITIES.index("Medium"))
        with cols[1]:
            amount = st.text_input("Dispute amount")
            contact_phone = st.text_input("Contact phone")
            contact_method = st.selectbox("Preferred contact method", CONTACT_METHODS)
            expected_resolution = st.text_input("Expected resolution")
            attachments = st.text_input("Attachment links")
        description = st.text_area("Describe the issue")
        submitted = st.form_submit_button("Submit dispute", type="primary")

    if not submitted:
        return
    try:
        dispute = submit_dispute(
            repository,
            identity,
            {
                "orderItemId": order_item_id,
                "trackingId": tracking_id,
                "supplierCity": city,
                "deliveryPartner": delivery_partner,
                "disputeType": dispute_type,
                "priority": priority,
                "disputeAmount": amount,
                "contactPhone": contact_phone,
                "preferredContactMethod": contact_method,
                "expectedResolution": expected_resolution,
                "attachments": attachments,
                "disputeDescription": description,
            },
        )
    except PortalError as exc:
        st.error(exc.message)
        return
    st.success(f"Dispute {dispute.id} submitted successfully.")
    _reload_disputes()


def _supplier_view(repository: Repository, identity: Identity) -> None:
    disputes = _session_disputes(repository, identity)
    overview_tab, disputes_tab, submit_tab = st.tabs(["Overview", "My disputes", "New dispute"])

    with overview_tab:
        _metric_cards(disputes, admin=False)
        st.markdown("### Recent activity")
        recent = recent_activity(disputes)
        if not recent:
            st.caption("No disputes submitted yet.")
        for dispute in recent:
            st.write(f"**{dispute.order_item_id}** ({dispute.dispute_type or 'Dispute'}): {dispute.status}")

    with disputes_tab:
        _dispute_table(_filter_controls(disputes, "supplier"))

    with submit_tab:
        _new_dispute_form(repository, identity)


def _status_controls(repository: Repository, identity: Identity, disputes: List[Dispute]) -> None:
    if not disputes:
        return
    st.markdown("### Update status")
    labels = {f"{d.id} | {d.order_item_id} | {d.supplier_name} ({d.status})": d for d in disputes}
    cols = st.columns([2, 1, 1])
    with cols[0]:
        choice = st.selectbox("Dispute", list(labels), key="status_dispute")
    selected = labels[choice]
    with cols[1]:
        status = st.selectbox(
            "New status",
            STATUSES,
            index=STATUSES.index(selected.status) if selected.status in STATUSES else 0,
            key="status_value",
        )
    with cols[2]:
        st.write("")
        if st.button("Apply", type="primary", key="status_apply"):
            try:
                updated = change_status(repository, identity, selected.id, status)
            except PortalError as exc:
                st.error(exc.message)
                return
            st.session_state["last_action"] = f"Dispute {updated.id} updated to {updated.status}."
            _reload_disputes()
            _rerun_app()


def _admin_view(repository: Repository, identity: Identity) -> None:
    disputes = _session_disputes(repository, identity)
    last_action = st.session_state.pop("last_action", None)
    if last_action:
        st.success(last_action)

    overview_tab, manage_tab = st.tabs(["Overview", "Manage disputes"])
    now = utc_now()

    with overview_tab:
        _metric_cards(disputes, admin=True)
        chart_cols = st.columns(2)
        with chart_cols[0]:
            st.caption("Disputes by status")
            st.bar_chart(calculate_metrics(disputes).status_data())
        with chart_cols[1]:
            st.caption("Age of pending disputes")
            st.bar_chart({bucket["days"]: bucket["count"] for bucket in age_buckets(disputes, now)})

    with manage_tab:
        filtered = _filter_controls(disputes, "admin")
        _dispute_table(filtered)
        st.download_button(
            "Export to Excel",
            data=excel_bytes(disputes_to_export_rows(filtered, now)),
            file_name=export_filename(now),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            disabled=not filtered,
        )
        _status_controls(repository, identity, filtered)


def main() -> None:
    """Launch the dispute portal."""

    configure_logging()
    st.set_page_config(page_title="Return Dispute Portal", layout="wide", initial_sidebar_state="expanded")
    settings = _settings()

    identity = _current_identity(settings)
    if identity is None:
        _login_view(settings)
        return

    repository = _repository(settings)
    with st.sidebar:
        st.markdown(f"**{identity.supplier_name or identity.email}**")
        st.caption(f"{identity.email} | {identity.role}")
        if settings.demo_mode:
            st.caption("Demo mode: changes are kept for this session only.")
        if st.button("Refresh"):
            _reload_disputes()
            _rerun_app()
        if st.button("Log out"):
            _session_store(settings).clear()
            for key in ("identity", "disputes", "last_action"):
                st.session_state.pop(key, None)
            _rerun_app()

    if identity.is_admin:
        st.title("Dispute administration")
        _admin_view(repository, identity)
    else:
        st.title("My return disputes")
        _supplier_view(repository, identity)


if __name__ == "__main__":
    main()
