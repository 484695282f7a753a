"""Audit log component for the admin panel."""

import streamlit as st

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError
from signup_ui.utils.ui import (
    PAGE_SIZE_OPTIONS,
    page_controls,
    reset_page,
    show_api_error,
    step_back_from_empty_page,
)

PAGE_KEY = "audit_page"


def audit_log_ui(client: ApiClient) -> None:
    """UI listing administrative actions, newest first."""
    st.subheader("Audit log")

    page_size = st.selectbox("Per page", options=PAGE_SIZE_OPTIONS, key="audit_page_size", on_change=reset_page(PAGE_KEY))
    page = st.session_state.get(PAGE_KEY, 1)

    with st.spinner("Loading audit log..."):
        try:
            result = client.list_audit(page=page, page_size=page_size)
        except ApiError as e:
            show_api_error(e, prefix="Failed to load audit log: ")
            return

    items = result.get("items", [])
    if not items:
        if step_back_from_empty_page(PAGE_KEY, page, result.get("pages", 1)):
            st.rerun()
        st.info("No administrative actions recorded yet.")
        return

    st.dataframe([
        {
            "When": entry.get("at", ""),
            "Actor": entry.get("actor", ""),
            "Action": entry.get("action", ""),
            "User": entry.get("username", ""),
            "From": entry.get("from", ""),
            "To": entry.get("to", ""),
        }
        for entry in items
    ])

    new_page = page_controls("audit", result.get("page", page), result.get("pages", 1), result.get("total", 0))
    if new_page != page:
        st.session_state[PAGE_KEY] = new_page
        st.rerun()
