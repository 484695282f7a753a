"""Password reset component (public)."""

import streamlit as st

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError
from signup_ui.utils.ui import show_api_error


def reset_password_ui(client: ApiClient) -> None:
    """UI for consuming a reset token sent by an admin.

    The token is prefilled from the ``token`` query parameter of the reset link.
    """
    st.subheader("Reset password")

    with st.form("reset_password_form"):
        token = st.text_input("Reset token", value=st.query_params.get("token", ""))
        new_password = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm new password", type="password")
        submitted = st.form_submit_button("Set new password")

    if not submitted:
        return
    if not token.strip() or not new_password:
        st.error("Token and new password are required")
        return
    if new_password != confirm:
        st.error("Passwords do not match")
        return

    with st.spinner("Updating password…"):
        try:
            client.reset_password(token.strip(), new_password)
        except ApiError as e:
            show_api_error(e, prefix="Reset failed: ")
            return
    st.success("Password updated. You can now log in with your new password.")
