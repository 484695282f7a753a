"""
Streamlit UI for the Signup Portal.
Install the package first (`pip install -e .`) so the `signup_ui` imports
resolve, then run `streamlit run signup_ui/streamlit_app.py`.

APP_MODE=public serves the signup site and blog; APP_MODE=admin serves the
moderation panel and blog CMS.
"""

import logging
import streamlit as st

from signup_ui.ui_config import UIConfig, load_config
from signup_ui.utils.errors import ApiError
from signup_ui.utils.ui import get_client, show_api_error

from signup_ui.components.signup import signup_ui
from signup_ui.components.reset_password import reset_password_ui
from signup_ui.components.blog import blog_ui
from signup_ui.components.admin_login import admin_login_ui, admin_logout_ui, current_admin
from signup_ui.components.users import manage_users_ui
from signup_ui.components.audit import audit_log_ui
from signup_ui.components.blog_admin import manage_blog_ui

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PUBLIC_PAGES = {
    "Sign up": signup_ui,
    "Blog": blog_ui,
    "Reset password": reset_password_ui,
}

ADMIN_PAGES = {
    "Signups": manage_users_ui,
    "Audit log": audit_log_ui,
    "Blog posts": manage_blog_ui,
}


@st.cache_resource(show_spinner=False)
def get_config() -> UIConfig:
    """Read the environment once per server process."""
    config = load_config()
    logger.info(f"Starting in {config.app_mode} mode against {config.api_base or 'same origin'}")
    if not config.api_base:
        logger.warning("No API base URL configured; set API_BASE or ADMIN_API_BASE, path-only URLs cannot be requested from the server")
    return config


def public_app(config: UIConfig) -> None:
    client = get_client(config)
    page = st.sidebar.radio("Go to", tuple(PUBLIC_PAGES), key="public_page")
    PUBLIC_PAGES[page](client)


def admin_app(config: UIConfig) -> None:
    client = get_client(config)
    try:
        username = current_admin(client)
    except ApiError as e:
        show_api_error(e, prefix="Cannot reach the admin API: ")
        return

    if not username:
        admin_login_ui(client)
        return

    admin_logout_ui(client, username)
    page = st.sidebar.radio("Go to", tuple(ADMIN_PAGES), key="admin_page")
    ADMIN_PAGES[page](client)


def main():
    """Main application entry point."""
    config = get_config()
    st.set_page_config(
        page_title=f"{config.site_name} Admin" if config.is_admin else config.site_name,
        layout="wide",
        initial_sidebar_state="expanded"
    )
    st.title(config.site_name)

    if config.is_admin:
        admin_app(config)
    else:
        public_app(config)

    st.sidebar.write("---")
    st.sidebar.caption(f"{config.site_name} · {config.app_mode} mode")


if __name__ == "__main__":
    main()
