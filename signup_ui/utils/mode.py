"""Mode resolution for the Signup Portal front-end.

A running instance serves either the public signup site or the admin panel.
The mode decides which backend base URL the API client talks to. An empty
base URL means requests go to the same origin as the page.
"""

from typing import Optional

PUBLIC_MODE = "public"
ADMIN_MODE = "admin"
APP_MODES = (PUBLIC_MODE, ADMIN_MODE)


def normalize_api_base(raw: Optional[str]) -> Optional[str]:
    """Trim a configured base URL and drop one trailing slash.

    Args:
        raw: Value read from configuration (may be None)

    Returns:
        The cleaned URL, or None when the value is unset or blank
    """
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    if trimmed.endswith("/"):
        trimmed = trimmed[:-1]
    return trimmed


def get_app_mode(raw: Optional[str]) -> str:
    """Map a configured mode flag to "admin" or "public"."""
    if isinstance(raw, str) and raw.strip().lower() == ADMIN_MODE:
        return ADMIN_MODE
    return PUBLIC_MODE


def resolve_api_base(
    mode: str,
    public_base: Optional[str] = None,
    admin_base: Optional[str] = None
) -> str:
    """Pick the effective base URL for the given mode.

    Args:
        mode: Raw or resolved app mode
        public_base: Base URL override used in public mode
        admin_base: Base URL override used in admin mode

    Returns:
        Base URL without trailing slash, or "" for same-origin requests
    """
    if get_app_mode(mode) == ADMIN_MODE:
        selected = normalize_api_base(admin_base)
    else:
        selected = normalize_api_base(public_base)
    return selected or ""
