"""Front‑end global settings."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from signup_ui.utils.mode import get_app_mode, resolve_api_base

DEFAULT_SITE_NAME = "Sign UP Jeetwin"

# Generous default so a sleeping free-tier backend has time to cold-start
DEFAULT_TIMEOUT = 60.0  # seconds
DEFAULT_RETRIES = 0


@dataclass(frozen=True)
class UIConfig:
    """Settings resolved once at startup and never mutated afterwards."""
    app_mode: str
    api_base: str
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    site_name: str = DEFAULT_SITE_NAME

    @property
    def is_admin(self) -> bool:
        return self.app_mode == "admin"


def _float_setting(value: Optional[str], default: float) -> float:
    try:
        parsed = float(value) if value not in (None, "") else default
    except ValueError:
        raise ValueError(f"Expected a number of seconds, got {value!r}") from None
    return parsed if parsed > 0 else default


def _int_setting(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value) if value not in (None, "") else default
    except ValueError:
        raise ValueError(f"Expected an integer, got {value!r}") from None
    return max(parsed, 0)


def load_config(environ: Optional[Mapping[str, str]] = None) -> UIConfig:
    """Build the UI configuration from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Immutable UIConfig
    """
    env = os.environ if environ is None else environ
    app_mode = get_app_mode(env.get("APP_MODE"))
    site_name = env.get("SITE_NAME") or env.get("BRAND_NAME") or DEFAULT_SITE_NAME
    return UIConfig(
        app_mode=app_mode,
        api_base=resolve_api_base(app_mode, env.get("API_BASE"), env.get("ADMIN_API_BASE")),
        timeout=_float_setting(env.get("API_TIMEOUT"), DEFAULT_TIMEOUT),
        retries=_int_setting(env.get("API_RETRIES"), DEFAULT_RETRIES),
        site_name=site_name,
    )
