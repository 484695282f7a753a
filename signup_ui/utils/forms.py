"""Form helpers shared by the signup, user and blog pages.

Checks here only catch obviously incomplete forms before a round-trip; the
backend stays the authority on what is valid.
"""

from typing import Any, Dict, List, Optional

from signup_ui.utils.models import ValidationProblem

SIGNUP_REQUIRED_FIELDS = (
    ("username", "Username is required"),
    ("mobileNumber", "Mobile number is required"),
    ("password", "Password is required"),
)


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Trim a text input; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_signup(form: Dict[str, Any]) -> List[ValidationProblem]:
    """Return the problems that make a signup form not worth submitting."""
    problems: List[ValidationProblem] = []
    for field, message in SIGNUP_REQUIRED_FIELDS:
        value = form.get(field)
        if not isinstance(value, str) or not value.strip():
            problems.append({"field": field, "message": message})
    return problems


def signup_payload(form: Dict[str, Any]) -> Dict[str, Any]:
    """Build the signup request body from raw form values."""
    return {
        "username": (form.get("username") or "").strip(),
        "email": clean_optional(form.get("email")),
        "mobileNumber": (form.get("mobileNumber") or "").strip(),
        "whatsappNumber": clean_optional(form.get("whatsappNumber")),
        "telegramUsername": clean_optional(form.get("telegramUsername")),
        "password": form.get("password") or "",
    }


def parse_tags(text: Optional[str]) -> List[str]:
    """Split a comma separated tag list, dropping blanks and repeats."""
    tags: List[str] = []
    for raw in (text or "").split(","):
        tag = raw.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags
