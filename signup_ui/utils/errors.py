"""Errors raised by the Signup Portal API client."""

from typing import Any, Dict, List, Optional

VALIDATION_ERROR_MARKER = "validation_error"


class ApiError(Exception):
    """Base class for every failure surfaced by the API client."""

    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data


class ValidationError(ApiError):
    """Backend rejected the input with per-field problems."""

    def __init__(self, message: str, status: Optional[int], data: Dict[str, Any]):
        super().__init__(message, status=status, data=data)
        self.details: List[Dict[str, Any]] = list(data.get("details") or [])

    def field_errors(self) -> Dict[str, str]:
        """Map each field to its first reported message."""
        errors: Dict[str, str] = {}
        for problem in self.details:
            if not isinstance(problem, dict):
                continue
            field = problem.get("field")
            message = problem.get("message")
            if field and message and field not in errors:
                errors[str(field)] = str(message)
        return errors


class HttpError(ApiError):
    """Non-success response that is not a validation error."""


class TransportError(ApiError):
    """No response was received (connection refused, DNS, timeout...)."""

    def __init__(self, message: str, cause: Exception):
        super().__init__(message)
        self.cause = cause


def is_validation_body(body: Any) -> bool:
    """Check whether a parsed JSON body is a validation error envelope."""
    return (
        isinstance(body, dict)
        and body.get("error") == VALIDATION_ERROR_MARKER
        and isinstance(body.get("details"), list)
    )


def first_detail_message(body: Any) -> Optional[str]:
    """Return the first ``details[].message`` of a JSON body, if any."""
    if not isinstance(body, dict):
        return None
    details = body.get("details")
    if not isinstance(details, list) or not details:
        return None
    first = details[0]
    if isinstance(first, dict) and first.get("message"):
        return str(first["message"])
    return None


def error_message(body: Any, status: int) -> str:
    """Pick the human readable message for a generic error response.

    Precedence: plain-text body, first validation-style detail,
    top-level ``error`` string, then a synthetic ``HTTP <status>``.
    """
    if isinstance(body, str):
        if body.strip():
            return body
        return f"HTTP {status}"
    detail = first_detail_message(body)
    if detail:
        return detail
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {status}"
