"""API utilities for the Signup Portal.

Every backend operation is a method on :class:`ApiClient`. The client owns a
``requests.Session`` so the admin session cookie set by ``/api/auth/login``
is sent back on every later call, and it shapes every non-success response
into an :class:`~signup_ui.utils.errors.ApiError` subclass.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote, urlencode

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from signup_ui.ui_config import DEFAULT_RETRIES, DEFAULT_TIMEOUT, UIConfig
from signup_ui.utils.errors import (
    HttpError,
    TransportError,
    ValidationError,
    error_message,
    first_detail_message,
    is_validation_body,
)
from signup_ui.utils.models import (
    AdminMeResponse,
    AuditResponse,
    BlogDetailResponse,
    BlogListResponse,
    BlogPostPayload,
    BlogPostResponse,
    BlogTagsResponse,
    OkResponse,
    ResetTokenResponse,
    SignupPayload,
    UploadResponse,
    UserResponse,
    UsersListResponse,
    UserUpdatePayload,
)

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

# Gateway errors a waking backend answers with while it cold-starts
RETRY_STATUSES = (502, 503, 504)

QueryParams = List[Tuple[str, Any]]
UploadFile = Union[Tuple[str, bytes, str], bytes, Any]


def build_api_url(base_url: str, path: str) -> str:
    """Join the effective base URL and an API path.

    Args:
        base_url: Resolved base URL ("" means same-origin)
        path: API path, with or without leading slash

    Returns:
        Absolute URL, or the normalized path when base_url is empty
    """
    normalized = path if path.startswith("/") else f"/{path}"
    return f"{base_url}{normalized}" if base_url else normalized


def build_query(params: QueryParams) -> str:
    """Encode query parameters, leaving out every falsy value.

    Order follows the order of ``params``. Returns "" or "?...".
    """
    pairs = [(name, str(value)) for name, value in params if value]
    return f"?{urlencode(pairs)}" if pairs else ""


def encode_segment(value: Any) -> str:
    """Percent-encode an identifier or slug used as one path segment."""
    return quote(str(value), safe="!*'()")


def _upload_part(file: UploadFile) -> Tuple[str, bytes, str]:
    """Turn an uploaded file into a ``requests`` multipart tuple."""
    if isinstance(file, tuple) and len(file) == 3:
        return file
    if hasattr(file, 'name') and hasattr(file, 'getvalue'):
        content_type = getattr(file, 'type', None) or "application/octet-stream"
        return (file.name, file.getvalue(), content_type)
    if isinstance(file, bytes):
        return ("image.jpg", file, "image/jpeg")
    raise ValueError("file must be a tuple, file-like object, or bytes")


class ApiClient:
    """Thin typed client for the Signup Portal backend.

    Args:
        base_url: Effective base URL from the mode resolver ("" = same-origin)
        timeout: Seconds to wait for each request
        retries: Retries for GET requests on connection errors and 502-504
        session: Optional pre-built session (tests inject one)
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.retries = retries
        self.session = session or requests.Session()
        if retries > 0:
            retry = Retry(
                total=retries,
                read=0,
                status_forcelist=RETRY_STATUSES,
                allowed_methods=frozenset({"GET"}),
                backoff_factor=0.5,
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    @classmethod
    def from_config(cls, config: UIConfig, session: Optional[requests.Session] = None) -> "ApiClient":
        return cls(config.api_base, timeout=config.timeout, retries=config.retries, session=session)

    def build_api_url(self, path: str) -> str:
        return build_api_url(self.base_url, path)

    # ---------- request plumbing ----------

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self.build_api_url(path)
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {url} failed before a response: {str(e)}")
            raise TransportError(str(e), cause=e) from e

    def _request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """Send a JSON request and return the parsed success body."""
        merged = {"Content-Type": JSON_CONTENT_TYPE, **(headers or {})}
        body = json.dumps(payload) if payload is not None else None
        response = self._send(method, path, data=body, headers=merged)
        return self._handle_response(method, response)

    def _handle_response(self, method: str, response: requests.Response) -> Any:
        """Classify a response into a success body or a raised ApiError."""
        content_type = response.headers.get("Content-Type", "")
        is_json = JSON_CONTENT_TYPE in content_type
        invalid_json = False
        if is_json:
            try:
                body = response.json()
            except ValueError:
                body = None
                invalid_json = bool(response.content)
        else:
            body = response.text

        if response.ok:
            if invalid_json:
                raise HttpError(
                    f"Invalid JSON in response (HTTP {response.status_code})",
                    status=response.status_code,
                )
            return body

        logger.warning(f"{method} {response.url} returned HTTP {response.status_code}")
        if is_json and is_validation_body(body):
            message = first_detail_message(body) or "Validation error"
            raise ValidationError(message, status=response.status_code, data=body)
        raise HttpError(
            error_message(body, response.status_code),
            status=response.status_code,
            data=body,
        )

    # ---------- public signup ----------

    def signup(self, payload: SignupPayload) -> UserResponse:
        """Submit the public signup form."""
        return self._request("POST", "/api/signup", payload)

    def reset_password(self, token: str, new_password: str) -> OkResponse:
        """Consume a reset token and set a new password."""
        self._request("POST", "/api/reset-password", {"token": token, "newPassword": new_password})
        return {"ok": True}

    # ---------- admin session ----------

    def admin_login(self, username: str, password: str) -> OkResponse:
        """Log in as admin; the backend answers with a session cookie."""
        self._request("POST", "/api/auth/login", {"username": username, "password": password})
        return {"ok": True}

    def admin_me(self) -> AdminMeResponse:
        """Return the admin bound to the current session cookie."""
        return self._request("GET", "/api/auth/me")

    def admin_logout(self) -> OkResponse:
        return self._request("POST", "/api/auth/logout", {})

    # ---------- admin users ----------

    def list_users(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> UsersListResponse:
        """List signups with optional search, status filter, sort and paging."""
        qs = build_query([
            ("q", q),
            ("status", status),
            ("sort", sort),
            ("page", page),
            ("pageSize", page_size),
        ])
        return self._request("GET", f"/api/admin/users{qs}")

    def update_user_status(self, user_id: str, status: str) -> UserResponse:
        return self._request("PATCH", f"/api/admin/users/{encode_segment(user_id)}", {"status": status})

    def admin_update_user(self, user_id: str, payload: UserUpdatePayload) -> UserResponse:
        """Update a user's editable contact fields (and optionally status)."""
        return self._request("PATCH", f"/api/admin/users/{encode_segment(user_id)}", payload)

    def admin_delete_user(self, user_id: str) -> OkResponse:
        self._request("DELETE", f"/api/admin/users/{encode_segment(user_id)}")
        return {"ok": True}

    def create_reset_token(self, user_id: str) -> ResetTokenResponse:
        """Issue a one-time password reset link for a user."""
        return self._request("POST", f"/api/admin/users/{encode_segment(user_id)}/reset-token", {})

    def list_audit(self, page: Optional[int] = None, page_size: Optional[int] = None) -> AuditResponse:
        qs = build_query([("page", page), ("pageSize", page_size)])
        return self._request("GET", f"/api/admin/audit{qs}")

    # ---------- blog ----------

    def list_blog(
        self,
        q: Optional[str] = None,
        tag: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> BlogListResponse:
        """List published blog posts."""
        qs = build_query([
            ("q", q),
            ("tag", tag),
            ("sort", sort),
            ("page", page),
            ("pageSize", page_size),
        ])
        return self._request("GET", f"/api/blog{qs}")

    def get_blog(self, slug: str) -> BlogDetailResponse:
        """Fetch one post by slug together with related posts."""
        return self._request("GET", f"/api/blog/{encode_segment(slug)}")

    def list_blog_tags(self) -> BlogTagsResponse:
        return self._request("GET", "/api/blog/tags")

    def admin_list_blog(
        self,
        q: Optional[str] = None,
        tag: Optional[str] = None,
        status: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> BlogListResponse:
        """List posts for the admin panel, drafts included."""
        qs = build_query([
            ("q", q),
            ("tag", tag),
            ("status", status),
            ("sort", sort),
            ("page", page),
            ("pageSize", page_size),
        ])
        return self._request("GET", f"/api/admin/blog{qs}")

    def admin_create_blog(self, payload: BlogPostPayload) -> BlogPostResponse:
        return self._request("POST", "/api/admin/blog", payload)

    def admin_update_blog(self, post_id: str, payload: BlogPostPayload) -> BlogPostResponse:
        return self._request("PATCH", f"/api/admin/blog/{encode_segment(post_id)}", payload)

    def admin_delete_blog(self, post_id: str) -> OkResponse:
        self._request("DELETE", f"/api/admin/blog/{encode_segment(post_id)}")
        return {"ok": True}

    def admin_upload_image(self, file: UploadFile) -> UploadResponse:
        """Upload an image as multipart form data.

        No Content-Type header is set here; ``requests`` writes the
        multipart boundary itself.

        Args:
            file: Streamlit UploadedFile, ``(name, bytes, mime)`` tuple or raw bytes

        Returns:
            ``{"url": ...}`` pointing at the stored image
        """
        response = self._send("POST", "/api/admin/uploads/image", files={"file": _upload_part(file)})
        return self._handle_response("POST", response)
