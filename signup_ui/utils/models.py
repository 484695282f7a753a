"""Wire shapes exchanged with the Signup Portal backend.

The backend owns every record; the UI only keeps request-scoped copies.
Keys follow the backend's camelCase JSON names. ``from`` is a Python
keyword, so the records carrying it use the functional TypedDict syntax.
"""

from typing import Dict, List, Literal, Optional, TypedDict

UserStatus = Literal["pending", "approved", "rejected"]
USER_STATUSES = ("pending", "approved", "rejected")

SortOrder = Literal["newest", "oldest"]
SORT_ORDERS = ("newest", "oldest")

BlogStatusFilter = Literal["all", "published", "draft"]
BLOG_STATUS_FILTERS = ("all", "published", "draft")


class _StatusHistoryRequired(TypedDict):
    at: str
    by: str
    to: UserStatus


_StatusHistoryFrom = TypedDict("_StatusHistoryFrom", {"from": Optional[str]})


class StatusHistoryEntry(_StatusHistoryRequired, _StatusHistoryFrom, total=False):
    note: str


class _SignupUserRequired(TypedDict):
    id: str
    username: str
    email: Optional[str]
    mobileNumber: str
    whatsappNumber: Optional[str]
    telegramUsername: Optional[str]
    createdAt: str


class SignupUser(_SignupUserRequired, total=False):
    updatedAt: str
    status: UserStatus
    statusChangedAt: str
    statusChangedBy: str
    statusHistory: List[StatusHistoryEntry]


class SignupPayload(TypedDict, total=False):
    username: str
    email: Optional[str]
    mobileNumber: str
    whatsappNumber: Optional[str]
    telegramUsername: Optional[str]
    password: str


class UserUpdatePayload(TypedDict, total=False):
    email: Optional[str]
    mobileNumber: str
    whatsappNumber: Optional[str]
    telegramUsername: Optional[str]
    status: UserStatus


class ValidationProblem(TypedDict):
    field: str
    message: str


class ApiValidationError(TypedDict):
    error: Literal["validation_error"]
    details: List[ValidationProblem]


class StatusCounts(TypedDict):
    pending: int
    approved: int
    rejected: int


class UsersListResponse(TypedDict):
    users: List[SignupUser]
    total: int
    page: int
    pageSize: int
    pages: int
    counts: StatusCounts


class UserResponse(TypedDict):
    user: SignupUser


AuditEntry = TypedDict("AuditEntry", {
    "id": str,
    "at": str,
    "actor": str,
    "action": str,
    "userId": str,
    "username": str,
    "from": str,
    "to": str,
})


class AuditResponse(TypedDict):
    items: List[AuditEntry]
    total: int
    page: int
    pageSize: int
    pages: int


class _BlogPostRequired(TypedDict):
    id: str
    slug: str
    title: str
    excerpt: str
    coverImageUrl: Optional[str]
    tags: List[str]
    published: bool
    createdAt: str


class BlogPost(_BlogPostRequired, total=False):
    updatedAt: str
    publishedAt: Optional[str]
    contentMarkdown: str
    newsletterRequested: bool
    newsletterStatus: Optional[str]
    newsletterSentAt: Optional[str]


class BlogPostPayload(TypedDict, total=False):
    title: str
    slug: str
    excerpt: str
    contentMarkdown: str
    coverImageUrl: Optional[str]
    tags: List[str]
    published: bool


class BlogListResponse(TypedDict):
    items: List[BlogPost]
    total: int
    page: int
    pageSize: int
    pages: int


class BlogPostResponse(TypedDict):
    post: BlogPost


class BlogDetailResponse(TypedDict):
    post: BlogPost
    related: List[BlogPost]


class BlogTag(TypedDict):
    tag: str
    count: int


class BlogTagsResponse(TypedDict):
    items: List[BlogTag]


class ResetTokenResponse(TypedDict):
    token: str
    resetUrl: str
    expiresAt: int


class AdminIdentity(TypedDict):
    username: str


class AdminMeResponse(TypedDict):
    ok: bool
    admin: AdminIdentity


class OkResponse(TypedDict):
    ok: bool


class UploadResponse(TypedDict):
    url: str


def effective_status(user: Dict) -> str:
    """Status to display for a user.

    The last history transition wins over the ``status`` field; users
    without either are still awaiting review.
    """
    history = user.get("statusHistory") or []
    if history:
        return history[-1].get("to") or user.get("status") or "pending"
    return user.get("status") or "pending"


def history_consistent(user: Dict) -> bool:
    """Check that ``status`` matches the last history transition."""
    history = user.get("statusHistory") or []
    if not history:
        return True
    return user.get("status") == history[-1].get("to")
