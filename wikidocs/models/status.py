"""Status vocabularies for documents and reviews."""

from enum import Enum


class DocumentStatus(str, Enum):
    """Lifecycle status of a document."""

    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    NEEDS_REVISION = "needs_revision"
    REJECTED = "rejected"


class ReviewStatus(str, Enum):
    """Decision recorded by a review; a document takes the same status."""

    APPROVED = "approved"
    NEEDS_REVISION = "needs_revision"
    REJECTED = "rejected"


class UserRole(str, Enum):
    """Role of a user account."""

    EDITOR = "editor"
    REVIEWER = "reviewer"
    ADMIN = "admin"
