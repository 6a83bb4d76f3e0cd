"""Database models for Wiki Docs."""

from wikidocs.models.base import Base
from wikidocs.models.document import Document
from wikidocs.models.folder import Folder
from wikidocs.models.github_repo import GithubRepo
from wikidocs.models.review import Review
from wikidocs.models.status import DocumentStatus, ReviewStatus, UserRole
from wikidocs.models.user import User

__all__ = [
    "Base",
    "Document",
    "DocumentStatus",
    "Folder",
    "GithubRepo",
    "Review",
    "ReviewStatus",
    "User",
    "UserRole",
]
