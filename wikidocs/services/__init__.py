"""Service layer for business logic and validation."""

from wikidocs.services.document_service import DocumentService
from wikidocs.services.folder_service import FolderService
from wikidocs.services.github import GithubRepoService, GithubSyncService
from wikidocs.services.review_service import ReviewService
from wikidocs.services.user_service import UserService

__all__ = [
    "DocumentService",
    "FolderService",
    "GithubRepoService",
    "GithubSyncService",
    "ReviewService",
    "UserService",
]
