"""Storage layer for Wiki Docs."""

from wikidocs.storage.database import Database, get_db, reset_db
from wikidocs.storage.repositories import (
    DocumentRepository,
    FolderRepository,
    GithubRepoRepository,
    ReviewRepository,
    UserRepository,
)

__all__ = [
    "Database",
    "get_db",
    "reset_db",
    "DocumentRepository",
    "FolderRepository",
    "GithubRepoRepository",
    "ReviewRepository",
    "UserRepository",
]
