"""Repository pattern implementation for data access layer."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from wikidocs.models.document import Document
from wikidocs.models.folder import Folder
from wikidocs.models.github_repo import GithubRepo
from wikidocs.models.review import Review
from wikidocs.models.user import User


class _BaseRepository:
    """Shared create/get/delete for single-table repositories."""

    model: Any = None

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, obj):
        self.session.add(obj)
        self.session.flush()
        return obj

    def get_by_id(self, obj_id: str):
        return self.session.get(self.model, obj_id)

    def update(self, obj):
        self.session.flush()
        return obj

    def delete(self, obj_id: str) -> bool:
        obj = self.get_by_id(obj_id)
        if obj is None:
            return False
        self.session.delete(obj)
        self.session.flush()
        return True


class UserRepository(_BaseRepository):
    """Repository for user operations."""

    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by unique username."""
        return self.session.scalar(select(User).where(User.username == username))


class DocumentRepository(_BaseRepository):
    """Repository for document operations."""

    model = Document

    def get_by_path(self, path: str) -> Optional[Document]:
        """Get the document stored at a logical path."""
        return self.session.scalar(select(Document).where(Document.path == path))

    def get_all(self) -> list[Document]:
        """Get all documents, most recently created first."""
        stmt = select(Document).order_by(Document.created_at.desc())
        return list(self.session.scalars(stmt))

    def get_by_status(self, status: str) -> list[Document]:
        """Get documents with the given status."""
        stmt = (
            select(Document)
            .where(Document.status == status)
            .order_by(Document.updated_at.desc())
        )
        return list(self.session.scalars(stmt))

    def search(self, query: str) -> list[Document]:
        """Case-insensitive substring search across title, content and path."""
        needle = query.lower()
        stmt = (
            select(Document)
            .where(
                or_(
                    func.lower(Document.title).contains(needle, autoescape=True),
                    func.lower(Document.content).contains(needle, autoescape=True),
                    func.lower(Document.path).contains(needle, autoescape=True),
                )
            )
            .order_by(Document.created_at.desc())
        )
        return list(self.session.scalars(stmt))

    def count(self) -> int:
        """Count all documents."""
        return self.session.scalar(select(func.count(Document.id))) or 0


class FolderRepository(_BaseRepository):
    """Repository for folder operations."""

    model = Folder

    def get_by_path(self, path: str) -> Optional[Folder]:
        """Get folder by unique path."""
        return self.session.scalar(select(Folder).where(Folder.path == path))

    def get_all(self) -> list[Folder]:
        """Get all folders ordered by path."""
        return list(self.session.scalars(select(Folder).order_by(Folder.path)))


class GithubRepoRepository(_BaseRepository):
    """Repository for GitHub repository configurations."""

    model = GithubRepo

    def get_all(self) -> list[GithubRepo]:
        """Get all repositories, oldest first."""
        return list(self.session.scalars(select(GithubRepo).order_by(GithubRepo.created_at)))

    def get_active(self) -> list[GithubRepo]:
        """Get active repositories, oldest first."""
        stmt = (
            select(GithubRepo)
            .where(GithubRepo.is_active.is_(True))
            .order_by(GithubRepo.created_at)
        )
        return list(self.session.scalars(stmt))


class ReviewRepository(_BaseRepository):
    """Repository for review records."""

    model = Review

    def get_by_document(self, document_id: str) -> list[Review]:
        """Get reviews of a document, newest first."""
        stmt = (
            select(Review)
            .where(Review.document_id == document_id)
            .order_by(Review.created_at.desc())
        )
        return list(self.session.scalars(stmt))
