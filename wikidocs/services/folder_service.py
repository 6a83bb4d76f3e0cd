"""Folder service for the documentation tree."""

import uuid
from typing import Any

from sqlalchemy.orm import Session

from wikidocs.exceptions import DatabaseError, DuplicateError, ValidationError
from wikidocs.models.folder import Folder
from wikidocs.services.workflow import DocumentValidator, FolderTreeBuilder
from wikidocs.storage.repositories import DocumentRepository, FolderRepository


class FolderService:
    """Service layer for folder operations."""

    NAME_MAX_LENGTH = 500

    def __init__(self, session: Session):
        self.session = session
        self.folder_repo = FolderRepository(session)
        self.document_repo = DocumentRepository(session)
        self.validator = DocumentValidator()
        self.tree_builder = FolderTreeBuilder()

    def list_folders(self) -> list[Folder]:
        """List all folders ordered by path."""
        return self.folder_repo.get_all()

    def create_folder(
        self,
        name: str,
        path: str,
        parent_path: str | None = None,
        description: str | None = None,
    ) -> Folder:
        """
        Create a folder.

        Args:
            name: Display name
            path: Full folder path, e.g. "api/authentication" (unique)
            parent_path: Path of the parent folder; must exist and be the
                         directory prefix of ``path``
            description: Optional description

        Raises:
            ValidationError: If a field is invalid or the parent is inconsistent
            DuplicateError: If a folder already exists at ``path``
            DatabaseError: If database operation fails
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Folder name is required and cannot be empty", "name")
        if len(name) > self.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Folder name must be at most {self.NAME_MAX_LENGTH} characters", "name"
            )
        self.validator.validate_path(path)

        expected_parent = path.rsplit("/", 1)[0] if "/" in path else None
        if parent_path != expected_parent:
            raise ValidationError(
                f"Parent path of '{path}' must be {expected_parent!r}", "parent_path"
            )
        if parent_path is not None and self.folder_repo.get_by_path(parent_path) is None:
            raise ValidationError(f"Parent folder '{parent_path}' does not exist", "parent_path")

        if self.folder_repo.get_by_path(path) is not None:
            raise DuplicateError("Folder", "path", path)

        try:
            folder = Folder(
                id=str(uuid.uuid4()),
                name=name,
                path=path,
                parent_path=parent_path,
                description=description,
            )
            self.folder_repo.create(folder)
            self.session.commit()
            return folder

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create folder: {str(e)}", e) from e

    def get_folder_tree(self) -> list[dict[str, Any]]:
        """Root folders with nested children and the documents they contain."""
        return self.tree_builder.build(
            self.folder_repo.get_all(), self.document_repo.get_all()
        )
