"""Document service layer for business logic and validation."""

import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wikidocs.config import get_settings
from wikidocs.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from wikidocs.models.base import utcnow
from wikidocs.models.document import Document
from wikidocs.models.status import DocumentStatus
from wikidocs.services.workflow import DocumentValidator, StatusMachine
from wikidocs.storage.repositories import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentService:
    """Service layer for document CRUD operations with validation and error handling."""

    def __init__(self, session: Session, enforce_transitions: bool | None = None):
        """
        Initialize document service with database session.

        Args:
            session: SQLAlchemy database session
            enforce_transitions: Validate status changes against the workflow.
                                 If None, uses settings.
        """
        if enforce_transitions is None:
            enforce_transitions = get_settings().enforce_status_transitions
        self.session = session
        self.document_repo = DocumentRepository(session)
        self.validator = DocumentValidator()
        self.status_machine = StatusMachine(enforce=enforce_transitions)

    def create_document(
        self,
        title: str,
        path: str,
        author_id: str,
        content: str = "",
        status: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Document:
        """
        Create a new document.

        Args:
            title: Document title (required, non-empty)
            path: Logical path such as "api/authentication" (unique)
            author_id: ID of the acting user; becomes author and last editor
            content: Markdown content
            status: Initial status (default: draft)
            metadata: Optional metadata (JSON structure)

        Returns:
            Created document

        Raises:
            ValidationError: If a field is invalid
            PreconditionError: If the initial status is not allowed
            DuplicateError: If a document already exists at the path
            DatabaseError: If database operation fails
        """
        self.validator.validate_title(title)
        self.validator.validate_document_path(path)
        self.validator.validate_content(content)
        self.validator.validate_id(author_id, "author_id")
        if metadata is not None:
            self.validator.validate_metadata(metadata)

        initial = (
            self.validator.parse_document_status(status)
            if status is not None
            else DocumentStatus.DRAFT
        )
        self.status_machine.check_initial(initial)

        if self.document_repo.get_by_path(path) is not None:
            raise DuplicateError("Document", "path", path)

        try:
            document = Document(
                id=str(uuid.uuid4()),
                title=title,
                content=content,
                path=path,
                status=initial.value,
                author_id=author_id,
                last_editor_id=author_id,
                meta=metadata or {},
            )
            self.document_repo.create(document)
            self.session.commit()
            logger.info("Document created", extra={"document_id": document.id, "path": path})
            return document

        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError("Document", "path", path) from e

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create document: {str(e)}", e) from e

    def get_document(self, document_id: str) -> Document:
        """
        Get document by ID.

        Raises:
            ValidationError: If document_id is invalid
            NotFoundError: If document is not found
        """
        self.validator.validate_id(document_id)
        document = self.document_repo.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    def get_document_by_path(self, path: str) -> Document | None:
        """Get the document at a logical path, or None."""
        self.validator.validate_path(path)
        return self.document_repo.get_by_path(path)

    def list_documents(self) -> list[Document]:
        """List all documents, most recently created first."""
        try:
            return self.document_repo.get_all()
        except Exception as e:
            raise DatabaseError(f"Failed to list documents: {str(e)}", e) from e

    def update_document(
        self,
        document_id: str,
        editor_id: str,
        title: str | None = None,
        content: str | None = None,
        path: str | None = None,
        status: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Document:
        """
        Partially update a document.

        Fields left as None are unchanged. Every update records the editor and
        refreshes ``updated_at``. Changing the content of an approved
        document sends it back to draft while transitions are enforced.

        Args:
            document_id: Document ID
            editor_id: ID of the acting user
            title: New title
            content: New markdown content
            path: New logical path (must stay unique)
            status: New status, validated against the workflow
            metadata: New metadata (replaces existing)

        Returns:
            Updated document

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If document is not found
            PreconditionError: If the status change is not allowed
            DuplicateError: If another document already uses the new path
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(editor_id, "editor_id")
        if title is not None:
            self.validator.validate_title(title)
        if content is not None:
            self.validator.validate_content(content)
        if path is not None:
            self.validator.validate_document_path(path)
        if metadata is not None:
            self.validator.validate_metadata(metadata)
        target = self.validator.parse_document_status(status) if status is not None else None

        document = self.get_document(document_id)

        if target is not None:
            new_content = content if content is not None else document.content
            self.status_machine.check_update(
                DocumentStatus(document.status), target, new_content
            )
        elif content is not None and content != document.content:
            target = self.status_machine.status_after_content_edit(
                DocumentStatus(document.status)
            )

        if path is not None and path != document.path:
            existing = self.document_repo.get_by_path(path)
            if existing is not None and existing.id != document.id:
                raise DuplicateError("Document", "path", path)

        try:
            if title is not None:
                document.title = title
            if content is not None:
                document.content = content
            if path is not None:
                document.path = path
            if target is not None:
                document.status = target.value
            if metadata is not None:
                document.meta = metadata
            document.last_editor_id = editor_id
            document.updated_at = utcnow()

            self.document_repo.update(document)
            self.session.commit()
            return document

        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError("Document", "path", path) from e

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update document: {str(e)}", e) from e

    def delete_document(self, document_id: str) -> bool:
        """
        Delete a document. Reviews of the document are kept.

        Returns:
            True if document was deleted, False if not found
        """
        self.validator.validate_id(document_id)

        try:
            deleted = self.document_repo.delete(document_id)
            self.session.commit()
            return deleted

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to delete document: {str(e)}", e) from e

    def search_documents(self, query: str) -> list[Document]:
        """
        Find documents whose title, content or path contains ``query``.

        Matching is case-insensitive.

        Raises:
            ValidationError: If query is empty
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Search query required", "q")
        try:
            return self.document_repo.search(query)
        except Exception as e:
            raise DatabaseError(f"Search failed: {str(e)}", e) from e

    def get_documents_by_status(self, status: str) -> list[Document]:
        """
        List documents with a given status (e.g. the review queue).

        Raises:
            ValidationError: If status is not a known document status
        """
        parsed = self.validator.parse_document_status(status)
        try:
            return self.document_repo.get_by_status(parsed.value)
        except Exception as e:
            raise DatabaseError(f"Failed to fetch documents by status: {str(e)}", e) from e

    def require_pushable(self, document: Document) -> None:
        """Raise PreconditionError unless the document may be exported."""
        if not self.status_machine.can_push(DocumentStatus(document.status)):
            raise PreconditionError("Document must be approved before submitting to GitHub")
