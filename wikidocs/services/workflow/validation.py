"""Document and folder validation logic."""

from typing import Any

from wikidocs.exceptions import ValidationError
from wikidocs.models.status import DocumentStatus, ReviewStatus


class DocumentValidator:
    """Validates document, folder and review input according to business rules."""

    # Validation constants
    TITLE_MIN_LENGTH = 1
    TITLE_MAX_LENGTH = 500
    PATH_MAX_LENGTH = 1000
    ID_MAX_LENGTH = 255

    @staticmethod
    def validate_title(title: str) -> None:
        """
        Validate document title.

        Args:
            title: Title to validate

        Raises:
            ValidationError: If title is invalid
        """
        if not isinstance(title, str):
            raise ValidationError("Title must be a string", "title")
        if not title or not title.strip():
            raise ValidationError("Title is required and cannot be empty", "title")
        if len(title) > DocumentValidator.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Title must be at most {DocumentValidator.TITLE_MAX_LENGTH} characters", "title"
            )

    @staticmethod
    def validate_path(path: str, field: str = "path") -> None:
        """
        Validate a logical "folder/subfolder/name" path.

        Args:
            path: Path to validate
            field: Field name reported in the error

        Raises:
            ValidationError: If path is invalid
        """
        if not isinstance(path, str):
            raise ValidationError("Path must be a string", field)
        if not path or not path.strip():
            raise ValidationError("Path is required and cannot be empty", field)
        if len(path) > DocumentValidator.PATH_MAX_LENGTH:
            raise ValidationError(
                f"Path must be at most {DocumentValidator.PATH_MAX_LENGTH} characters", field
            )
        if path.startswith("/") or path.endswith("/"):
            raise ValidationError("Path cannot start or end with '/'", field)
        if any(not segment.strip() for segment in path.split("/")):
            raise ValidationError("Path cannot contain empty segments", field)
        if any(segment in (".", "..") for segment in path.split("/")):
            raise ValidationError("Path cannot contain '.' or '..' segments", field)

    @staticmethod
    def validate_document_path(path: str) -> None:
        """Validate a document path; the markdown extension is added on push."""
        DocumentValidator.validate_path(path)
        if path.lower().endswith(".md"):
            raise ValidationError("Document path must not include the .md extension", "path")

    @staticmethod
    def validate_content(content: str) -> None:
        if not isinstance(content, str):
            raise ValidationError("Content must be a string", "content")

    @staticmethod
    def validate_metadata(metadata: dict[str, Any]) -> None:
        """
        Validate metadata structure.

        Raises:
            ValidationError: If metadata is not a dictionary
        """
        if not isinstance(metadata, dict):
            raise ValidationError("Metadata must be a dictionary", "metadata")

    @staticmethod
    def validate_id(obj_id: str, field: str = "id") -> None:
        """Validate a record ID."""
        if not isinstance(obj_id, str):
            raise ValidationError("ID must be a string", field)
        if not obj_id or not obj_id.strip():
            raise ValidationError("ID cannot be empty", field)
        if len(obj_id) > DocumentValidator.ID_MAX_LENGTH:
            raise ValidationError(
                f"ID must be at most {DocumentValidator.ID_MAX_LENGTH} characters", field
            )

    @staticmethod
    def parse_document_status(status: str) -> DocumentStatus:
        """Convert a raw value into a DocumentStatus."""
        try:
            return DocumentStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in DocumentStatus)
            raise ValidationError(
                f"Invalid document status '{status}'. Must be one of: {allowed}", "status"
            ) from None

    @staticmethod
    def parse_review_status(status: str) -> ReviewStatus:
        """Convert a raw value into a ReviewStatus."""
        try:
            return ReviewStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in ReviewStatus)
            raise ValidationError(
                f"Invalid review status '{status}'. Must be one of: {allowed}", "status"
            ) from None
