"""Review service: records review decisions and applies them to documents."""

import logging
import uuid
from typing import Any

from sqlalchemy.orm import Session

from wikidocs.config import get_settings
from wikidocs.exceptions import DatabaseError, NotFoundError, ValidationError
from wikidocs.models.base import utcnow
from wikidocs.models.review import Review
from wikidocs.models.status import DocumentStatus
from wikidocs.services.workflow import DocumentValidator, StatusMachine
from wikidocs.storage.repositories import DocumentRepository, ReviewRepository

logger = logging.getLogger(__name__)


class ReviewService:
    """Service layer for review submission and lookup."""

    def __init__(self, session: Session, enforce_transitions: bool | None = None):
        if enforce_transitions is None:
            enforce_transitions = get_settings().enforce_status_transitions
        self.session = session
        self.review_repo = ReviewRepository(session)
        self.document_repo = DocumentRepository(session)
        self.validator = DocumentValidator()
        self.status_machine = StatusMachine(enforce=enforce_transitions)

    def submit_review(
        self,
        document_id: str,
        status: str,
        reviewer_id: str,
        comments: str | None = None,
        changes: list[Any] | None = None,
    ) -> Review:
        """
        Record a review decision and move the document to the same status.

        The review row and the document update are committed together; if
        either write fails neither is kept.

        Args:
            document_id: Reviewed document
            status: approved, needs_revision or rejected
            reviewer_id: ID of the acting reviewer
            comments: Optional reviewer comments, copied onto the document
            changes: Optional list of change suggestions

        Returns:
            The created review

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If the document does not exist
            InvalidStatusTransitionError: If the document is not awaiting review
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(document_id, "document_id")
        self.validator.validate_id(reviewer_id, "reviewer_id")
        decision = self.validator.parse_review_status(status)
        if comments is not None and not isinstance(comments, str):
            raise ValidationError("Comments must be a string", "comments")
        if changes is not None and not isinstance(changes, list):
            raise ValidationError("Changes must be a list", "changes")

        document = self.document_repo.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)

        self.status_machine.check_review(DocumentStatus(document.status), decision)

        try:
            review = Review(
                id=str(uuid.uuid4()),
                document_id=document_id,
                reviewer_id=reviewer_id,
                status=decision.value,
                comments=comments,
                changes=changes or [],
            )
            self.review_repo.create(review)

            document.status = decision.value
            document.review_comments = comments
            document.reviewer_id = reviewer_id
            document.updated_at = utcnow()
            self.document_repo.update(document)

            self.session.commit()
            logger.info(
                "Review submitted",
                extra={"document_id": document_id, "review_status": decision.value},
            )
            return review

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to submit review: {str(e)}", e) from e

    def list_reviews(self, document_id: str) -> list[Review]:
        """Reviews of a document, newest first. Works for deleted documents too."""
        self.validator.validate_id(document_id, "document_id")
        return self.review_repo.get_by_document(document_id)
