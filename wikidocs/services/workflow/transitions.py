"""Document status state machine.

    draft ──► pending_review ──► approved
      ▲            │    ▲   └──► rejected
      └────────────┘    │
                   needs_revision ◄──┘

Edges into approved, needs_revision and rejected are taken only by
submitting a review. Editing the content of an approved document moves it
back to draft. A pull overwrites content without touching the status.
"""

from wikidocs.exceptions import InvalidStatusTransitionError, PreconditionError
from wikidocs.models.status import DocumentStatus, ReviewStatus

# Edges an author may take with a plain status update
AUTHOR_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.DRAFT: frozenset({DocumentStatus.PENDING_REVIEW}),
    DocumentStatus.PENDING_REVIEW: frozenset({DocumentStatus.DRAFT}),
    DocumentStatus.NEEDS_REVISION: frozenset({DocumentStatus.PENDING_REVIEW}),
    DocumentStatus.APPROVED: frozenset(),
    DocumentStatus.REJECTED: frozenset(),
}

# Edges taken by recording a review decision
REVIEW_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING_REVIEW: frozenset(
        DocumentStatus(s.value) for s in ReviewStatus
    ),
}

INITIAL_STATUS = DocumentStatus.DRAFT


class StatusMachine:
    """Validates document status changes.

    With ``enforce`` off every status of the vocabulary is accepted, which
    leaves the workflow to client convention.
    """

    def __init__(self, enforce: bool = True):
        self.enforce = enforce

    def check_initial(self, status: DocumentStatus) -> None:
        """Validate the status of a newly created document."""
        if self.enforce and status != INITIAL_STATUS:
            raise PreconditionError(
                f"New documents must start as '{INITIAL_STATUS.value}', not '{status.value}'"
            )

    def check_update(
        self, current: DocumentStatus, target: DocumentStatus, content: str
    ) -> None:
        """
        Validate a status change requested through a document update.

        Args:
            current: Status the document has now
            target: Requested status
            content: Document content after the update

        Raises:
            InvalidStatusTransitionError: If the edge is not declared
            PreconditionError: If the document is submitted for review without content
        """
        if current == target:
            return
        if target == DocumentStatus.PENDING_REVIEW and not content.strip():
            raise PreconditionError("Document content is required before requesting review")
        if self.enforce and target not in AUTHOR_TRANSITIONS.get(current, frozenset()):
            raise InvalidStatusTransitionError(current.value, target.value)

    def check_review(self, current: DocumentStatus, decision: ReviewStatus) -> None:
        """Validate that a review decision may be applied to a document."""
        target = DocumentStatus(decision.value)
        if self.enforce and target not in REVIEW_TRANSITIONS.get(current, frozenset()):
            raise InvalidStatusTransitionError(current.value, target.value)

    def status_after_content_edit(self, current: DocumentStatus) -> DocumentStatus | None:
        """
        Status a document falls back to when its content is edited.

        Returns None when the status stays as it is.
        """
        if self.enforce and current == DocumentStatus.APPROVED:
            return INITIAL_STATUS
        return None

    @staticmethod
    def can_push(status: DocumentStatus) -> bool:
        """Only approved documents may be exported to a remote repository."""
        return status == DocumentStatus.APPROVED
