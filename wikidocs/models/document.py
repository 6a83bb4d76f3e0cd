"""Document model for storing markdown documents."""

from typing import Any, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wikidocs.models.base import Base, TimestampMixin, new_id
from wikidocs.models.status import DocumentStatus


class Document(Base, TimestampMixin):
    """Markdown document with a review-gated lifecycle.

    ``path`` is the logical location ("folder/subfolder/name"). The folder a
    document belongs to is derived from the directory prefix of its path; there
    is no foreign key to ``folders``.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    path: Mapped[str] = mapped_column(String(1000), nullable=False, unique=True, index=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DocumentStatus.DRAFT.value, index=True
    )
    author_id: Mapped[str] = mapped_column(String(255), nullable=False)
    last_editor_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reviewer_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    review_comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    github_path: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    # Set only after a successful remote read or write
    github_sha: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    # Use 'meta' as Python attribute name to avoid SQLAlchemy reserved name conflict
    # Database column is still 'metadata' for compatibility
    meta: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=dict
    )

    @property
    def folder_path(self) -> Optional[str]:
        """Directory prefix of the document path, or None at the root."""
        if "/" not in self.path:
            return None
        return self.path.rsplit("/", 1)[0]

    def __repr__(self) -> str:
        return f"<Document(id={self.id!r}, path={self.path!r}, status={self.status!r})>"
