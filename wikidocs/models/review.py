"""Review model recording reviewer decisions."""

from typing import Any, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wikidocs.models.base import Base, CreatedAtMixin, new_id


class Review(Base, CreatedAtMixin):
    """Append-only review decision against a document.

    ``document_id`` is not a foreign key: documents are deleted without
    cascading, so a review may outlive its document.
    """

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=new_id)
    document_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    reviewer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    changes: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True, default=list)

    def __repr__(self) -> str:
        return f"<Review(id={self.id!r}, document_id={self.document_id!r}, status={self.status!r})>"
