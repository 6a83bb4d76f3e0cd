"""Folder model for the documentation tree."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wikidocs.models.base import Base, CreatedAtMixin, new_id


class Folder(Base, CreatedAtMixin):
    """Folder in the presentation tree; ``parent_path`` links to the parent folder."""

    __tablename__ = "folders"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    path: Mapped[str] = mapped_column(String(1000), nullable=False, unique=True)
    parent_path: Mapped[Optional[str]] = mapped_column(
        String(1000), nullable=True, index=True
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id!r}, path={self.path!r})>"
