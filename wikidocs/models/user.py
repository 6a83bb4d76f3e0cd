"""User model for authors, editors and reviewers."""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from wikidocs.models.base import Base, CreatedAtMixin, new_id
from wikidocs.models.status import UserRole


class User(Base, CreatedAtMixin):
    """User account referenced by documents and reviews."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=UserRole.EDITOR.value
    )
    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r})>"
