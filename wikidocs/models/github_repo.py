"""GitHub repository model for sync targets."""

from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from wikidocs.models.base import Base, CreatedAtMixin, new_id


class GithubRepo(Base, CreatedAtMixin):
    """Remote repository that documents are pulled from and pushed to.

    No credential is stored on the row. ``token_env`` optionally names an
    environment variable holding the token for this repository.
    """

    __tablename__ = "github_repos"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=new_id)
    owner: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    branch: Mapped[str] = mapped_column(String(255), nullable=False, default="main")
    token_env: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True
    )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __repr__(self) -> str:
        return f"<GithubRepo(id={self.id!r}, full_name={self.full_name!r}, branch={self.branch!r})>"
