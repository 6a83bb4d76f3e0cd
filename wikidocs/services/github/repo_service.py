"""Registration of GitHub repositories used as sync targets."""

import os
import re
import uuid

from sqlalchemy.orm import Session

from wikidocs.config import get_settings
from wikidocs.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from wikidocs.models.github_repo import GithubRepo
from wikidocs.storage.repositories import GithubRepoRepository

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_ENV_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GithubRepoService:
    """Service layer for GitHub repository configurations."""

    def __init__(self, session: Session):
        self.session = session
        self.repo_repo = GithubRepoRepository(session)

    def create_repo(
        self,
        owner: str,
        name: str,
        branch: str = "main",
        token_env: str | None = None,
        is_active: bool = True,
    ) -> GithubRepo:
        """
        Register a repository.

        Args:
            owner: Repository owner
            name: Repository name
            branch: Base branch documents are pulled from and PRs target
            token_env: Name of the environment variable holding this
                       repository's token; None uses GITHUB_TOKEN
            is_active: Whether sync operations may target the repository

        Raises:
            ValidationError: If a field is invalid
            DuplicateError: If owner/name is already registered
            DatabaseError: If database operation fails
        """
        for field, value in (("owner", owner), ("name", name)):
            if not isinstance(value, str) or not _NAME_PATTERN.match(value):
                raise ValidationError(f"Invalid repository {field}", field)
        if not isinstance(branch, str) or not branch.strip() or " " in branch:
            raise ValidationError("Invalid branch name", "branch")
        if token_env is not None and not _ENV_PATTERN.match(token_env):
            raise ValidationError("Invalid token environment variable name", "token_env")

        full_name = f"{owner}/{name}"
        if any(r.full_name.lower() == full_name.lower() for r in self.repo_repo.get_all()):
            raise DuplicateError("GithubRepo", "full_name", full_name)

        try:
            repo = GithubRepo(
                id=str(uuid.uuid4()),
                owner=owner,
                name=name,
                branch=branch,
                token_env=token_env,
                is_active=is_active,
            )
            self.repo_repo.create(repo)
            self.session.commit()
            return repo

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create repository: {str(e)}", e) from e

    def get_repo(self, repo_id: str) -> GithubRepo:
        repo = self.repo_repo.get_by_id(repo_id)
        if repo is None:
            raise NotFoundError("GithubRepo", repo_id)
        return repo

    def list_repos(self, active_only: bool = True) -> list[GithubRepo]:
        """Registered repositories, oldest first."""
        if active_only:
            return self.repo_repo.get_active()
        return self.repo_repo.get_all()

    def first_active_repo(self) -> GithubRepo:
        """
        The repository pushes go to.

        Raises:
            PreconditionError: If no repository is active
        """
        repos = self.repo_repo.get_active()
        if not repos:
            raise PreconditionError("No active GitHub repositories configured")
        return repos[0]


def resolve_token(repo: GithubRepo) -> str | None:
    """
    Token for a repository: its own environment variable, else GITHUB_TOKEN.

    Raises:
        PreconditionError: If the repository names a variable that is not set
    """
    if repo.token_env:
        token = os.environ.get(repo.token_env)
        if not token:
            raise PreconditionError(
                f"Environment variable '{repo.token_env}' for {repo.full_name} is not set"
            )
        return token
    return get_settings().get_github_token()
