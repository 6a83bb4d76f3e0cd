"""Tests for GitHub repository registration and token resolution."""

import time
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.unit

from wikidocs.exceptions import (
    DuplicateError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from wikidocs.models.github_repo import GithubRepo
from wikidocs.services.github.repo_service import resolve_token


class TestGithubRepoService:
    def test_create_repo(self, repo_service):
        repo = repo_service.create_repo(owner="acme", name="docs")
        assert repo.full_name == "acme/docs"
        assert repo.branch == "main"
        assert repo.is_active is True
        assert repo.token_env is None

    def test_duplicate_repo_case_insensitive(self, repo_service):
        repo_service.create_repo(owner="acme", name="docs")
        with pytest.raises(DuplicateError):
            repo_service.create_repo(owner="ACME", name="Docs")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"owner": "", "name": "docs"},
            {"owner": "acme corp", "name": "docs"},
            {"owner": "acme", "name": "docs/extra"},
            {"owner": "acme", "name": "docs", "branch": "my branch"},
            {"owner": "acme", "name": "docs", "token_env": "1BAD"},
        ],
    )
    def test_invalid_fields(self, repo_service, kwargs):
        with pytest.raises(ValidationError):
            repo_service.create_repo(**kwargs)

    def test_get_repo_not_found(self, repo_service):
        with pytest.raises(NotFoundError):
            repo_service.get_repo("missing")

    def test_list_active_only(self, repo_service):
        active = repo_service.create_repo(owner="acme", name="docs")
        repo_service.create_repo(owner="acme", name="old", is_active=False)
        assert [r.id for r in repo_service.list_repos()] == [active.id]
        assert len(repo_service.list_repos(active_only=False)) == 2

    def test_first_active_repo_is_oldest(self, repo_service):
        repo_service.create_repo(owner="acme", name="archive", is_active=False)
        first = repo_service.create_repo(owner="acme", name="docs")
        time.sleep(0.01)
        repo_service.create_repo(owner="acme", name="handbook")
        assert repo_service.first_active_repo().id == first.id

    def test_first_active_repo_none(self, repo_service):
        repo_service.create_repo(owner="acme", name="docs", is_active=False)
        with pytest.raises(PreconditionError, match="No active GitHub repositories"):
            repo_service.first_active_repo()


class TestResolveToken:
    def test_repository_variable(self, monkeypatch):
        monkeypatch.setenv("ACME_DOCS_TOKEN", "secret")
        repo = GithubRepo(owner="acme", name="docs", token_env="ACME_DOCS_TOKEN")
        assert resolve_token(repo) == "secret"

    def test_repository_variable_missing(self, monkeypatch):
        monkeypatch.delenv("ACME_DOCS_TOKEN", raising=False)
        repo = GithubRepo(owner="acme", name="docs", token_env="ACME_DOCS_TOKEN")
        with pytest.raises(PreconditionError):
            resolve_token(repo)

    def test_falls_back_to_default_token(self):
        repo = GithubRepo(owner="acme", name="docs")
        with patch("wikidocs.services.github.repo_service.get_settings") as mock_settings:
            mock_settings.return_value.get_github_token.return_value = "default-token"
            assert resolve_token(repo) == "default-token"
