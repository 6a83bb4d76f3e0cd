"""Shared pytest fixtures and test utilities for Wiki Docs tests."""

import base64
import os
import tempfile
from typing import Generator, Optional

import pytest

from wikidocs.exceptions import RemoteTransportError
from wikidocs.models.status import DocumentStatus
from wikidocs.services.document_service import DocumentService
from wikidocs.services.folder_service import FolderService
from wikidocs.services.github.repo_service import GithubRepoService
from wikidocs.services.review_service import ReviewService
from wikidocs.services.github.transport import (
    PullRequestRef,
    RemoteEntry,
    RemoteFile,
    RepositoryTransport,
)
from wikidocs.services.user_service import UserService
from wikidocs.storage.database import Database, reset_db


@pytest.fixture(scope="function")
def temp_db() -> Generator[Database, None, None]:
    """
    Create a temporary SQLite database for testing.

    Yields:
        Database instance with tables created
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    reset_db()

    database = Database(f"sqlite:///{db_path}")
    database.create_tables()

    yield database

    database.drop_tables()
    database.dispose()
    reset_db()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_session(temp_db):
    """Get a database session from temp_db."""
    with temp_db.session() as session:
        yield session


@pytest.fixture
def admin(db_session):
    """The administrative user."""
    return UserService(db_session).ensure_admin()


@pytest.fixture
def document_service(db_session):
    return DocumentService(db_session, enforce_transitions=True)


@pytest.fixture
def review_service(db_session):
    return ReviewService(db_session, enforce_transitions=True)


@pytest.fixture
def folder_service(db_session):
    return FolderService(db_session)


@pytest.fixture
def repo_service(db_session):
    return GithubRepoService(db_session)


@pytest.fixture
def approved_document(document_service, review_service, admin):
    """A document that has been through review and approved."""
    doc = document_service.create_document(
        title="Auth", path="api/auth", author_id=admin.id, content="# Auth\n\nTokens."
    )
    document_service.update_document(
        doc.id, editor_id=admin.id, status=DocumentStatus.PENDING_REVIEW.value
    )
    review_service.submit_review(doc.id, "approved", reviewer_id=admin.id)
    return document_service.get_document(doc.id)


class FakeTransport(RepositoryTransport):
    """
    In-memory repository host.

    ``files`` maps remote paths to (content, sha). Directories are implied by
    the paths. Every call is appended to ``calls``.
    """

    def __init__(self, files: Optional[dict[str, tuple[str, str]]] = None):
        self.files: dict[str, tuple[str, str]] = dict(files or {})
        self.branches: dict[str, str] = {"main": "base-sha"}
        self.pulls: list[dict] = []
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self.written: dict[str, dict] = {}
        self._sha_counter = 0

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise RemoteTransportError(f"{name} failed", status=502)

    def list_directory(self, path, ref):
        self._record("list_directory", path, ref)
        prefix = f"{path}/" if path else ""
        entries: dict[str, RemoteEntry] = {}
        for file_path, (_, sha) in sorted(self.files.items()):
            if not file_path.startswith(prefix):
                continue
            rest = file_path[len(prefix):]
            head = rest.split("/", 1)[0]
            full = f"{prefix}{head}"
            if "/" in rest:
                entries.setdefault(full, RemoteEntry(path=full, name=head, type="dir"))
            else:
                entries[full] = RemoteEntry(path=full, name=head, type="file", sha=sha)
        return list(entries.values())

    def get_file(self, path, ref):
        self._record("get_file", path, ref)
        if path not in self.files:
            return None
        content, sha = self.files[path]
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
        return RemoteFile(path=path, sha=sha, content=encoded)

    def get_branch_sha(self, branch):
        self._record("get_branch_sha", branch)
        return self.branches[branch]

    def create_branch(self, name, sha):
        self._record("create_branch", name, sha)
        self.branches[name] = sha

    def delete_branch(self, name):
        self._record("delete_branch", name)
        self.branches.pop(name, None)

    def put_file(self, path, message, content, branch, sha=None):
        self._record("put_file", path, message, content, branch, sha)
        self._sha_counter += 1
        new_sha = f"blob-{self._sha_counter}"
        self.written[path] = {"content": content, "branch": branch, "sha": sha}
        return new_sha

    def create_pull_request(self, title, body, head, base):
        self._record("create_pull_request", title, body, head, base)
        number = len(self.pulls) + 1
        self.pulls.append({"title": title, "body": body, "head": head, "base": base})
        return PullRequestRef(number=number, url=f"https://github.com/acme/docs/pull/{number}")

    def called(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def transport_factory(fake_transport):
    """Factory handing out the shared fake transport; records requested repos."""

    def factory(repo):
        factory.repos.append(repo)
        return fake_transport

    factory.repos = []
    return factory
