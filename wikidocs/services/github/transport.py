"""Remote repository transport.

The sync engine talks to the hosting service only through
``RepositoryTransport``. ``GithubTransport`` implements it with PyGithub; any
REST API offering the same operations can be substituted.
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import requests
from github import Auth, Github, GithubException, UnknownObjectException

from wikidocs.config import DEFAULT_GITHUB_BASE_URL
from wikidocs.exceptions import RemoteTransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteEntry:
    """One item of a directory listing."""

    path: str
    name: str
    type: str  # "file", "dir", "symlink" or "submodule"
    sha: Optional[str] = None


@dataclass(frozen=True)
class RemoteFile:
    """File content as delivered by the remote, still transport-encoded."""

    path: str
    sha: str
    content: str
    encoding: str = "base64"

    def decode_text(self) -> str:
        """Decode the transport encoding into UTF-8 text."""
        if self.encoding != "base64":
            raise RemoteTransportError(
                f"Unsupported content encoding '{self.encoding}' for '{self.path}'"
            )
        try:
            raw = base64.b64decode(self.content)
        except (binascii.Error, ValueError) as e:
            raise RemoteTransportError(
                f"Malformed content for '{self.path}'", original_error=e
            ) from e
        return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class PullRequestRef:
    """Identifies a created pull request."""

    number: int
    url: str


class RepositoryTransport(ABC):
    """Operations the sync engine needs from a repository host."""

    @abstractmethod
    def list_directory(self, path: str, ref: str) -> list[RemoteEntry]:
        """List a directory ("" for the root) at a ref."""

    @abstractmethod
    def get_file(self, path: str, ref: str) -> Optional[RemoteFile]:
        """Get a file at a ref, or None if it does not exist."""

    @abstractmethod
    def get_branch_sha(self, branch: str) -> str:
        """Tip commit sha of a branch."""

    @abstractmethod
    def create_branch(self, name: str, sha: str) -> None:
        """Create a branch pointing at ``sha``."""

    @abstractmethod
    def delete_branch(self, name: str) -> None:
        """Delete a branch."""

    @abstractmethod
    def put_file(
        self,
        path: str,
        message: str,
        content: str,
        branch: str,
        sha: Optional[str] = None,
    ) -> str:
        """
        Create or update a file on a branch.

        ``sha`` must be the current blob sha when the file already exists.

        Returns:
            Blob sha of the written file
        """

    @abstractmethod
    def create_pull_request(
        self, title: str, body: str, head: str, base: str
    ) -> PullRequestRef:
        """Open a pull request from ``head`` onto ``base``."""


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Re-raise PyGithub and network failures as RemoteTransportError."""
    try:
        yield
    except RemoteTransportError:
        raise
    except GithubException as e:
        raise RemoteTransportError(
            f"GitHub API error during {operation} (status {e.status})",
            status=e.status,
            original_error=e,
        ) from e
    except requests.RequestException as e:
        raise RemoteTransportError(
            f"Network error during {operation}", original_error=e
        ) from e


class GithubTransport(RepositoryTransport):
    """RepositoryTransport backed by the GitHub REST API via PyGithub."""

    def __init__(
        self,
        owner: str,
        name: str,
        token: Optional[str] = None,
        base_url: str = DEFAULT_GITHUB_BASE_URL,
    ):
        """
        Args:
            owner: Repository owner (user or organisation)
            name: Repository name
            token: Personal access or OAuth token; anonymous access if None
            base_url: API root, for GitHub Enterprise installations
        """
        self.full_name = f"{owner}/{name}"
        if token:
            self.github = Github(auth=Auth.Token(token), base_url=base_url)
        else:
            self.github = Github(base_url=base_url)
        self._repo = None

    @property
    def repo(self):
        if self._repo is None:
            with _translate_errors(f"get repository {self.full_name}"):
                self._repo = self.github.get_repo(self.full_name)
        return self._repo

    def list_directory(self, path: str, ref: str) -> list[RemoteEntry]:
        with _translate_errors(f"list '{path or '/'}'"):
            contents = self.repo.get_contents(path, ref=ref)
        if not isinstance(contents, list):
            contents = [contents]
        return [
            RemoteEntry(path=item.path, name=item.name, type=item.type, sha=item.sha)
            for item in contents
        ]

    def get_file(self, path: str, ref: str) -> Optional[RemoteFile]:
        try:
            with _translate_errors(f"read '{path}'"):
                item = self.repo.get_contents(path, ref=ref)
        except RemoteTransportError as e:
            if isinstance(e.original_error, UnknownObjectException) or e.status == 404:
                return None
            raise

        if isinstance(item, list):
            raise RemoteTransportError(f"'{path}' is a directory, not a file")

        content, encoding = item.content, item.encoding
        # Files over 1 MB come back without inline content
        if not content or encoding != "base64":
            with _translate_errors(f"read blob of '{path}'"):
                blob = self.repo.get_git_blob(item.sha)
            content, encoding = blob.content, blob.encoding
        return RemoteFile(path=item.path, sha=item.sha, content=content, encoding=encoding)

    def get_branch_sha(self, branch: str) -> str:
        with _translate_errors(f"read branch '{branch}'"):
            return self.repo.get_git_ref(f"heads/{branch}").object.sha

    def create_branch(self, name: str, sha: str) -> None:
        with _translate_errors(f"create branch '{name}'"):
            self.repo.create_git_ref(ref=f"refs/heads/{name}", sha=sha)

    def delete_branch(self, name: str) -> None:
        with _translate_errors(f"delete branch '{name}'"):
            self.repo.get_git_ref(f"heads/{name}").delete()

    def put_file(
        self,
        path: str,
        message: str,
        content: str,
        branch: str,
        sha: Optional[str] = None,
    ) -> str:
        with _translate_errors(f"write '{path}'"):
            if sha:
                result = self.repo.update_file(path, message, content, sha, branch=branch)
            else:
                result = self.repo.create_file(path, message, content, branch=branch)
        return result["content"].sha

    def create_pull_request(
        self, title: str, body: str, head: str, base: str
    ) -> PullRequestRef:
        with _translate_errors(f"create pull request {head} -> {base}"):
            pull = self.repo.create_pull(title=title, body=body, head=head, base=base)
        return PullRequestRef(number=pull.number, url=pull.html_url)
