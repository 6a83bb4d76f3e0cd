"""Synchronization of documents with a GitHub repository.

Pull imports every markdown file of a repository into the document store,
creating or updating documents by path. Push exports one approved document
as a new branch plus a pull request.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wikidocs.config import get_settings
from wikidocs.exceptions import DatabaseError, DuplicateError, RemoteTransportError
from wikidocs.models.base import utcnow
from wikidocs.models.document import Document
from wikidocs.models.github_repo import GithubRepo
from wikidocs.services.document_service import DocumentService
from wikidocs.services.github.naming import (
    branch_name,
    document_path_from_remote,
    is_markdown,
    remote_path_for,
    title_from_filename,
)
from wikidocs.services.github.repo_service import GithubRepoService, resolve_token
from wikidocs.services.github.transport import (
    GithubTransport,
    RemoteEntry,
    RepositoryTransport,
)
from wikidocs.storage.repositories import DocumentRepository

logger = logging.getLogger(__name__)

TransportFactory = Callable[[GithubRepo], RepositoryTransport]


class SyncAction(str, Enum):
    """What a pull did with one remote file."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass
class SyncedDocument:
    action: SyncAction
    document: Document


@dataclass
class SyncResult:
    """Outcome of pulling one repository."""

    repo_id: str
    documents: list[SyncedDocument] = field(default_factory=list)

    @property
    def synced_count(self) -> int:
        return len(self.documents)

    def count(self, action: SyncAction) -> int:
        return sum(1 for d in self.documents if d.action == action)


@dataclass(frozen=True)
class PushResult:
    """Outcome of submitting one document as a pull request."""

    pull_request_number: int
    pull_request_url: str
    branch: str
    github_path: str
    github_sha: str


def default_transport_factory(repo: GithubRepo) -> RepositoryTransport:
    """Build a PyGithub transport using the repository's token."""
    return GithubTransport(
        owner=repo.owner,
        name=repo.name,
        token=resolve_token(repo),
        base_url=get_settings().github_base_url,
    )


class GithubSyncService:
    """Pull and push documents between the store and GitHub."""

    def __init__(
        self,
        session: Session,
        transport_factory: Optional[TransportFactory] = None,
        clock: Optional[Callable[[], datetime]] = None,
        pull_default_status: Optional[str] = None,
    ):
        """
        Args:
            session: Database session
            transport_factory: Builds a transport for a repository; defaults to PyGithub
            clock: Source of the current time, used for branch names
            pull_default_status: Status for documents created by a pull; defaults to settings
        """
        self.session = session
        self.document_repo = DocumentRepository(session)
        self.document_service = DocumentService(session)
        self.repo_service = GithubRepoService(session)
        self.transport_factory = transport_factory or default_transport_factory
        self.clock = clock or utcnow
        self.pull_default_status = self.document_service.validator.parse_document_status(
            pull_default_status or get_settings().pull_default_status
        )

    # Pull

    def sync_from_repo(self, repo_id: str, actor_id: str) -> SyncResult:
        """
        Import every markdown file of a repository's base branch.

        Each document is committed as soon as it is written; a failure part
        way through leaves the documents written so far in place.

        Args:
            repo_id: Registered repository to pull from
            actor_id: User recorded as author of newly created documents

        Returns:
            Per-document actions

        Raises:
            NotFoundError: If the repository is not registered
            RemoteTransportError: If any remote call fails
            DuplicateError: If another document took the path concurrently
            DatabaseError: If writing a document fails
        """
        repo = self.repo_service.get_repo(repo_id)
        transport = self.transport_factory(repo)
        result = SyncResult(repo_id=repo.id)
        logger.info(
            "Starting pull", extra={"repo": repo.full_name, "branch": repo.branch}
        )

        # Depth-first, in listing order, without recursion
        stack: list[RemoteEntry] = list(reversed(transport.list_directory("", repo.branch)))
        while stack:
            entry = stack.pop()
            if entry.type == "dir":
                stack.extend(reversed(transport.list_directory(entry.path, repo.branch)))
            elif entry.type == "file" and is_markdown(entry.name):
                synced = self._pull_file(transport, repo, entry, actor_id)
                if synced is not None:
                    result.documents.append(synced)

        logger.info(
            "Pull finished",
            extra={
                "repo": repo.full_name,
                "created_count": result.count(SyncAction.CREATED),
                "updated_count": result.count(SyncAction.UPDATED),
                "unchanged_count": result.count(SyncAction.UNCHANGED),
            },
        )
        return result

    def _pull_file(
        self,
        transport: RepositoryTransport,
        repo: GithubRepo,
        entry: RemoteEntry,
        actor_id: str,
    ) -> Optional[SyncedDocument]:
        path = document_path_from_remote(entry.path)
        existing = self.document_repo.get_by_path(path)

        # The listing already carries the blob sha; skip the fetch when it matches
        if (
            existing is not None
            and entry.sha
            and existing.github_path == entry.path
            and existing.github_sha == entry.sha
        ):
            logger.debug("Unchanged", extra={"path": entry.path})
            return SyncedDocument(SyncAction.UNCHANGED, existing)

        remote = transport.get_file(entry.path, repo.branch)
        if remote is None:
            logger.warning("File disappeared during pull", extra={"path": entry.path})
            return None
        content = remote.decode_text()

        try:
            if existing is not None:
                existing.content = content
                existing.github_path = entry.path
                existing.github_sha = remote.sha
                existing.updated_at = utcnow()
                self.document_repo.update(existing)
                synced = SyncedDocument(SyncAction.UPDATED, existing)
            else:
                document = Document(
                    id=str(uuid.uuid4()),
                    title=title_from_filename(entry.name),
                    content=content,
                    path=path,
                    status=self.pull_default_status.value,
                    author_id=actor_id,
                    last_editor_id=actor_id,
                    github_path=entry.path,
                    github_sha=remote.sha,
                    meta={},
                )
                self.document_repo.create(document)
                synced = SyncedDocument(SyncAction.CREATED, document)
            self.session.commit()

        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError("Document", "path", path) from e

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to store '{entry.path}': {str(e)}", e) from e

        logger.debug(synced.action.value.capitalize(), extra={"path": entry.path})
        return synced

    # Push

    def submit_to_github(self, document_id: str, actor_id: str) -> PushResult:
        """
        Export an approved document as a branch and pull request.

        If anything fails after the branch was created, the branch is deleted
        again before the error is raised.

        Args:
            document_id: Document to export
            actor_id: User requesting the export

        Returns:
            Pull request number and URL with the stored remote path and sha

        Raises:
            NotFoundError: If the document does not exist
            PreconditionError: If the document is not approved or no repository is active
            RemoteTransportError: If any remote call fails
            DatabaseError: If recording the remote path and sha fails
        """
        document = self.document_service.get_document(document_id)
        self.document_service.require_pushable(document)
        repo = self.repo_service.first_active_repo()
        transport = self.transport_factory(repo)

        branch = branch_name(document.path, self.clock())
        file_path = remote_path_for(document.path, document.github_path)
        logger.info(
            "Submitting document",
            extra={
                "document_id": document.id,
                "repo": repo.full_name,
                "branch": branch,
                "actor_id": actor_id,
            },
        )

        base_sha = transport.get_branch_sha(repo.branch)
        transport.create_branch(branch, base_sha)
        try:
            # Updating an existing file requires its current sha
            existing = transport.get_file(file_path, repo.branch)
            new_sha = transport.put_file(
                file_path,
                f"Update documentation: {document.title}",
                document.content,
                branch,
                sha=existing.sha if existing is not None else None,
            )
            pull = transport.create_pull_request(
                title=f"Update documentation: {document.title}",
                body=self._pull_request_body(document),
                head=branch,
                base=repo.branch,
            )
        except Exception:
            self._delete_branch(transport, branch)
            raise

        try:
            document.github_path = file_path
            document.github_sha = new_sha
            document.updated_at = utcnow()
            self.document_repo.update(document)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to record push of document: {str(e)}", e) from e

        logger.info(
            "Pull request created",
            extra={"document_id": document.id, "pull_request": pull.number},
        )
        return PushResult(
            pull_request_number=pull.number,
            pull_request_url=pull.url,
            branch=branch,
            github_path=file_path,
            github_sha=new_sha,
        )

    @staticmethod
    def _pull_request_body(document: Document) -> str:
        return (
            f"This pull request updates the documentation for {document.title}.\n\n"
            f"**Changes:**\n"
            f"- Updated content for {document.path}\n\n"
            f"This pull request was automatically generated by Wiki Docs."
        )

    @staticmethod
    def _delete_branch(transport: RepositoryTransport, branch: str) -> None:
        try:
            transport.delete_branch(branch)
        except RemoteTransportError:
            logger.exception("Failed to delete orphaned branch", extra={"branch": branch})
