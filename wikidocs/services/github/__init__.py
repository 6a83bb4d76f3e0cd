"""GitHub integration: repository registration, transport and sync engine."""

from wikidocs.services.github.repo_service import GithubRepoService
from wikidocs.services.github.sync_service import (
    GithubSyncService,
    PushResult,
    SyncAction,
    SyncResult,
)
from wikidocs.services.github.transport import (
    GithubTransport,
    PullRequestRef,
    RemoteEntry,
    RemoteFile,
    RepositoryTransport,
)

__all__ = [
    "GithubRepoService",
    "GithubSyncService",
    "GithubTransport",
    "PullRequestRef",
    "PushResult",
    "RemoteEntry",
    "RemoteFile",
    "RepositoryTransport",
    "SyncAction",
    "SyncResult",
]
