"""GitHub repository registration and sync endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wikidocs.api.dependencies import get_actor, get_session, get_transport_factory
from wikidocs.api.schemas import GithubRepoCreate
from wikidocs.api.serializers import (
    serialize_model,
    serialize_push_result,
    serialize_sync_result,
)
from wikidocs.models.user import User
from wikidocs.services.github import GithubRepoService, GithubSyncService
from wikidocs.services.github.sync_service import TransportFactory

router = APIRouter(prefix="/github", tags=["GitHub"])


@router.get("/repos")
def list_repos(session: Session = Depends(get_session)):
    """Active repositories."""
    return [serialize_model(repo) for repo in GithubRepoService(session).list_repos()]


@router.post("/repos", status_code=status.HTTP_201_CREATED)
def create_repo(payload: GithubRepoCreate, session: Session = Depends(get_session)):
    repo = GithubRepoService(session).create_repo(
        owner=payload.owner,
        name=payload.name,
        branch=payload.branch,
        token_env=payload.token_env,
        is_active=payload.is_active,
    )
    return serialize_model(repo)


@router.post("/sync/{repo_id}")
def sync_from_repo(
    repo_id: str,
    actor: User = Depends(get_actor),
    session: Session = Depends(get_session),
    transport_factory: Optional[TransportFactory] = Depends(get_transport_factory),
):
    """Pull every markdown file of the repository into the document store."""
    service = GithubSyncService(session, transport_factory=transport_factory)
    return serialize_sync_result(service.sync_from_repo(repo_id, actor_id=actor.id))


@router.post("/submit/{document_id}")
def submit_to_github(
    document_id: str,
    actor: User = Depends(get_actor),
    session: Session = Depends(get_session),
    transport_factory: Optional[TransportFactory] = Depends(get_transport_factory),
):
    """Open a pull request with the content of an approved document."""
    service = GithubSyncService(session, transport_factory=transport_factory)
    return serialize_push_result(service.submit_to_github(document_id, actor_id=actor.id))
