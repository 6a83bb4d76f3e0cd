"""FastAPI dependencies: database session, acting user, remote transport."""

from typing import Generator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from wikidocs.config import get_settings
from wikidocs.models.user import User
from wikidocs.services.github.sync_service import TransportFactory
from wikidocs.services.user_service import UserService
from wikidocs.storage.database import Database, get_db


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    return database if database is not None else get_db()


def get_session(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """One session, and one transaction scope, per request."""
    with database.session() as session:
        yield session


def get_actor(
    x_user: Optional[str] = Header(None),
    session: Session = Depends(get_session),
) -> User:
    """
    The user a request acts as.

    Identity is taken from the ``X-User`` header and falls back to the
    administrative user.
    """
    username = x_user or get_settings().admin_username
    return UserService(session).get_by_username(username)


def get_transport_factory() -> Optional[TransportFactory]:
    """Transport factory for sync operations; None selects PyGithub."""
    return None
