"""User lookups and the administrative account."""

import logging
import uuid

from sqlalchemy.orm import Session

from wikidocs.config import get_settings
from wikidocs.exceptions import DatabaseError, NotFoundError, ValidationError
from wikidocs.models.status import UserRole
from wikidocs.models.user import User
from wikidocs.storage.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user accounts."""

    def __init__(self, session: Session):
        self.session = session
        self.user_repo = UserRepository(session)

    def get_user(self, user_id: str) -> User:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def get_by_username(self, username: str) -> User:
        """
        Resolve a user by username.

        Raises:
            ValidationError: If username is empty
            NotFoundError: If no user has that username
        """
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("Username is required", "username")
        user = self.user_repo.get_by_username(username)
        if user is None:
            raise NotFoundError("User", username)
        return user

    def ensure_admin(self, username: str | None = None, email: str | None = None) -> User:
        """Return the administrative user, creating it on first use."""
        settings = get_settings()
        username = username or settings.admin_username
        email = email or settings.admin_email

        user = self.user_repo.get_by_username(username)
        if user is not None:
            return user

        try:
            user = User(
                id=str(uuid.uuid4()),
                username=username,
                email=email,
                role=UserRole.ADMIN.value,
            )
            self.user_repo.create(user)
            self.session.commit()
            logger.info("Administrative user created", extra={"username": username})
            return user

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create admin user: {str(e)}", e) from e
