"""Initial data for a fresh database."""

import logging

from sqlalchemy.orm import Session

from wikidocs.services.document_service import DocumentService
from wikidocs.services.folder_service import FolderService
from wikidocs.services.user_service import UserService
from wikidocs.storage.repositories import DocumentRepository, FolderRepository

logger = logging.getLogger(__name__)

SAMPLE_FOLDERS = [
    {"name": "API Documentation", "path": "api", "description": "API related documentation"},
    {"name": "User Guides", "path": "guides", "description": "User guides and tutorials"},
]

SAMPLE_DOCUMENT = {
    "title": "Authentication Guide",
    "path": "api/authentication",
    "content": "# Authentication Guide\n\nThis guide covers authentication methods...",
}


def seed_database(session: Session, include_samples: bool = False) -> None:
    """
    Create the administrative user and, optionally, sample content.

    Safe to run repeatedly: existing rows are left alone.
    """
    admin = UserService(session).ensure_admin()
    if not include_samples:
        return

    folder_repo = FolderRepository(session)
    folder_service = FolderService(session)
    for folder in SAMPLE_FOLDERS:
        if folder_repo.get_by_path(folder["path"]) is None:
            folder_service.create_folder(**folder)

    if DocumentRepository(session).get_by_path(SAMPLE_DOCUMENT["path"]) is None:
        DocumentService(session).create_document(author_id=admin.id, **SAMPLE_DOCUMENT)
    logger.info("Sample data seeded")
