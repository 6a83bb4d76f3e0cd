"""Folder endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wikidocs.api.dependencies import get_session
from wikidocs.api.schemas import FolderCreate
from wikidocs.api.serializers import serialize_folder_tree, serialize_model
from wikidocs.services.folder_service import FolderService

router = APIRouter(prefix="/folders", tags=["Folders"])


@router.get("")
def list_folders(session: Session = Depends(get_session)):
    return [serialize_model(folder) for folder in FolderService(session).list_folders()]


@router.get("/tree")
def folder_tree(session: Session = Depends(get_session)):
    """Folders nested by parent path, each with the documents under it."""
    return [serialize_folder_tree(node) for node in FolderService(session).get_folder_tree()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_folder(payload: FolderCreate, session: Session = Depends(get_session)):
    folder = FolderService(session).create_folder(
        name=payload.name,
        path=payload.path,
        parent_path=payload.parent_path,
        description=payload.description,
    )
    return serialize_model(folder)
