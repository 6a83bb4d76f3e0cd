"""Document endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from wikidocs.api.dependencies import get_actor, get_session
from wikidocs.api.schemas import DocumentCreate, DocumentUpdate
from wikidocs.api.serializers import serialize_model
from wikidocs.exceptions import NotFoundError
from wikidocs.models.user import User
from wikidocs.services.document_service import DocumentService

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get("")
def list_documents(session: Session = Depends(get_session)):
    return [serialize_model(doc) for doc in DocumentService(session).list_documents()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_document(
    payload: DocumentCreate,
    actor: User = Depends(get_actor),
    session: Session = Depends(get_session),
):
    document = DocumentService(session).create_document(
        title=payload.title,
        path=payload.path,
        author_id=actor.id,
        content=payload.content,
        status=payload.status,
        metadata=payload.metadata,
    )
    return serialize_model(document)


# Declared before "/{document_id}" so the literal segments win
@router.get("/search")
def search_documents(
    q: str = Query("", description="Substring matched against title, content and path"),
    session: Session = Depends(get_session),
):
    return [serialize_model(doc) for doc in DocumentService(session).search_documents(q)]


@router.get("/status/{document_status}")
def documents_by_status(document_status: str, session: Session = Depends(get_session)):
    documents = DocumentService(session).get_documents_by_status(document_status)
    return [serialize_model(doc) for doc in documents]


@router.get("/{document_id}")
def get_document(document_id: str, session: Session = Depends(get_session)):
    return serialize_model(DocumentService(session).get_document(document_id))


@router.put("/{document_id}")
def update_document(
    document_id: str,
    payload: DocumentUpdate,
    actor: User = Depends(get_actor),
    session: Session = Depends(get_session),
):
    document = DocumentService(session).update_document(
        document_id,
        editor_id=actor.id,
        title=payload.title,
        content=payload.content,
        path=payload.path,
        status=payload.status,
        metadata=payload.metadata,
    )
    return serialize_model(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(document_id: str, session: Session = Depends(get_session)):
    if not DocumentService(session).delete_document(document_id):
        raise NotFoundError("Document", document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
