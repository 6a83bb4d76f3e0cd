"""Review endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wikidocs.api.dependencies import get_actor, get_session
from wikidocs.api.schemas import ReviewCreate
from wikidocs.api.serializers import serialize_model
from wikidocs.models.user import User
from wikidocs.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_review(
    payload: ReviewCreate,
    actor: User = Depends(get_actor),
    session: Session = Depends(get_session),
):
    review = ReviewService(session).submit_review(
        document_id=payload.document_id,
        status=payload.status,
        reviewer_id=actor.id,
        comments=payload.comments,
        changes=payload.changes,
    )
    return serialize_model(review)


@router.get("/document/{document_id}")
def reviews_for_document(document_id: str, session: Session = Depends(get_session)):
    return [serialize_model(r) for r in ReviewService(session).list_reviews(document_id)]
