"""User endpoints."""

from fastapi import APIRouter, Depends

from wikidocs.api.dependencies import get_actor
from wikidocs.api.serializers import serialize_model
from wikidocs.models.user import User

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me")
def current_user(actor: User = Depends(get_actor)):
    return serialize_model(actor)
