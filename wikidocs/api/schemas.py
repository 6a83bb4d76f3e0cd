"""Pydantic request schemas. Payload keys are camelCase."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Accepts camelCase or snake_case keys and ignores unknown ones."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class DocumentCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=500)
    path: str = Field(..., min_length=1)
    content: str = ""
    status: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class DocumentUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    path: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    status: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class FolderCreate(RequestModel):
    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    parent_path: Optional[str] = None
    description: Optional[str] = None


class ReviewCreate(RequestModel):
    document_id: str = Field(..., min_length=1)
    status: Literal["approved", "needs_revision", "rejected"]
    comments: Optional[str] = None
    changes: Optional[list[Any]] = None


class GithubRepoCreate(RequestModel):
    owner: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    branch: str = "main"
    token_env: Optional[str] = None
    is_active: bool = True
