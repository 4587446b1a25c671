"""Document endpoints - POST /docs, GET /docs, GET /docs/{id}, GET /docs/{id}/suggestions."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.docreview.api.auth import require_user
from backend.docreview.api.deps import Repositories, get_repositories
from backend.docreview.db.context import RequestContext
from backend.docreview.models.docs import Document, DocumentKind
from backend.docreview.models.suggestions import PersistedSuggestion

router = APIRouter(prefix="/docs", tags=["docs"])


class SaveDocRequest(BaseModel):
    """Request body for POST /docs."""

    title: str = Field(..., min_length=1, max_length=200, description="Document title")
    content: str | None = Field(None, description="Document text")
    kind: DocumentKind = Field("text", description="Document kind")
    id: uuid.UUID | None = Field(
        None, description="Existing document ID to save a new version of"
    )


class DocListResponse(BaseModel):
    """Response for GET /docs."""

    docs: list[Document]


class SuggestionListResponse(BaseModel):
    """Response for GET /docs/{id}/suggestions."""

    suggestions: list[PersistedSuggestion]


def _parse_document_id(document_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(document_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid document id format",
        ) from e


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def save_doc(
    request: SaveDocRequest,
    ctx: Annotated[RequestContext, Depends(require_user)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> Document:
    """Save a document, or a new version of an existing one.

    Args:
        request: Document body
        ctx: Request context (user_id required)
        repos: Repositories

    Returns:
        Saved document version
    """
    assert ctx.user_id is not None

    if request.id is not None:
        existing = await repos.documents.get_document_by_id(request.id)
        if existing is not None and existing.user_id != ctx.user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied",
            )

    return await repos.documents.save_document(
        user_id=ctx.user_id,
        title=request.title,
        content=request.content,
        kind=request.kind,
        document_id=request.id,
    )


@router.get("", response_model=DocListResponse)
async def list_docs(
    ctx: Annotated[RequestContext, Depends(require_user)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> DocListResponse:
    """List the latest version of each of the caller's documents."""
    assert ctx.user_id is not None
    docs = await repos.documents.list_documents(ctx.user_id)
    return DocListResponse(docs=docs)


async def _get_owned_document(
    repos: Repositories, ctx: RequestContext, document_id: str
) -> Document:
    """Fetch the latest version, hiding documents owned by other users."""
    document = await repos.documents.get_document_by_id(_parse_document_id(document_id))

    if document is None or document.user_id != ctx.user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )

    return document


@router.get("/{document_id}", response_model=Document)
async def get_doc(
    document_id: str,
    ctx: Annotated[RequestContext, Depends(require_user)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> Document:
    """Get the latest version of one of the caller's documents.

    Raises:
        HTTPException: 400 for malformed ids, 404 if not found or not owned
    """
    return await _get_owned_document(repos, ctx, document_id)


@router.get(
    "/{document_id}/suggestions",
    response_model=SuggestionListResponse,
    response_model_by_alias=True,
)
async def list_doc_suggestions(
    document_id: str,
    ctx: Annotated[RequestContext, Depends(require_user)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> SuggestionListResponse:
    """List the caller's persisted suggestions for a document, oldest first."""
    document = await _get_owned_document(repos, ctx, document_id)
    suggestions = await repos.suggestions.get_suggestions_by_document_id(document.id)
    return SuggestionListResponse(
        suggestions=[s for s in suggestions if s.user_id == ctx.user_id]
    )
