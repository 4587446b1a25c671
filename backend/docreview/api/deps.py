"""Service dependencies shared by the routes."""

from dataclasses import dataclass

from backend.docreview.db.engine import get_session_factory
from backend.docreview.db.repositories import DocumentRepository, SuggestionRepository
from backend.docreview.db.sql_repositories import SqlDocumentRepository, SqlSuggestionRepository
from backend.docreview.llm.client import GenerationClient, get_llm_client


@dataclass(frozen=True)
class Repositories:
    """Document and suggestion stores used by a request."""

    documents: DocumentRepository
    suggestions: SuggestionRepository


def get_repositories() -> Repositories:
    """FastAPI dependency returning SQL-backed repositories."""
    session_factory = get_session_factory()
    return Repositories(
        documents=SqlDocumentRepository(session_factory),
        suggestions=SqlSuggestionRepository(session_factory),
    )


async def get_generation_client() -> GenerationClient:
    """FastAPI dependency returning the configured generation client."""
    return await get_llm_client()
