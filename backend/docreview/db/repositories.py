"""Repository protocol interfaces for data access."""

from typing import Protocol
from uuid import UUID

from backend.docreview.models.docs import Document, DocumentKind
from backend.docreview.models.suggestions import PersistedSuggestion


class DocumentRepository(Protocol):
    """Repository for document operations."""

    async def get_document_by_id(self, document_id: UUID) -> Document | None:
        """Get the most recent version of a document.

        Args:
            document_id: Document ID

        Returns:
            Latest document version or None if not found
        """
        ...

    async def save_document(
        self,
        *,
        user_id: UUID,
        title: str,
        content: str | None,
        kind: DocumentKind = "text",
        document_id: UUID | None = None,
    ) -> Document:
        """Save a document version.

        Args:
            user_id: Owning user
            title: Document title
            content: Document text
            kind: Document kind
            document_id: Existing ID to add a version to; a new ID is generated if None

        Returns:
            The saved version
        """
        ...

    async def list_documents(self, user_id: UUID) -> list[Document]:
        """List the latest version of each document owned by a user, newest first.

        Args:
            user_id: Owning user

        Returns:
            List of documents
        """
        ...


class SuggestionRepository(Protocol):
    """Repository for suggestion operations."""

    async def save_suggestions(self, suggestions: list[PersistedSuggestion]) -> None:
        """Persist a batch of suggestions.

        Args:
            suggestions: Suggestions with owner and timestamps attached
        """
        ...

    async def get_suggestions_by_document_id(
        self, document_id: UUID
    ) -> list[PersistedSuggestion]:
        """List suggestions made against any version of a document.

        Args:
            document_id: Document ID

        Returns:
            Suggestions ordered by creation time
        """
        ...
