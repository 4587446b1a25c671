"""In-memory implementations of repository interfaces."""

import uuid
from datetime import datetime, timezone

from backend.docreview.models.docs import Document, DocumentKind
from backend.docreview.models.suggestions import PersistedSuggestion


class InMemoryDocumentRepository:
    """In-memory implementation of DocumentRepository."""

    def __init__(self) -> None:
        self._versions: dict[uuid.UUID, list[Document]] = {}

    async def get_document_by_id(self, document_id: uuid.UUID) -> Document | None:
        """Get the most recent version of a document."""
        versions = self._versions.get(document_id)

        if not versions:
            return None

        return max(versions, key=lambda d: d.created_at)

    async def save_document(
        self,
        *,
        user_id: uuid.UUID,
        title: str,
        content: str | None,
        kind: DocumentKind = "text",
        document_id: uuid.UUID | None = None,
    ) -> Document:
        """Save a document version."""
        document = Document(
            id=document_id or uuid.uuid4(),
            user_id=user_id,
            title=title,
            content=content,
            kind=kind,
            created_at=datetime.now(timezone.utc),
        )

        self._versions.setdefault(document.id, []).append(document)
        return document

    async def list_documents(self, user_id: uuid.UUID) -> list[Document]:
        """List the latest version of each document owned by a user."""
        results: list[Document] = []

        for versions in self._versions.values():
            latest = max(versions, key=lambda d: d.created_at)
            if latest.user_id == user_id:
                results.append(latest)

        # Sort by created_at descending
        results.sort(key=lambda d: d.created_at, reverse=True)

        return results


class InMemorySuggestionRepository:
    """In-memory implementation of SuggestionRepository."""

    def __init__(self) -> None:
        self._suggestions: dict[uuid.UUID, PersistedSuggestion] = {}
        self.save_calls: list[list[PersistedSuggestion]] = []

    async def save_suggestions(self, suggestions: list[PersistedSuggestion]) -> None:
        """Persist a batch of suggestions."""
        self.save_calls.append(list(suggestions))

        for suggestion in suggestions:
            self._suggestions[suggestion.id] = suggestion

    async def get_suggestions_by_document_id(
        self, document_id: uuid.UUID
    ) -> list[PersistedSuggestion]:
        """List suggestions made against any version of a document."""
        results = [s for s in self._suggestions.values() if s.document_id == document_id]
        results.sort(key=lambda s: s.created_at)
        return results
