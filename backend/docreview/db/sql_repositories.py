"""SQL implementations of repository interfaces.

Each operation runs in its own session so repositories can outlive a single
request (the suggestions stream keeps running after the route returns).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.docreview.db.models import Document as DocumentDB
from backend.docreview.db.models import Suggestion as SuggestionDB
from backend.docreview.models.docs import Document, DocumentKind
from backend.docreview.models.suggestions import PersistedSuggestion


def _to_document(row: DocumentDB) -> Document:
    return Document(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        content=row.content,
        kind=row.kind,  # type: ignore[arg-type]
        created_at=row.created_at,
    )


class SqlDocumentRepository:
    """SQL implementation of DocumentRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_document_by_id(self, document_id: uuid.UUID) -> Document | None:
        """Get the most recent version of a document."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(DocumentDB)
                .where(DocumentDB.id == document_id)
                .order_by(DocumentDB.created_at.desc())
                .limit(1)
            )
            row = result.scalar_one_or_none()

        if row is None:
            return None

        return _to_document(row)

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
        row = DocumentDB(
            id=document_id or uuid.uuid4(),
            created_at=datetime.now(timezone.utc),
            title=title,
            content=content,
            kind=kind,
            user_id=user_id,
        )

        async with self._session_factory() as session:
            session.add(row)
            await session.commit()

        return _to_document(row)

    async def list_documents(self, user_id: uuid.UUID) -> list[Document]:
        """List the latest version of each document owned by a user."""
        latest = (
            select(
                DocumentDB.id.label("id"),
                func.max(DocumentDB.created_at).label("created_at"),
            )
            .where(DocumentDB.user_id == user_id)
            .group_by(DocumentDB.id)
            .subquery()
        )

        query = (
            select(DocumentDB)
            .join(
                latest,
                (DocumentDB.id == latest.c.id) & (DocumentDB.created_at == latest.c.created_at),
            )
            .order_by(DocumentDB.created_at.desc())
        )

        async with self._session_factory() as session:
            result = await session.execute(query)
            rows = list(result.scalars().all())

        return [_to_document(row) for row in rows]


class SqlSuggestionRepository:
    """SQL implementation of SuggestionRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save_suggestions(self, suggestions: list[PersistedSuggestion]) -> None:
        """Persist a batch of suggestions in one transaction."""
        if not suggestions:
            return

        async with self._session_factory() as session:
            session.add_all(
                [
                    SuggestionDB(
                        id=s.id,
                        document_id=s.document_id,
                        document_created_at=s.document_created_at,
                        original_text=s.original_text,
                        suggested_text=s.suggested_text,
                        description=s.description,
                        is_resolved=s.is_resolved,
                        user_id=s.user_id,
                        created_at=s.created_at,
                    )
                    for s in suggestions
                ]
            )
            await session.commit()

    async def get_suggestions_by_document_id(
        self, document_id: uuid.UUID
    ) -> list[PersistedSuggestion]:
        """List suggestions made against any version of a document."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(SuggestionDB)
                .where(SuggestionDB.document_id == document_id)
                .order_by(SuggestionDB.created_at)
            )
            rows = list(result.scalars().all())

        return [
            PersistedSuggestion(
                id=row.id,
                document_id=row.document_id,
                description=row.description or "",
                original_text=row.original_text,
                suggested_text=row.suggested_text,
                is_resolved=row.is_resolved,
                user_id=row.user_id,
                created_at=row.created_at,
                document_created_at=row.document_created_at,
            )
            for row in rows
        ]
