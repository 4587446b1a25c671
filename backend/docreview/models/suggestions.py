"""Suggestion domain models.

Field names are snake_case in Python and camelCase on the wire
(``documentId``, ``originalText``, ...), matching what the chat client reads
from the stream and what the store persists.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SuggestionElement(BaseModel):
    """One structured element yielded by the generation service."""

    model_config = ConfigDict(populate_by_name=True)

    comment_text: str = Field(
        ...,
        alias="commentText",
        description=(
            "The full text of the review comment, which may include examples of "
            "alternative phrasing if helpful."
        ),
    )
    target_sentence: str | None = Field(
        None,
        alias="targetSentence",
        description=(
            "The original sentence or phrase the comment primarily refers to, if "
            "applicable. This helps anchor the comment."
        ),
    )


class Suggestion(BaseModel):
    """A review suggestion tied to a document, as streamed to the caller."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    document_id: UUID
    description: str
    original_text: str = ""
    suggested_text: str = ""
    is_resolved: bool = False


class PersistedSuggestion(Suggestion):
    """Suggestion as written to the store, with ownership and timestamps."""

    user_id: UUID
    created_at: datetime
    # Denormalized from the document version the suggestion was made against
    document_created_at: datetime
