"""Document domain models."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

DocumentKind = Literal["text", "code", "image", "sheet"]


class Document(BaseModel):
    """One stored version of a user document.

    Documents are versioned by ``created_at``; the repositories hand out the
    most recent version for a given ``id``.
    """

    id: UUID
    user_id: UUID
    title: str
    content: str | None = None
    kind: DocumentKind = "text"
    created_at: datetime
