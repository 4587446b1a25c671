"""Request context carrying the caller's identity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the session's user identity.

    ``user_id`` is None for anonymous sessions; work that needs an owner
    (persisting suggestions, creating documents) is skipped or refused.
    """

    user_id: UUID | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
