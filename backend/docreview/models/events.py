"""Output sink events - what the caller sees while a tool call is in flight."""

from typing import Any, Literal

from pydantic import BaseModel

from backend.docreview.models.suggestions import Suggestion


class SuggestionEvent(BaseModel):
    """Event pushed once per generated suggestion, in generation order."""

    type: Literal["suggestion"] = "suggestion"
    content: Suggestion

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase suggestion fields."""
        return self.model_dump(mode="json", by_alias=True)
