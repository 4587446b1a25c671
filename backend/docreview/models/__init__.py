"""Models package - re-exports for convenience."""

from backend.docreview.models.docs import Document, DocumentKind
from backend.docreview.models.events import SuggestionEvent
from backend.docreview.models.suggestions import (
    PersistedSuggestion,
    Suggestion,
    SuggestionElement,
)
from backend.docreview.models.tools import (
    RequestSuggestionsParams,
    RequestSuggestionsResult,
    ToolCallLog,
    ToolDefinition,
    ToolErrorResult,
)

__all__ = [
    # Documents
    "Document",
    "DocumentKind",
    # Suggestions
    "Suggestion",
    "SuggestionElement",
    "PersistedSuggestion",
    # Events
    "SuggestionEvent",
    # Tools
    "RequestSuggestionsParams",
    "RequestSuggestionsResult",
    "ToolErrorResult",
    "ToolDefinition",
    "ToolCallLog",
]
