"""Tool call models: parameters, results and call logging."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# JSON-serializable value type
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class RequestSuggestionsParams(BaseModel):
    """Parameters the assistant passes when invoking the suggestions tool."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(
        ...,
        alias="documentId",
        min_length=1,
        description="The ID of the document to request edits",
    )
    persona: str | None = Field(
        None,
        description="The persona for the review (e.g., executive, engineer, designer)",
    )


class RequestSuggestionsResult(BaseModel):
    """Summary returned once suggestions have been generated."""

    id: str
    title: str
    kind: str
    message: str


class ToolErrorResult(BaseModel):
    """Soft, user-visible failure returned instead of raising."""

    error: str


class ToolDefinition(BaseModel):
    """Function-calling definition advertised to the assistant."""

    name: str
    description: str
    parameters: dict[str, Any]


class ToolCallLog(BaseModel):
    """Log entry for a single tool call.

    Captures timing, outcome, and small input/output summaries
    for observability without storing document content.
    """

    name: str = Field(..., description="Tool name (e.g. 'requestSuggestions')")
    started_at: datetime = Field(..., description="UTC timestamp when call started")
    finished_at: datetime = Field(..., description="UTC timestamp when call finished")
    duration_ms: int = Field(..., description="Duration in milliseconds")
    outcome: str = Field(..., description="'success', 'not_found' or 'error'")
    error: str | None = Field(None, description="Error message if call failed")
    input_summary: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Small summary of inputs (ids and persona only)",
    )
    output_summary: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Small summary of outputs (counts only)",
    )
