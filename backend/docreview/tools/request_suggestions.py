"""requestSuggestions tool - streams review suggestions for a stored document.

Flow: look up the document, build the persona prompt, consume the generation
stream (pushing each suggestion to the output sink as it arrives), persist the
batch for signed-in callers, and return a summary for the assistant.

Upstream failures (generation, persistence) propagate unchanged. Suggestions
already pushed to the sink stay emitted.
"""

import logging
import time
import uuid
from datetime import datetime, timezone

from backend.docreview.db.context import RequestContext
from backend.docreview.db.repositories import DocumentRepository, SuggestionRepository
from backend.docreview.llm.client import GenerationClient
from backend.docreview.llm.prompts import (
    OtherPersona,
    build_system_prompt,
    parse_persona,
    summary_message,
)
from backend.docreview.models.docs import Document
from backend.docreview.models.events import SuggestionEvent
from backend.docreview.models.suggestions import PersistedSuggestion, Suggestion
from backend.docreview.models.tools import (
    RequestSuggestionsParams,
    RequestSuggestionsResult,
    ToolCallLog,
    ToolDefinition,
    ToolErrorResult,
)
from backend.docreview.stream.sink import OutputSink
from backend.docreview.utils.logging import StructuredToolLogger
from backend.docreview.utils.metrics import PrometheusToolMetrics

logger = logging.getLogger(__name__)

TOOL_NAME = "requestSuggestions"
TOOL_DESCRIPTION = "Request suggestions for a document"
DOCUMENT_NOT_FOUND = "Document not found"


def tool_definition() -> ToolDefinition:
    """Function-calling definition for the assistant."""
    return ToolDefinition(
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        parameters=RequestSuggestionsParams.model_json_schema(by_alias=True),
    )


def _persona_metric_label(persona: str | None) -> str:
    tag = parse_persona(persona)
    if tag is None:
        return "none"
    if isinstance(tag, OtherPersona):
        return "other"
    return tag.value


class SuggestionRequestHandler:
    """Handles one requestSuggestions invocation.

    Collaborators are injected per call: the caller's identity comes in via
    ``ctx`` rather than any ambient session lookup.
    """

    def __init__(
        self,
        *,
        documents: DocumentRepository,
        suggestions: SuggestionRepository,
        generator: GenerationClient,
        sink: OutputSink,
        ctx: RequestContext,
        tool_logger: StructuredToolLogger | None = None,
        metrics: PrometheusToolMetrics | None = None,
    ) -> None:
        self._documents = documents
        self._suggestions = suggestions
        self._generator = generator
        self._sink = sink
        self._ctx = ctx
        self._tool_logger = tool_logger or StructuredToolLogger()
        self._metrics = metrics or PrometheusToolMetrics()

    async def handle(
        self, document_id: str, persona: str | None = None
    ) -> RequestSuggestionsResult | ToolErrorResult:
        """Generate, stream and persist suggestions for a document.

        Args:
            document_id: ID of the document to review
            persona: Optional reviewer persona label

        Returns:
            Summary on success, or the soft "Document not found" error
        """
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        input_summary = {"document_id": document_id, "persona": persona}

        try:
            document = await self._lookup(document_id)

            if document is None or not document.content:
                logger.info(f"Document {document_id} not found or has no content")
                self._finish(started_at, start, "not_found", input_summary, {})
                return ToolErrorResult(error=DOCUMENT_NOT_FOUND)

            streamed = await self._stream_suggestions(document, persona)
            persisted = await self._persist(document, streamed)

        except Exception as e:
            self._finish(started_at, start, "error", input_summary, {}, error=str(e))
            raise

        self._metrics.inc_suggestions(_persona_metric_label(persona), len(streamed))
        self._finish(
            started_at,
            start,
            "success",
            input_summary,
            {"suggestions": len(streamed), "persisted": persisted},
        )

        return RequestSuggestionsResult(
            id=str(document.id),
            title=document.title,
            kind=document.kind,
            message=summary_message(persona),
        )

    async def _lookup(self, document_id: str) -> Document | None:
        try:
            parsed_id = uuid.UUID(document_id)
        except ValueError:
            return None
        return await self._documents.get_document_by_id(parsed_id)

    async def _stream_suggestions(
        self, document: Document, persona: str | None
    ) -> list[Suggestion]:
        """Consume the generation stream, pushing and collecting in lock-step."""
        assert document.content is not None
        system_prompt = build_system_prompt(persona)
        streamed: list[Suggestion] = []

        async for element in self._generator.stream_elements(
            system=system_prompt, prompt=document.content
        ):
            suggestion = Suggestion(
                id=uuid.uuid4(),
                document_id=document.id,
                description=element.comment_text,
                original_text=element.target_sentence or "",
                suggested_text="",
                is_resolved=False,
            )
            self._sink.write(SuggestionEvent(content=suggestion))
            streamed.append(suggestion)

        return streamed

    async def _persist(self, document: Document, streamed: list[Suggestion]) -> bool:
        """Save the batch for signed-in callers; anonymous sessions skip it."""
        if self._ctx.user_id is None:
            logger.debug(
                f"No user in session; skipping persistence of {len(streamed)} suggestion(s)"
            )
            return False

        created_at = datetime.now(timezone.utc)
        await self._suggestions.save_suggestions(
            [
                PersistedSuggestion(
                    **suggestion.model_dump(),
                    user_id=self._ctx.user_id,
                    created_at=created_at,
                    document_created_at=document.created_at,
                )
                for suggestion in streamed
            ]
        )
        return True

    def _finish(
        self,
        started_at: datetime,
        start: float,
        outcome: str,
        input_summary: dict,
        output_summary: dict,
        error: str | None = None,
    ) -> None:
        latency_ms = (time.perf_counter() - start) * 1000
        self._metrics.record_call(TOOL_NAME, outcome, latency_ms)
        self._tool_logger.log_call(
            ToolCallLog(
                name=TOOL_NAME,
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
                duration_ms=int(latency_ms),
                outcome=outcome,
                error=error,
                input_summary=input_summary,
                output_summary=output_summary,
            )
        )
