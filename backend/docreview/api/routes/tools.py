"""Tool endpoints - GET /tools, POST /tools/requestSuggestions (SSE)."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from backend.docreview.api.auth import get_current_context
from backend.docreview.api.deps import Repositories, get_generation_client, get_repositories
from backend.docreview.db.context import RequestContext
from backend.docreview.llm.client import GenerationClient
from backend.docreview.models.tools import (
    RequestSuggestionsParams,
    RequestSuggestionsResult,
    ToolDefinition,
    ToolErrorResult,
)
from backend.docreview.stream.sink import QueueSink
from backend.docreview.stream.sse import format_sse
from backend.docreview.tools.request_suggestions import (
    TOOL_NAME,
    SuggestionRequestHandler,
    tool_definition,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])

# Handler runs outliving a disconnected client; held here until they finish
_background_runs: set[asyncio.Task] = set()


def _on_background_run_done(task: asyncio.Task) -> None:
    _background_runs.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"{TOOL_NAME} failed after client disconnect: {exc}")


@router.get("", response_model=list[ToolDefinition])
async def list_tools() -> list[ToolDefinition]:
    """List function-calling definitions of the available tools."""
    return [tool_definition()]


@router.post(f"/{TOOL_NAME}")
async def request_suggestions(
    params: RequestSuggestionsParams,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: Annotated[Repositories, Depends(get_repositories)],
    generator: Annotated[GenerationClient, Depends(get_generation_client)],
) -> StreamingResponse:
    """Run the suggestions tool and stream its progress via SSE.

    Frames, in order:
    - ``suggestion``: one per generated suggestion
    - ``result``: the tool's return value (summary or soft error)
    - ``error``: instead of ``result`` when an upstream call failed
    - ``done``: always last

    Args:
        params: Tool parameters (documentId, persona)
        ctx: Request context (user_id may be absent)
        repos: Repositories
        generator: Generation client

    Returns:
        SSE stream
    """

    async def event_generator() -> AsyncGenerator[str, None]:
        """Relay sink events while the handler runs."""
        sink = QueueSink()
        handler = SuggestionRequestHandler(
            documents=repos.documents,
            suggestions=repos.suggestions,
            generator=generator,
            sink=sink,
            ctx=ctx,
        )

        async def run() -> RequestSuggestionsResult | ToolErrorResult:
            try:
                return await handler.handle(params.document_id, params.persona)
            finally:
                sink.close()

        task = asyncio.create_task(run())

        try:
            async for event in sink.drain():
                yield format_sse("suggestion", event.to_wire())

            try:
                result = await task
            except Exception as e:
                logger.error(f"{TOOL_NAME} failed for document {params.document_id}: {e}")
                yield format_sse("error", {"error": str(e)[:200]})
                status_value = "failed"
            else:
                yield format_sse("result", result.model_dump())
                status_value = "succeeded"

            yield format_sse("done", {"status": status_value})
        finally:
            if not task.done():
                logger.info(
                    f"Client disconnected; {TOOL_NAME} continues for document {params.document_id}"
                )
                _background_runs.add(task)
                task.add_done_callback(_on_background_run_done)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
