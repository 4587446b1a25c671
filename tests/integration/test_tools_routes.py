"""Integration tests for the tools API routes (SSE suggestions stream)."""

import asyncio
import json
import uuid
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from backend.docreview.api.deps import Repositories, get_generation_client, get_repositories
from backend.docreview.api.routes.tools import _background_runs, request_suggestions
from backend.docreview.db.context import RequestContext
from backend.docreview.db.inmemory import InMemoryDocumentRepository, InMemorySuggestionRepository
from backend.docreview.main import app
from backend.docreview.models.docs import Document
from backend.docreview.models.suggestions import SuggestionElement
from backend.docreview.models.tools import RequestSuggestionsParams

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
AUTH_HEADERS = {"Authorization": f"Bearer {USER_ID}"}


def parse_sse(body: str) -> list[tuple[str, dict[str, Any]]]:
    """Split an SSE body into (event, data) pairs."""
    frames = []
    for block in body.strip().split("\n\n"):
        lines = dict(line.split(": ", 1) for line in block.splitlines())
        frames.append((lines["event"], json.loads(lines["data"])))
    return frames


@pytest.fixture
def repos() -> Repositories:
    return Repositories(
        documents=InMemoryDocumentRepository(),
        suggestions=InMemorySuggestionRepository(),
    )


@pytest.fixture
def client(repos: Repositories) -> Iterator[TestClient]:
    """Create test client backed by in-memory repositories."""
    app.dependency_overrides[get_repositories] = lambda: repos
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_generator(make_generator: type) -> Iterator[Any]:
    """Install a scripted generation client for the next request."""

    def install(elements: list[SuggestionElement], fail_after: int | None = None) -> Any:
        generator = make_generator(elements, fail_after=fail_after)
        app.dependency_overrides[get_generation_client] = lambda: generator
        return generator

    yield install


async def _seed(repos: Repositories, content: str | None = "Users can skip the tutorial.") -> Document:
    return await repos.documents.save_document(
        user_id=USER_ID, title="Onboarding notes", content=content, kind="text"
    )


def test_list_tools_returns_definition(client: TestClient) -> None:
    """Test GET /tools advertises the suggestions tool."""
    response = client.get("/tools")

    assert response.status_code == 200
    tools = response.json()
    assert [t["name"] for t in tools] == ["requestSuggestions"]
    assert tools[0]["description"] == "Request suggestions for a document"
    assert "documentId" in tools[0]["parameters"]["properties"]


@pytest.mark.asyncio
async def test_request_suggestions_streams_frames(
    client: TestClient,
    repos: Repositories,
    use_generator: Any,
    sample_elements: list[SuggestionElement],
) -> None:
    """Test suggestion frames arrive in order, followed by result and done."""
    document = await _seed(repos)
    use_generator(sample_elements)

    response = client.post(
        "/tools/requestSuggestions",
        json={"documentId": str(document.id), "persona": "executive"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")

    frames = parse_sse(response.text)
    assert [name for name, _ in frames] == ["suggestion"] * 3 + ["result", "done"]

    suggestions = [data for name, data in frames if name == "suggestion"]
    assert [s["type"] for s in suggestions] == ["suggestion"] * 3
    assert [s["content"]["description"] for s in suggestions] == [
        e.comment_text for e in sample_elements
    ]
    assert suggestions[1]["content"]["originalText"] == ""

    assert frames[-2][1] == {
        "id": str(document.id),
        "title": "Onboarding notes",
        "kind": "text",
        "message": "Suggestions (as executive) have been added to the document",
    }
    assert frames[-1][1] == {"status": "succeeded"}

    persisted = await repos.suggestions.get_suggestions_by_document_id(document.id)
    assert {str(s.id) for s in persisted} == {s["content"]["id"] for s in suggestions}


@pytest.mark.asyncio
async def test_anonymous_request_streams_without_persisting(
    client: TestClient,
    repos: Repositories,
    use_generator: Any,
    sample_elements: list[SuggestionElement],
) -> None:
    document = await _seed(repos)
    use_generator(sample_elements)

    response = client.post("/tools/requestSuggestions", json={"documentId": str(document.id)})

    frames = parse_sse(response.text)
    assert [name for name, _ in frames].count("suggestion") == 3
    assert frames[-2][1]["message"] == "Suggestions have been added to the document"
    assert await repos.suggestions.get_suggestions_by_document_id(document.id) == []


def test_unknown_document_returns_error_result(
    client: TestClient,
    use_generator: Any,
    sample_elements: list[SuggestionElement],
) -> None:
    """Test that a missing document yields the soft error as the result frame."""
    generator = use_generator(sample_elements)

    response = client.post(
        "/tools/requestSuggestions",
        json={"documentId": str(uuid.uuid4())},
        headers=AUTH_HEADERS,
    )

    assert parse_sse(response.text) == [
        ("result", {"error": "Document not found"}),
        ("done", {"status": "succeeded"}),
    ]
    assert generator.calls == []


@pytest.mark.asyncio
async def test_generation_failure_emits_error_frame(
    client: TestClient,
    repos: Repositories,
    use_generator: Any,
    sample_elements: list[SuggestionElement],
) -> None:
    """Test that partial suggestions remain and the stream ends with error and done."""
    document = await _seed(repos)
    use_generator(sample_elements, fail_after=1)

    response = client.post(
        "/tools/requestSuggestions",
        json={"documentId": str(document.id)},
        headers=AUTH_HEADERS,
    )

    frames = parse_sse(response.text)
    assert [name for name, _ in frames] == ["suggestion", "error", "done"]
    assert "generation backend unavailable" in frames[1][1]["error"]
    assert frames[2][1] == {"status": "failed"}
    assert await repos.suggestions.get_suggestions_by_document_id(document.id) == []


def test_missing_document_id_returns_422(client: TestClient) -> None:
    response = client.post("/tools/requestSuggestions", json={"persona": "engineer"})

    assert response.status_code == 422


def test_empty_document_id_returns_422(client: TestClient) -> None:
    response = client.post("/tools/requestSuggestions", json={"documentId": ""})

    assert response.status_code == 422


def test_bad_authorization_header_returns_401(client: TestClient) -> None:
    response = client.post(
        "/tools/requestSuggestions",
        json={"documentId": str(uuid.uuid4())},
        headers={"Authorization": "Token abc"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_client_disconnect_still_persists_suggestions(
    repos: Repositories,
    make_generator: type,
    sample_elements: list[SuggestionElement],
) -> None:
    """Test that closing the stream early lets the run finish and persist."""
    document = await _seed(repos)
    response = await request_suggestions(
        params=RequestSuggestionsParams(document_id=str(document.id)),
        ctx=RequestContext(user_id=USER_ID),
        repos=repos,
        generator=make_generator(sample_elements, delay=0.01),
    )

    body = response.body_iterator
    first = await body.__anext__()
    await body.aclose()
    await asyncio.sleep(0.2)

    assert first.startswith("event: suggestion")
    assert len(repos.suggestions.save_calls) == 1
    assert len(repos.suggestions.save_calls[0]) == 3
    assert not _background_runs
