"""Shared pytest fixtures for all test suites."""

import asyncio
import uuid
from collections.abc import AsyncGenerator, AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from backend.docreview.db.engine import create_session_factory
from backend.docreview.db.inmemory import InMemoryDocumentRepository, InMemorySuggestionRepository
from backend.docreview.db.models import Base
from backend.docreview.models.suggestions import SuggestionElement

SAMPLE_CONTENT = (
    "The new onboarding flow reduces sign-up time. It also removes two screens. "
    "Users can skip the tutorial."
)


class ScriptedGenerationClient:
    """Generation client yielding a fixed list of elements.

    Records the prompts it was called with; optionally raises after
    ``fail_after`` elements and pauses ``delay`` seconds before each element.
    """

    def __init__(
        self,
        elements: list[SuggestionElement],
        fail_after: int | None = None,
        delay: float = 0.0,
    ) -> None:
        self.elements = elements
        self.fail_after = fail_after
        self.delay = delay
        self.calls: list[dict[str, str]] = []

    async def stream_elements(self, *, system: str, prompt: str) -> AsyncIterator[SuggestionElement]:
        self.calls.append({"system": system, "prompt": prompt})
        for index, element in enumerate(self.elements):
            if self.fail_after is not None and index == self.fail_after:
                raise RuntimeError("generation backend unavailable")
            if self.delay:
                await asyncio.sleep(self.delay)
            yield element


@pytest.fixture
def sample_elements() -> list[SuggestionElement]:
    """Three elements, the middle one without a target sentence."""
    return [
        SuggestionElement(
            comment_text="Quantify the reduction in sign-up time.",
            target_sentence="The new onboarding flow reduces sign-up time.",
        ),
        SuggestionElement(comment_text="Say which screens were removed."),
        SuggestionElement(
            comment_text="Explain where the tutorial can be reopened.",
            target_sentence="Users can skip the tutorial.",
        ),
    ]


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.UUID("00000000-0000-0000-0000-000000000002")


@pytest.fixture
def document_repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def suggestion_repo() -> InMemorySuggestionRepository:
    return InMemorySuggestionRepository()


@pytest_asyncio.fixture
async def test_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite async engine with all tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(test_engine)


@pytest.fixture
def make_generator() -> type[ScriptedGenerationClient]:
    """Factory for scripted generation clients."""
    return ScriptedGenerationClient
