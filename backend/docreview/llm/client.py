"""Streaming generation clients for review suggestions.

Security: Reads API key from settings only, never hardcoded.
Provides a deterministic stub when no key is present for local runs and tests.
"""

import asyncio
import logging
import re
from collections.abc import AsyncIterator
from typing import Any, Protocol

from openai import AsyncOpenAI
from pydantic import ValidationError

from backend.docreview.config import get_settings
from backend.docreview.llm.stream_parser import ElementStreamParser, GenerationError
from backend.docreview.models.suggestions import SuggestionElement

logger = logging.getLogger(__name__)

# Strict structured-output schema: array output is wrapped in an object
ELEMENTS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "elements": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "commentText": {
                        "type": "string",
                        "description": SuggestionElement.model_fields["comment_text"].description,
                    },
                    "targetSentence": {
                        "type": ["string", "null"],
                        "description": SuggestionElement.model_fields[
                            "target_sentence"
                        ].description,
                    },
                },
                "required": ["commentText", "targetSentence"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["elements"],
    "additionalProperties": False,
}

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
STUB_MAX_ELEMENTS = 5


class GenerationClient(Protocol):
    """Protocol for streaming generation clients."""

    def stream_elements(self, *, system: str, prompt: str) -> AsyncIterator[SuggestionElement]:
        """Stream schema-conforming suggestion elements.

        Args:
            system: System instruction (reviewer framing)
            prompt: Subject text to review

        Returns:
            Finite, non-restartable async iterator of elements in generation order
        """
        ...


def parse_element(raw: dict[str, Any]) -> SuggestionElement:
    """Validate one decoded element against the suggestion schema."""
    try:
        return SuggestionElement.model_validate(raw)
    except ValidationError as e:
        raise GenerationError(f"Generation output element failed validation: {e}") from e


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required).

    Yields one comment per leading sentence of the prompt.
    """

    model = "stub"

    async def stream_elements(
        self, *, system: str, prompt: str
    ) -> AsyncIterator[SuggestionElement]:
        """Yield deterministic elements anchored to the prompt's sentences."""
        sentences = [s.strip() for s in _SENTENCE_SPLIT.split(prompt) if s.strip()]

        for index, sentence in enumerate(sentences[:STUB_MAX_ELEMENTS], start=1):
            # Yield control like a real stream would between elements
            await asyncio.sleep(0)
            yield SuggestionElement(
                comment_text=f"Suggestion {index} (stub): consider rephrasing this sentence for clarity.",
                target_sentence=sentence,
            )


class OpenAIClient:
    """OpenAI-backed client streaming structured output."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", temperature: float = 0.7):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from settings)
            model: Model name to use
            temperature: Sampling temperature
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature

    async def stream_elements(
        self, *, system: str, prompt: str
    ) -> AsyncIterator[SuggestionElement]:
        """Stream elements as the model generates them.

        API errors and malformed elements propagate to the caller; there is no
        retry or fallback here.
        """
        stream = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            stream=True,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "review_suggestions",
                    "strict": True,
                    "schema": ELEMENTS_RESPONSE_SCHEMA,
                },
            },
        )

        parser = ElementStreamParser()
        emitted = 0

        async for chunk in stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if not delta:
                continue
            for raw in parser.feed(delta):
                emitted += 1
                yield parse_element(raw)

        if not parser.closed:
            logger.warning(
                f"Generation stream ended before the elements array closed "
                f"({emitted} element(s) emitted)"
            )


async def get_llm_client() -> GenerationClient:
    """Factory function to get appropriate generation client based on config.

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    settings = get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for suggestion generation")
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            temperature=settings.generation_temperature,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()
