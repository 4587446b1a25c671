"""Output sinks receiving events while a tool call is in flight."""

import asyncio
from collections.abc import AsyncIterator
from typing import Protocol

from backend.docreview.models.events import SuggestionEvent


class OutputSink(Protocol):
    """Append-only channel for progress events."""

    def write(self, event: SuggestionEvent) -> None:
        """Push one event to the caller."""
        ...


class ListSink:
    """Sink that keeps events in memory, in write order."""

    def __init__(self) -> None:
        self.events: list[SuggestionEvent] = []

    def write(self, event: SuggestionEvent) -> None:
        self.events.append(event)


_CLOSED = object()


class QueueSink:
    """Queue-backed sink consumed by a streaming HTTP response.

    The producer writes events then calls ``close()``; the consumer iterates
    ``drain()`` until the close marker arrives.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    def write(self, event: SuggestionEvent) -> None:
        if self._closed:
            raise RuntimeError("Cannot write to a closed sink")
        self._queue.put_nowait(event)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def drain(self) -> AsyncIterator[SuggestionEvent]:
        """Yield events in write order until the sink is closed."""
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            assert isinstance(item, SuggestionEvent)
            yield item
