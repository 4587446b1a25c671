"""Incremental parser for streamed JSON array output.

The model is asked for ``{"elements": [ {...}, {...} ]}``. Text arrives in
arbitrary deltas; each array element is emitted as soon as its closing brace
is seen, so callers can relay elements before generation finishes.
"""

import json
from typing import Any


class GenerationError(Exception):
    """Generation service produced output that does not match the schema."""

    pass


class ElementStreamParser:
    """Emit complete objects from the first JSON array in a text stream.

    Tracks nesting depth and string state character by character. The first
    ``[`` outside a string marks the elements array; objects opened directly
    inside it are buffered and decoded on close. Input after the array's
    closing ``]`` is ignored.
    """

    def __init__(self) -> None:
        self._depth = 0
        self._array_depth: int | None = None
        self._in_string = False
        self._escape = False
        self._current: list[str] | None = None
        self.closed = False

    def feed(self, text: str) -> list[dict[str, Any]]:
        """Consume a text delta and return the elements it completed."""
        completed: list[dict[str, Any]] = []

        for char in text:
            if self.closed:
                break

            if self._current is not None:
                self._current.append(char)

            if self._in_string:
                if self._escape:
                    self._escape = False
                elif char == "\\":
                    self._escape = True
                elif char == '"':
                    self._in_string = False
                continue

            if char == '"':
                self._in_string = True
            elif char == "[" and self._array_depth is None:
                self._depth += 1
                self._array_depth = self._depth
            elif char in "{[":
                if (
                    char == "{"
                    and self._current is None
                    and self._array_depth is not None
                    and self._depth == self._array_depth
                ):
                    self._current = [char]
                self._depth += 1
            elif char in "}]":
                self._depth -= 1
                if self._array_depth is None:
                    continue
                if self._current is not None and self._depth == self._array_depth:
                    completed.append(self._decode("".join(self._current)))
                    self._current = None
                elif self._depth < self._array_depth:
                    self.closed = True

        return completed

    def _decode(self, raw: str) -> dict[str, Any]:
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise GenerationError(f"Malformed element in generation output: {e}") from e

        if not isinstance(value, dict):
            raise GenerationError("Generation output element is not an object")

        return value
