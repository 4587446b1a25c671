"""Tests for the incremental elements parser."""

import json

import pytest

from backend.docreview.llm.stream_parser import ElementStreamParser, GenerationError

PAYLOAD = json.dumps(
    {
        "elements": [
            {"commentText": "Tighten the intro.", "targetSentence": "Hello {world}."},
            {"commentText": 'Use "active" voice [here].', "targetSentence": None},
        ]
    }
)


def test_parses_whole_payload_in_one_delta() -> None:
    """Test that a complete payload yields every element."""
    parser = ElementStreamParser()

    elements = parser.feed(PAYLOAD)

    assert [e["commentText"] for e in elements] == [
        "Tighten the intro.",
        'Use "active" voice [here].',
    ]
    assert parser.closed


def test_emits_elements_as_soon_as_they_close() -> None:
    """Test character-by-character feeding emits each element once, in order."""
    parser = ElementStreamParser()
    emitted_at: list[int] = []
    elements = []

    for index, char in enumerate(PAYLOAD):
        completed = parser.feed(char)
        if completed:
            emitted_at.append(index)
            elements.extend(completed)

    assert len(elements) == 2
    # First element is emitted before the stream ends
    assert emitted_at[0] < len(PAYLOAD) - 10
    assert elements[0]["targetSentence"] == "Hello {world}."
    assert elements[1]["targetSentence"] is None


def test_braces_and_brackets_inside_strings_are_ignored() -> None:
    """Test that structural characters inside strings don't split elements."""
    parser = ElementStreamParser()

    elements = parser.feed('{"elements": [{"commentText": "a } ] \\" [ {"}]}')

    assert elements == [{"commentText": 'a } ] " [ {'}]


def test_accepts_bare_array() -> None:
    """Test that a top-level array works as well as the wrapped form."""
    parser = ElementStreamParser()

    elements = parser.feed('[{"commentText": "x"}, {"commentText": "y"}]')

    assert [e["commentText"] for e in elements] == ["x", "y"]
    assert parser.closed


def test_nested_values_stay_inside_element() -> None:
    """Test that nested objects/arrays are part of their element."""
    parser = ElementStreamParser()

    elements = parser.feed('{"elements": [{"commentText": "x", "extra": {"a": [1, {"b": 2}]}}]}')

    assert elements == [{"commentText": "x", "extra": {"a": [1, {"b": 2}]}}]


def test_truncated_stream_is_not_closed() -> None:
    """Test that completed elements survive a truncated stream."""
    parser = ElementStreamParser()

    elements = parser.feed('{"elements": [{"commentText": "done"}, {"commentText": "par')

    assert elements == [{"commentText": "done"}]
    assert not parser.closed


def test_input_after_array_close_is_ignored() -> None:
    """Test that trailing output does not produce elements."""
    parser = ElementStreamParser()

    elements = parser.feed('[{"commentText": "x"}] [{"commentText": "y"}]')

    assert elements == [{"commentText": "x"}]


def test_malformed_element_raises_generation_error() -> None:
    """Test that an undecodable element raises GenerationError."""
    parser = ElementStreamParser()

    with pytest.raises(GenerationError):
        parser.feed('{"elements": [{"commentText": oops}]}')
