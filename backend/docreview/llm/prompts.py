"""Review system prompts keyed by reviewer persona.

The persona label is matched case-insensitively against a closed set of
known reviewers; anything else is carried verbatim into a generic
"perspective" template.
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_SYSTEM_PROMPT = (
    "You are a help writing assistant. Given a piece of writing, please offer "
    "suggestions to improve the piece of writing and describe the change. It is "
    "very important for the edits to contain full sentences instead of just words. "
    "Max 5 suggestions."
)

EXECUTIVE_SYSTEM_PROMPT = (
    "\n\nYOU ARE AN EXTREMELY DISCERNING AND IMPATIENT EXECUTIVE. Your time is "
    "paramount. This document is likely riddled with flaws. Provide BRUTALLY HONEST, "
    "and HIGHLY SELECTIVE commentary. Identify ONLY THE ABSOLUTE MOST CRITICAL (4-5) "
    "flaws that undermine its core message, strategic value, or business impact. "
    "IGNORE superficial issues like minor grammar or formatting unless they are "
    "catastrophic. Your critique MUST focus on substantive content, flawed logic, "
    "weak arguments, or unclear strategic alignment. Frame your output as a direct "
    "comment. If it clarifies your point, you MAY embed a brief example of improved "
    "phrasing within your comment, but the primary output is your overall assessment. "
    "Be direct, merciless, and make it clear if the entire approach is a waste of time."
)

ENGINEER_FRAMING = (
    "\n\nAs an ENGINEER, focus on technical accuracy, feasibility, clarity of technical "
    "details, and potential implementation challenges. Ensure suggestions are precise "
    "and practical."
)

DESIGNER_FRAMING = (
    "\n\nAs a DESIGNER, focus on user experience, clarity of communication from a user "
    "perspective, and aesthetic considerations. Ensure suggestions improve usability "
    "and engagement."
)


class Persona(str, Enum):
    """Reviewer personas with a dedicated framing."""

    executive = "executive"
    engineer = "engineer"
    designer = "designer"


@dataclass(frozen=True)
class OtherPersona:
    """Any persona outside the known set; keeps the caller's label as given."""

    label: str


PersonaTag = Persona | OtherPersona


def parse_persona(label: str | None) -> PersonaTag | None:
    """Resolve a free-form persona label, or None when no persona was given."""
    if not label:
        return None
    try:
        return Persona(label.lower())
    except ValueError:
        return OtherPersona(label=label)


def build_system_prompt(persona: str | None) -> str:
    """Build the review system prompt for an optional persona label."""
    tag = parse_persona(persona)

    if tag is None:
        return DEFAULT_SYSTEM_PROMPT
    if tag is Persona.executive:
        return EXECUTIVE_SYSTEM_PROMPT
    if tag is Persona.engineer:
        return DEFAULT_SYSTEM_PROMPT + ENGINEER_FRAMING
    if tag is Persona.designer:
        return DEFAULT_SYSTEM_PROMPT + DESIGNER_FRAMING
    return (
        DEFAULT_SYSTEM_PROMPT
        + f"\n\nReview the document from the perspective of a {tag.label}."
    )


def summary_message(persona: str | None) -> str:
    """Human-readable confirmation returned to the assistant."""
    suffix = f" (as {persona})" if persona else ""
    return f"Suggestions{suffix} have been added to the document"
