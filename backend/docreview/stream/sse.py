"""Server-sent event encoding."""

import json
from typing import Any

from pydantic import BaseModel


def format_sse(event: str, data: BaseModel | dict[str, Any]) -> str:
    """Encode one SSE frame.

    Pydantic models are serialized with their wire aliases.
    """
    if isinstance(data, BaseModel):
        payload = data.model_dump_json(by_alias=True)
    else:
        payload = json.dumps(data)
    return f"event: {event}\ndata: {payload}\n\n"
