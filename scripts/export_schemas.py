"""Export JSON schemas for the suggestions tool and its wire records."""

import json
from pathlib import Path

from backend.docreview.models import PersistedSuggestion, SuggestionEvent
from backend.docreview.tools.request_suggestions import tool_definition


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Export tool definition (function-calling format)
    tool = tool_definition()
    tool_path = schemas_dir / f"{tool.name}.tool.json"
    with open(tool_path, "w") as f:
        json.dump(tool.model_dump(), f, indent=2)
    print(f"Exported {tool.name} tool definition to {tool_path}")

    # Export stream event schema
    event_path = schemas_dir / "SuggestionEvent.schema.json"
    with open(event_path, "w") as f:
        json.dump(SuggestionEvent.model_json_schema(by_alias=True), f, indent=2)
    print(f"Exported SuggestionEvent schema to {event_path}")

    # Export persisted suggestion schema
    persisted_path = schemas_dir / "PersistedSuggestion.schema.json"
    with open(persisted_path, "w") as f:
        json.dump(PersistedSuggestion.model_json_schema(by_alias=True), f, indent=2)
    print(f"Exported PersistedSuggestion schema to {persisted_path}")


if __name__ == "__main__":
    main()
