"""Structured logging for tool calls."""

import logging
from typing import Any

from backend.docreview.models.tools import ToolCallLog

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class StructuredToolLogger:
    """Structured logger for tool calls."""

    def log_call(self, entry: ToolCallLog) -> None:
        """Log a finished tool call with structured data."""
        log_data: dict[str, Any] = {
            "tool": entry.name,
            "outcome": entry.outcome,
            "duration_ms": entry.duration_ms,
            "started_at": entry.started_at.isoformat(),
            **{f"in.{k}": v for k, v in entry.input_summary.items()},
            **{f"out.{k}": v for k, v in entry.output_summary.items()},
        }

        if entry.error:
            log_data["error"] = entry.error

        log_msg = f"Tool call: {entry.name} - {entry.outcome}"

        if entry.outcome == "error":
            logger.warning(log_msg, extra={"structured": log_data})
        else:
            logger.info(log_msg, extra={"structured": log_data})
