"""Prometheus metrics for tool calls."""

from prometheus_client import Counter, Histogram

tool_calls_total = Counter(
    "tool_calls_total",
    "Total tool calls by outcome",
    ["tool", "outcome"],
)

tool_latency_ms = Histogram(
    "tool_latency_ms",
    "Tool call latency in milliseconds",
    ["tool", "outcome"],
    buckets=[50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000],
)

suggestions_generated_total = Counter(
    "suggestions_generated_total",
    "Total suggestions streamed to callers",
    ["persona"],
)


class PrometheusToolMetrics:
    """Prometheus-based tool metrics implementation."""

    def record_call(self, tool: str, outcome: str, latency_ms: float) -> None:
        """Record one finished tool call."""
        tool_calls_total.labels(tool=tool, outcome=outcome).inc()
        tool_latency_ms.labels(tool=tool, outcome=outcome).observe(latency_ms)

    def inc_suggestions(self, persona: str, count: int) -> None:
        """Count generated suggestions under a persona label."""
        if count:
            suggestions_generated_total.labels(persona=persona).inc(count)
