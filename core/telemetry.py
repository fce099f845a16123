"""Telemetry module for tracking request performance with PostHog."""

import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from posthog import Posthog

logger = logging.getLogger(__name__)

DISTINCT_ID = "music-explorer-gateway"

UPSTREAM_SERVICES = ("lyrics", "audiodb")


@dataclass
class StepResult:
    """Result of a tracked step."""

    duration_ms: float
    success: bool = True
    error_type: str | None = None


@dataclass
class RequestTelemetry:
    """Tracks performance metrics for a single request.

    Steps may run concurrently (the two upstream lookups do), so each
    ``track_step`` keeps its own start time.
    """

    steps: dict[str, StepResult] = field(default_factory=dict)
    api_calls: dict[str, int] = field(
        default_factory=lambda: {service: 0 for service in UPSTREAM_SERVICES}
    )
    start_time: float = field(default_factory=time.perf_counter)

    @contextmanager
    def track_step(self, step_name: str):
        """Context manager to time a step.

        Args:
            step_name: Name of the step being tracked

        Yields:
            None
        """
        step_start = time.perf_counter()
        error_type = None

        try:
            yield
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            duration_ms = (time.perf_counter() - step_start) * 1000
            self.steps[step_name] = StepResult(
                duration_ms=duration_ms,
                success=error_type is None,
                error_type=error_type,
            )

    def record_api_call(self, service: str) -> None:
        """Increment API call counter for a service.

        Args:
            service: Name of the upstream service ("lyrics" or "audiodb")
        """
        if service in self.api_calls:
            self.api_calls[service] += 1
        else:
            logger.warning(f"Unknown service for API call tracking: {service}")

    def get_total_duration_ms(self) -> float:
        """Get total elapsed time since telemetry was created."""
        return (time.perf_counter() - self.start_time) * 1000

    def get_step_timings(self) -> dict[str, float]:
        """Get timing for each step in milliseconds."""
        return {f"{name}_ms": step.duration_ms for name, step in self.steps.items()}

    def send_to_posthog(
        self,
        posthog_client: Posthog,
        extra_properties: dict[str, Any] | None = None,
    ) -> None:
        """Send all telemetry events to PostHog.

        Args:
            posthog_client: PostHog client instance
            extra_properties: Additional properties to include in the completed event
        """
        extra_properties = extra_properties or {}

        for step_name, step_result in self.steps.items():
            posthog_client.capture(
                distinct_id=DISTINCT_ID,
                event=f"search_{step_name}",
                properties={
                    "step": step_name,
                    "duration_ms": round(step_result.duration_ms, 2),
                    "success": step_result.success,
                    "error_type": step_result.error_type,
                },
            )

        upstream_props = (get_upstream_stats() or _empty_upstream_stats()).copy()

        posthog_client.capture(
            distinct_id=DISTINCT_ID,
            event="search_completed",
            properties={
                "total_duration_ms": round(self.get_total_duration_ms(), 2),
                "steps": self.get_step_timings(),
                "api_calls": self.api_calls.copy(),
                "upstream": upstream_props,
                **extra_properties,
            },
        )

        logger.debug(
            f"Sent telemetry: {len(self.steps)} steps, total {self.get_total_duration_ms():.1f}ms"
        )


# ---------------------------------------------------------------------------
# Per-request upstream stats via ContextVar
# ---------------------------------------------------------------------------

_upstream_stats_var: ContextVar[dict | None] = ContextVar("upstream_stats")


def _empty_upstream_stats() -> dict:
    return {
        "calls": 0,
        "failures": 0,
        "timeouts": 0,
        "api_time_ms": 0.0,
    }


def init_upstream_stats() -> None:
    """Initialize upstream stats for the current request context.

    Tasks spawned afterwards copy the context and share the same dict.
    """
    _upstream_stats_var.set(_empty_upstream_stats())


def record_upstream_call(ms: float, failed: bool = False, timed_out: bool = False) -> None:
    """Record one finished upstream call in the current request context."""
    stats = _upstream_stats_var.get(None)
    if stats is None:
        return
    stats["calls"] += 1
    stats["api_time_ms"] += ms
    if failed:
        stats["failures"] += 1
    if timed_out:
        stats["timeouts"] += 1


def get_upstream_stats() -> dict | None:
    """Get upstream stats for the current request context, or None if not initialized."""
    return _upstream_stats_var.get(None)
