"""Result types returned by the upstream client."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FailureKind(StrEnum):
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"


@dataclass(frozen=True)
class UpstreamOk:
    """A 2xx response. ``body`` is the decoded JSON, or ``{"raw": text}`` if it was not JSON."""

    body: Any


@dataclass(frozen=True)
class UpstreamErr:
    """A failed upstream call."""

    kind: FailureKind
    message: str
    status_code: int | None = None
    body: str | None = None

    def describe(self) -> str:
        """Short human-readable reason for log lines."""
        if self.kind == FailureKind.HTTP_STATUS:
            return f"HTTP {self.status_code}"
        return f"{self.kind}: {self.message}"


UpstreamResult = UpstreamOk | UpstreamErr
