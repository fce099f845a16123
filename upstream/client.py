"""Generic fetch-one-URL client for the third-party lookup APIs.

Every call makes exactly one GET and returns an ``UpstreamResult`` instead of
raising: timeouts, transport failures and non-2xx statuses become
``UpstreamErr`` values, and a 2xx body that is not JSON is carried as
``UpstreamOk({"raw": text})``. Callers decide whether missing data matters.
"""

import asyncio
import logging
import time
from urllib.parse import quote

import httpx

from config.settings import DEFAULT_USER_AGENT
from core.sentry import add_upstream_breadcrumb
from core.telemetry import record_upstream_call
from upstream.models import FailureKind, UpstreamErr, UpstreamOk, UpstreamResult

DEFAULT_TIMEOUT = 15.0

# Characters encodeURIComponent leaves alone on top of RFC 3986 unreserved ones
_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single path segment or query value."""
    return quote(value, safe=_COMPONENT_SAFE)


class UpstreamClient:
    """Shared HTTP client for outbound upstream lookups."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the client.

        Args:
            timeout: Hard per-call timeout in seconds
            user_agent: User-Agent header sent with every request
            transport: Optional httpx transport (tests pass an ``httpx.MockTransport``)
            logger: Optional logger; defaults to this module's logger
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.logger = logger or logging.getLogger(__name__)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json, text/plain, */*",
                    "Accept-Language": "en-US,en;q=0.9",
                },
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_json(
        self,
        url: str,
        timeout: float | None = None,
        service: str = "upstream",
    ) -> UpstreamResult:
        """GET ``url`` once and classify the outcome.

        Args:
            url: Fully built upstream URL
            timeout: Hard timeout in seconds, defaults to the client's timeout
            service: Upstream name used for logs, breadcrumbs and stats

        Returns:
            UpstreamOk with the decoded body, or UpstreamErr describing the failure
        """
        if timeout is None:
            timeout = self.timeout

        client = await self._get_client()
        start = time.perf_counter()

        try:
            # wait_for cancels the in-flight request, which aborts the transfer
            response = await asyncio.wait_for(client.get(url), timeout=timeout)
        except (TimeoutError, httpx.TimeoutException):
            result: UpstreamResult = UpstreamErr(
                kind=FailureKind.TIMEOUT, message=f"Request timeout after {timeout}s"
            )
        except httpx.RequestError as e:
            result = UpstreamErr(kind=FailureKind.TRANSPORT, message=str(e) or type(e).__name__)
        else:
            result = self._classify(url, response)

        elapsed_ms = (time.perf_counter() - start) * 1000
        self._record(service, url, result, elapsed_ms)
        return result

    def _classify(self, url: str, response: httpx.Response) -> UpstreamResult:
        """Turn a completed response into a result by status code."""
        text = response.text
        self.logger.debug(f"Response from {url}: {response.status_code} ({len(text)} chars)")

        if not response.is_success:
            return UpstreamErr(
                kind=FailureKind.HTTP_STATUS,
                message=f"HTTP {response.status_code}",
                status_code=response.status_code,
                body=text,
            )

        try:
            return UpstreamOk(body=response.json())
        except ValueError:
            self.logger.debug(f"Response from {url} is not JSON, returning raw body")
            return UpstreamOk(body={"raw": text})

    def _record(
        self, service: str, url: str, result: UpstreamResult, elapsed_ms: float
    ) -> None:
        """Log the outcome and feed breadcrumbs and per-request stats."""
        data: dict = {"url": url, "duration_ms": round(elapsed_ms, 2)}

        if isinstance(result, UpstreamErr):
            record_upstream_call(
                elapsed_ms, failed=True, timed_out=result.kind == FailureKind.TIMEOUT
            )
            data["failure"] = str(result.kind)
            if result.status_code is not None:
                data["status_code"] = result.status_code
            self.logger.warning(f"{service} request failed for {url}: {result.describe()}")
            add_upstream_breadcrumb(service, data, level="warning")
            return

        record_upstream_call(elapsed_ms)
        add_upstream_breadcrumb(service, data)
