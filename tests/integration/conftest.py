"""Integration test fixtures.

Runs the real application with real lyrics/artist services. The upstream
APIs are simulated by an ``httpx.MockTransport`` whose per-host behaviour
each test can swap out, and static files come from a temporary asset root.
"""

import asyncio

import httpx
import pytest
import pytest_asyncio

from artists.service import ArtistInfoService
from config.settings import Settings
from lyrics.service import LyricsService
from tests.factories import ARTIST_BODY, LYRICS_BODY
from upstream.client import UpstreamClient

LYRICS_HOST = "lyrics.test"
AUDIODB_HOST = "audiodb.test"


class FakeUpstreams:
    """Routes mock requests to a per-host handler."""

    def __init__(self):
        self.handlers = {
            LYRICS_HOST: lambda request: httpx.Response(200, json=LYRICS_BODY),
            AUDIODB_HOST: lambda request: httpx.Response(200, json=ARTIST_BODY),
        }
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.handlers[request.url.host](request)
        if asyncio.iscoroutine(response):
            response = await response
        return response


def failing(request: httpx.Request):
    raise httpx.ConnectError("Connection refused", request=request)


def stalling(seconds: float):
    async def handler(request: httpx.Request):
        await asyncio.sleep(seconds)
        return httpx.Response(200, json={})

    return handler


def delayed(seconds: float, response: httpx.Response):
    async def handler(request: httpx.Request):
        await asyncio.sleep(seconds)
        return response

    return handler


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def asset_root(tmp_path):
    """Temporary asset root with a sibling directory outside it."""
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>Music Explorer</h1>")
    (root / "app.js").write_text("console.log('hi');")
    (tmp_path / "secret.txt").write_text("top secret")
    return root


@pytest.fixture
def test_settings(asset_root):
    """Settings with fake upstream hosts, telemetry disabled."""
    return Settings(
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        upstream_timeout=1.0,
        lyrics_api_base=f"http://{LYRICS_HOST}/v1",
        audiodb_api_base=f"http://{AUDIODB_HOST}/api/v1/json",
        static_root=asset_root,
    )


@pytest.fixture
def upstreams():
    return FakeUpstreams()


@pytest_asyncio.fixture
async def upstream_client(upstreams, test_settings):
    client = UpstreamClient(
        timeout=test_settings.upstream_timeout, transport=httpx.MockTransport(upstreams)
    )
    yield client
    await client.close()


@pytest_asyncio.fixture
async def app_client(upstream_client, test_settings):
    """httpx AsyncClient against the app with real services and fake upstreams."""
    from httpx import ASGITransport, AsyncClient

    from config.settings import get_settings
    from core.dependencies import (
        get_artist_info_service,
        get_lyrics_service,
        get_posthog_client,
        get_upstream_client,
    )
    from main import app

    app.dependency_overrides[get_upstream_client] = lambda: upstream_client
    app.dependency_overrides[get_lyrics_service] = lambda: LyricsService(
        upstream_client, base_url=test_settings.lyrics_api_base
    )
    app.dependency_overrides[get_artist_info_service] = lambda: ArtistInfoService(
        upstream_client, base_url=test_settings.audiodb_api_base
    )
    app.dependency_overrides[get_posthog_client] = lambda: None
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
