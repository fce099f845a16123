"""Unit tests for routers/health.py."""

import pytest
from httpx import ASGITransport, AsyncClient

from routers.health import health_check
from tests.unit.conftest import override_deps


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_body(self):
        assert await health_check() == {"status": "OK", "message": "Server is running"}


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_ok(self, mock_settings):
        from config.settings import get_settings
        from main import app

        with override_deps(app, {get_settings: mock_settings}):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                resp = await client.get("/api/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "OK", "message": "Server is running"}

    @pytest.mark.asyncio
    async def test_does_not_touch_search_services(
        self, mock_lyrics_service, mock_artist_service, mock_settings
    ):
        from config.settings import get_settings
        from core.dependencies import get_artist_info_service, get_lyrics_service
        from main import app

        with override_deps(
            app,
            {
                get_lyrics_service: mock_lyrics_service,
                get_artist_info_service: mock_artist_service,
                get_settings: mock_settings,
            },
        ):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                await client.get("/api/health")

        mock_lyrics_service.fetch_lyrics.assert_not_called()
        mock_artist_service.fetch_artist_info.assert_not_called()
