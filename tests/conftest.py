"""Shared test fixtures for pytest."""

from unittest.mock import AsyncMock, Mock

import pytest

from artists.service import ArtistInfoService
from lyrics.service import LyricsService
from tests.factories import make_artist_info


@pytest.fixture
def mock_upstream_client():
    """Create a mock upstream client."""
    client = AsyncMock()
    client.fetch_json = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_lyrics_service():
    """Create a mock lyrics service."""
    service = AsyncMock(spec=LyricsService)
    service.service_name = "lyrics"
    service.fetch_lyrics = AsyncMock(return_value=None)
    return service


@pytest.fixture
def mock_artist_service():
    """Create a mock artist-info service."""
    service = AsyncMock(spec=ArtistInfoService)
    service.service_name = "audiodb"
    service.fetch_artist_info = AsyncMock(return_value=None)
    return service


@pytest.fixture
def sample_artist_info():
    """Create a sample ArtistInfo for testing."""
    return make_artist_info()


@pytest.fixture
def test_logger():
    """A stand-in logger for services that accept an injected one."""
    return Mock()
