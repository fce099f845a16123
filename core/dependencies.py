"""FastAPI dependency injection providers."""

import logging

from fastapi import Depends
from posthog import Posthog

from artists.service import ArtistInfoService
from config.settings import Settings, get_settings
from lyrics.service import LyricsService
from static.responder import StaticResponder
from upstream.client import UpstreamClient

logger = logging.getLogger(__name__)

# Module-level instances for lifecycle management
_upstream_client: UpstreamClient | None = None
_posthog_client: Posthog | None = None


def get_upstream_client(settings: Settings = Depends(get_settings)) -> UpstreamClient:
    """Get the shared upstream client.

    Args:
        settings: Application settings

    Returns:
        UpstreamClient: Client reused across requests
    """
    global _upstream_client

    if _upstream_client is None:
        _upstream_client = UpstreamClient(
            timeout=settings.upstream_timeout,
            user_agent=settings.upstream_user_agent,
        )
        logger.info(f"Upstream client initialized (timeout: {settings.upstream_timeout}s)")

    return _upstream_client


async def close_upstream_client() -> None:
    """Close the shared upstream client and its connection pool."""
    global _upstream_client
    if _upstream_client:
        await _upstream_client.close()
        _upstream_client = None


def get_lyrics_service(
    client: UpstreamClient = Depends(get_upstream_client),
    settings: Settings = Depends(get_settings),
) -> LyricsService:
    """Get a lyrics service bound to the shared upstream client."""
    return LyricsService(client, base_url=settings.lyrics_api_base)


def get_artist_info_service(
    client: UpstreamClient = Depends(get_upstream_client),
    settings: Settings = Depends(get_settings),
) -> ArtistInfoService:
    """Get an artist-info service bound to the shared upstream client."""
    return ArtistInfoService(
        client,
        base_url=settings.audiodb_api_base,
        api_key=settings.audiodb_api_key,
    )


def get_static_responder(settings: Settings = Depends(get_settings)) -> StaticResponder:
    """Get a static responder for the configured asset root."""
    return StaticResponder(
        root=settings.resolved_static_root,
        index_document=settings.index_document,
    )


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            project_api_key=settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
