"""Search aggregator: fans one query out to both lookup services.

The lyrics and artist-info lookups run as two independent tasks. Neither
waits on the other, and a failure in one only leaves its own field empty.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from artists.service import ArtistInfoService
from core.telemetry import RequestTelemetry
from lyrics.service import LyricsService
from search.models import AggregateResult, LookupQuery

T = TypeVar("T")


async def _timed(
    step: str,
    service: str,
    lookup: Awaitable[T],
    telemetry: RequestTelemetry | None,
) -> T:
    """Await a lookup, timing it as a telemetry step when telemetry is enabled."""
    if telemetry is None:
        return await lookup
    telemetry.record_api_call(service)
    with telemetry.track_step(step):
        return await lookup


def _settled(name: str, outcome: object, log: logging.Logger) -> object:
    """Map an unexpected exception from a lookup task to None."""
    if isinstance(outcome, BaseException):
        log.error(f"{name} lookup raised unexpectedly: {outcome!r}")
        return None
    return outcome


async def aggregate(
    query: LookupQuery,
    lyrics_service: LyricsService,
    artist_service: ArtistInfoService,
    telemetry: RequestTelemetry | None = None,
    logger: logging.Logger | None = None,
) -> AggregateResult:
    """Look up lyrics and artist info for a query and merge whatever comes back.

    Always returns a successful result; a field is None when its lookup
    found nothing or failed.
    """
    log = logger or logging.getLogger(__name__)
    log.info(f"Searching for: {query.artist} - {query.song}")

    lyrics_task = asyncio.create_task(
        _timed(
            "lyrics",
            lyrics_service.service_name,
            lyrics_service.fetch_lyrics(query.artist, query.song),
            telemetry,
        )
    )
    artist_task = asyncio.create_task(
        _timed(
            "artist_info",
            artist_service.service_name,
            artist_service.fetch_artist_info(query.artist),
            telemetry,
        )
    )

    lyrics, artist_info = await asyncio.gather(lyrics_task, artist_task, return_exceptions=True)

    result = AggregateResult(
        artist=query.artist,
        song=query.song,
        lyrics=_settled("Lyrics", lyrics, log),
        artist_info=_settled("Artist info", artist_info, log),
    )

    log.info(
        f"Final result - Lyrics: {'YES' if result.lyrics else 'NO'}, "
        f"Artist Info: {'YES' if result.artist_info else 'NO'}"
    )
    return result
