"""Search API router."""

import logging
from urllib.parse import unquote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from posthog import Posthog

from artists.service import ArtistInfoService
from core.dependencies import get_artist_info_service, get_lyrics_service, get_posthog_client
from core.exceptions import InvalidQueryError
from core.sentry import capture_exception
from core.telemetry import RequestTelemetry, init_upstream_stats
from lyrics.service import LyricsService
from search.aggregator import aggregate
from search.models import LookupQuery

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

INVALID_PATH_BODY = {"success": False, "error": "Invalid API path"}
INTERNAL_ERROR_BODY = {"success": False, "error": "Internal server error"}


def parse_search_path(raw_path: str) -> LookupQuery:
    """Extract the (artist, song) pair from a still-encoded search path.

    Segments are split before decoding so an encoded slash stays part of
    its segment. Segments after the song are ignored.

    Raises:
        InvalidQueryError: If artist or song is missing, empty, or not valid UTF-8
    """
    parts = raw_path.split("?", 1)[0].split("/")
    # ["", "api", "search", artist, song, ...]
    if len(parts) < 5:
        raise InvalidQueryError("Invalid API path", {"path": raw_path})

    try:
        artist = unquote(parts[3], errors="strict")
        song = unquote(parts[4], errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidQueryError("Invalid API path", {"path": raw_path}) from e

    if not artist or not song:
        raise InvalidQueryError("Invalid API path", {"path": raw_path})

    return LookupQuery(artist=artist, song=song)


def _raw_path(request: Request) -> str:
    raw = request.scope.get("raw_path")
    return raw.decode("latin-1") if raw else request.url.path


@router.get(
    "/api/search/{segments:path}",
    summary="Look up lyrics and artist info for a song",
    description="""
    Queries the lyrics API and TheAudioDB concurrently and merges the results.

    Either upstream may fail independently; its field is then null and the
    response is still a 200 with success=true.
    """,
    responses={
        200: {"description": "Search completed (fields may be null)"},
        400: {"description": "Path is missing the artist or song segment"},
        500: {"description": "Internal server error"},
    },
)
async def handle_search(
    request: Request,
    lyrics_service: LyricsService = Depends(get_lyrics_service),
    artist_service: ArtistInfoService = Depends(get_artist_info_service),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Process a search request."""
    try:
        query = parse_search_path(_raw_path(request))
    except InvalidQueryError as e:
        logger.info(f"Rejected search path: {e.details.get('path')}")
        return JSONResponse(status_code=400, content=INVALID_PATH_BODY)

    init_upstream_stats()
    telemetry = RequestTelemetry()

    try:
        result = await aggregate(query, lyrics_service, artist_service, telemetry=telemetry)

        if posthog_client:
            telemetry.send_to_posthog(
                posthog_client,
                {
                    "had_lyrics": result.lyrics is not None,
                    "had_artist_info": result.artist_info is not None,
                },
            )

    except Exception as e:
        logger.exception(f"Search failed for '{query.artist} - {query.song}'")
        capture_exception(e, {"artist": query.artist, "song": query.song})
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    return JSONResponse(content=result.to_payload())
