"""Lyrics lookup against the lyrics.ovh API."""

import logging

from upstream.client import UpstreamClient, encode_component
from upstream.models import UpstreamErr

LYRICS_API_BASE = "https://api.lyrics.ovh/v1"


class LyricsService:
    """Fetches plain-text lyrics for an (artist, song) pair.

    Upstream failures are logged and turned into ``None``; they never reach
    the caller as exceptions.
    """

    service_name = "lyrics"

    def __init__(
        self,
        client: UpstreamClient,
        base_url: str = LYRICS_API_BASE,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)

    def build_url(self, artist: str, song: str) -> str:
        """Build the lookup URL, encoding artist and song independently."""
        return f"{self.base_url}/{encode_component(artist)}/{encode_component(song)}"

    async def fetch_lyrics(self, artist: str, song: str) -> str | None:
        """Look up lyrics for a song.

        Args:
            artist: Artist name
            song: Song title

        Returns:
            The lyrics text, or None if the upstream failed or has none
        """
        url = self.build_url(artist, song)
        self.logger.info(f"Fetching lyrics from: {url}")

        result = await self.client.fetch_json(url, service=self.service_name)
        if isinstance(result, UpstreamErr):
            self.logger.info(f"Lyrics fetch error for '{artist} - {song}': {result.describe()}")
            return None

        lyrics = extract_lyrics(result.body)
        if lyrics is None:
            self.logger.info(f"No lyrics field in response for '{artist} - {song}'")
            return None

        self.logger.info(f"Lyrics found for '{artist} - {song}', length: {len(lyrics)}")
        return lyrics


def extract_lyrics(body) -> str | None:
    """Pull a non-empty ``lyrics`` string out of a decoded response body."""
    if not isinstance(body, dict):
        return None
    lyrics = body.get("lyrics")
    if isinstance(lyrics, str) and lyrics:
        return lyrics
    return None
