"""Artist metadata lookup against TheAudioDB."""

import logging
from typing import Any

from pydantic import ValidationError

from artists.models import ArtistInfo
from upstream.client import UpstreamClient, encode_component
from upstream.models import UpstreamErr

AUDIODB_API_BASE = "https://theaudiodb.com/api/v1/json"
AUDIODB_PUBLIC_KEY = "1"

NO_BIOGRAPHY = "No biography available."

logger = logging.getLogger(__name__)


def _first_present(*values: Any) -> Any:
    """Return the first value that is neither None nor an empty string."""
    for value in values:
        if value is not None and value != "":
            return value
    return None


def first_artist_match(body: Any) -> dict | None:
    """Return the first entry of the ``artists`` list, if there is one.

    Name collisions are not disambiguated; TheAudioDB's ordering is kept.
    """
    if not isinstance(body, dict):
        return None
    artists = body.get("artists")
    if not isinstance(artists, list) or not artists:
        return None
    match = artists[0]
    return match if isinstance(match, dict) else None


def normalize_artist(match: dict) -> ArtistInfo | None:
    """Map a TheAudioDB artist record onto ArtistInfo.

    Returns None when the record has no usable name or a field has an
    unexpected type.
    """
    name = _first_present(match.get("strArtist"))
    if not isinstance(name, str):
        return None

    try:
        return ArtistInfo(
            name=name,
            biography=_first_present(
                match.get("strBiographyEN"), match.get("strBiography"), NO_BIOGRAPHY
            ),
            image=_first_present(match.get("strArtistThumb"), match.get("strArtistLogo")),
            genre=_first_present(match.get("strGenre")),
            country=_first_present(match.get("strCountry")),
            formed_year=_first_present(match.get("intFormedYear")),
            website=_first_present(match.get("strWebsite")),
        )
    except ValidationError as e:
        logger.debug(f"Malformed artist record for '{name}': {e}")
        return None


class ArtistInfoService:
    """Fetches and normalizes artist metadata by artist name.

    Upstream failures and unexpected response shapes are logged and turned
    into ``None``.
    """

    service_name = "audiodb"

    def __init__(
        self,
        client: UpstreamClient,
        base_url: str = AUDIODB_API_BASE,
        api_key: str = AUDIODB_PUBLIC_KEY,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.logger = logger or logging.getLogger(__name__)

    def build_url(self, artist: str) -> str:
        """Build the artist search URL."""
        return f"{self.base_url}/{self.api_key}/search.php?s={encode_component(artist)}"

    async def fetch_artist_info(self, artist: str) -> ArtistInfo | None:
        """Look up metadata for an artist.

        Args:
            artist: Artist name as typed by the user

        Returns:
            ArtistInfo for the first match, or None
        """
        url = self.build_url(artist)
        self.logger.info(f"Fetching artist info from: {url}")

        result = await self.client.fetch_json(url, service=self.service_name)
        if isinstance(result, UpstreamErr):
            self.logger.info(f"Artist info fetch error for '{artist}': {result.describe()}")
            return None

        match = first_artist_match(result.body)
        if match is None:
            self.logger.info(f"No artist match for '{artist}'")
            return None

        info = normalize_artist(match)
        if info is None:
            self.logger.info(f"Artist match for '{artist}' could not be normalized")
            return None

        self.logger.info(f"Artist info found for: {info.name}")
        return info
