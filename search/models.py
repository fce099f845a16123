"""Models for the search API contract."""

from pydantic import BaseModel, ConfigDict, Field

from artists.models import ArtistInfo


class LookupQuery(BaseModel):
    """A decoded (artist, song) pair taken from the request path."""

    model_config = ConfigDict(frozen=True)

    artist: str = Field(..., min_length=1)
    song: str = Field(..., min_length=1)


class AggregateResult(BaseModel):
    """Combined lookup result.

    ``success`` is always True for a well-formed query; upstream failures
    only leave ``lyrics`` or ``artist_info`` as None.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    artist: str
    song: str
    lyrics: str | None = None
    artist_info: ArtistInfo | None = Field(None, alias="artistInfo")

    def to_payload(self) -> dict:
        """Serialize for the wire: null fields kept, absent artist fields dropped."""
        return {
            "success": self.success,
            "artist": self.artist,
            "song": self.song,
            "lyrics": self.lyrics,
            "artistInfo": self.artist_info.to_payload() if self.artist_info else None,
        }
