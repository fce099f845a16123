"""Pydantic models for artist metadata."""

from pydantic import BaseModel, ConfigDict, Field


class ArtistInfo(BaseModel):
    """Normalized artist metadata.

    Optional fields are None when the upstream has no value for them and are
    left out of the serialized payload.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    biography: str
    image: str | None = None
    genre: str | None = None
    country: str | None = None
    formed_year: str | int | None = Field(None, alias="formedYear")
    website: str | None = None

    def to_payload(self) -> dict:
        """Serialize with camelCase keys, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
