"""Models for parsing Spotify Web API responses.

Only the fields needed for matching and display are declared.
"""

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "SpotifyAlbum",
    "SpotifyAlbumSearch",
    "SpotifyArtist",
    "SpotifyImage",
    "SpotifySimplifiedAlbum",
    "SpotifySimplifiedTrack",
    "SpotifyTrack",
    "SpotifyTrackSearch",
]


class SpotifyModel(BaseModel):
    """Base model for Spotify responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class SpotifyImage(SpotifyModel):
    """Cover image. Dimensions may be missing for user content."""

    url: str
    width: int | None = None
    height: int | None = None


class SpotifyArtist(SpotifyModel):
    """Simplified artist object."""

    name: str


class ExternalIds(SpotifyModel):
    """External identifiers; tracks carry an ISRC, albums a UPC."""

    isrc: str = ""
    upc: str = ""


class SpotifySimplifiedAlbum(SpotifyModel):
    """Album as embedded in track objects and search results."""

    id: str
    name: str
    images: list[SpotifyImage] = Field(default_factory=list)
    artists: list[SpotifyArtist] = Field(default_factory=list)


class SpotifySimplifiedTrack(SpotifyModel):
    """Track as embedded in album objects (no external IDs)."""

    id: str | None = None
    name: str
    duration_ms: int
    artists: list[SpotifyArtist] = Field(default_factory=list)


class SpotifyTrack(SpotifyModel):
    """Full track object from /tracks/{id} and track search."""

    id: str
    name: str
    duration_ms: int
    external_ids: ExternalIds = Field(default_factory=ExternalIds)
    album: SpotifySimplifiedAlbum
    artists: list[SpotifyArtist] = Field(default_factory=list)


class _TrackPage(SpotifyModel):
    items: list[SpotifySimplifiedTrack] = Field(default_factory=list)


class SpotifyAlbum(SpotifyModel):
    """Full album object from /albums/{id}."""

    id: str
    name: str
    external_ids: ExternalIds = Field(default_factory=ExternalIds)
    images: list[SpotifyImage] = Field(default_factory=list)
    artists: list[SpotifyArtist] = Field(default_factory=list)
    tracks: _TrackPage = Field(default_factory=_TrackPage)


class _FullTrackPage(SpotifyModel):
    items: list[SpotifyTrack] = Field(default_factory=list)


class _AlbumPage(SpotifyModel):
    items: list[SpotifySimplifiedAlbum] = Field(default_factory=list)


class SpotifyTrackSearch(SpotifyModel):
    """Response of /search?type=track."""

    tracks: _FullTrackPage = Field(default_factory=_FullTrackPage)


class SpotifyAlbumSearch(SpotifyModel):
    """Response of /search?type=album."""

    albums: _AlbumPage = Field(default_factory=_AlbumPage)
