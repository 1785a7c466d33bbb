"""Models for parsing Deezer public API responses."""

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["DeezerAlbum", "DeezerErrorEnvelope", "DeezerTrack"]

# Deezer reports missing objects as error code 800 inside a 200 response
DEEZER_NOT_FOUND_CODE = 800


class DeezerModel(BaseModel):
    """Base model for Deezer responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class DeezerError(DeezerModel):
    type: str = ""
    message: str = ""
    code: int = 0


class DeezerErrorEnvelope(DeezerModel):
    """Error body Deezer returns with HTTP 200."""

    error: DeezerError


class DeezerAlbumRef(DeezerModel):
    id: int


class DeezerArtistRef(DeezerModel):
    name: str


class DeezerTrack(DeezerModel):
    """Track from /track/{id} or /track/isrc:{isrc}."""

    id: int
    title: str
    isrc: str = ""
    duration: int = 0
    album: DeezerAlbumRef
    artist: DeezerArtistRef


class DeezerTrackItem(DeezerModel):
    """Track as listed inside an album."""

    title: str
    isrc: str = ""
    duration: int = 0


class _TrackList(DeezerModel):
    data: list[DeezerTrackItem] = Field(default_factory=list)


class DeezerAlbum(DeezerModel):
    """Album from /album/{id} or /album/upc:{upc}."""

    id: int
    title: str
    upc: str = ""
    cover: str | None = None
    cover_small: str | None = None
    cover_medium: str | None = None
    cover_big: str | None = None
    artist: DeezerArtistRef | None = None
    tracks: _TrackList = Field(default_factory=_TrackList)

    @property
    def artwork_url(self) -> str:
        """Medium cover, falling back to small, big, then the default one."""
        for url in (self.cover_medium, self.cover_small, self.cover_big, self.cover):
            if url:
                return url
        return ""
