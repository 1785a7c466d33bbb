"""Enumerations for tunebridge domain models."""

from enum import StrEnum


class Platform(StrEnum):
    """Supported music streaming platforms.

    Declaration order is the canonical provider iteration order.
    """

    SPOTIFY = "spotify"
    TIDAL = "tidal"
    DEEZER = "deezer"
    APPLE_MUSIC = "apple_music"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        match self:
            case Platform.SPOTIFY:
                return "Spotify"
            case Platform.TIDAL:
                return "Tidal"
            case Platform.DEEZER:
                return "Deezer"
            case Platform.APPLE_MUSIC:
                return "Apple Music"

    @property
    def home_url(self) -> str:
        """Public web player URL."""
        match self:
            case Platform.SPOTIFY:
                return "https://open.spotify.com"
            case Platform.TIDAL:
                return "https://tidal.com"
            case Platform.DEEZER:
                return "https://www.deezer.com"
            case Platform.APPLE_MUSIC:
                return "https://music.apple.com"


class ObjectType(StrEnum):
    """Kind of catalogue object a share link points to."""

    SONG = "song"
    ALBUM = "album"
    ARTIST = "artist"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        match self:
            case ObjectType.SONG:
                return "Song"
            case ObjectType.ALBUM:
                return "Album"
            case ObjectType.ARTIST:
                return "Artist"
