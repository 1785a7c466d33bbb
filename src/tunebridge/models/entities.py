"""Canonical catalogue entities shared by all providers.

Entities are trees, never graphs: a song holds its albums and artists,
an album holds its songs and artists, but nothing points back up. They
are built fresh from each provider response and compared only through
the predicates in :mod:`tunebridge.lib.equivalence`.
"""

from dataclasses import dataclass, field

from tunebridge.lib.normalize import (
    normalize_album_title,
    normalize_artist_name,
    normalize_title,
)


@dataclass(frozen=True, eq=False)
class ArtistData:
    """An artist as seen by one provider.

    Attributes:
        display_name: Name as the provider spells it.
        albums: Albums by the artist, usually empty unless fetched directly.
        normalized_name: Comparison key derived from display_name.
    """

    display_name: str
    albums: tuple["AlbumData", ...] = ()
    normalized_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "normalized_name", normalize_artist_name(self.display_name)
        )


@dataclass(frozen=True, eq=False)
class AlbumData:
    """An album as seen by one provider.

    Attributes:
        display_name: Title as the provider spells it.
        upc: Universal Product Code, empty when the provider doesn't expose it.
        songs: Track listing, may be partial or empty.
        artists: Credited album artists.
        artwork_url: Cover image URL, empty when unknown.
        normalized_name: Comparison key derived from display_name.
    """

    display_name: str
    upc: str = ""
    songs: tuple["SongData", ...] = ()
    artists: tuple[ArtistData, ...] = ()
    artwork_url: str = ""
    normalized_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "normalized_name", normalize_album_title(self.display_name)
        )


@dataclass(frozen=True, eq=False)
class SongData:
    """A song as seen by one provider.

    Attributes:
        display_name: Title as the provider spells it.
        isrc: International Standard Recording Code, may be empty.
        duration_seconds: Track length in whole seconds.
        albums: Releases the song appears on.
        artists: Credited artists.
        normalized_name: Comparison key derived from display_name.
    """

    display_name: str
    isrc: str = ""
    duration_seconds: int = 0
    albums: tuple[AlbumData, ...] = ()
    artists: tuple[ArtistData, ...] = ()
    normalized_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "normalized_name", normalize_title(self.display_name))

    @property
    def artwork_url(self) -> str:
        """Cover of the first album carrying artwork, or empty."""
        return next((a.artwork_url for a in self.albums if a.artwork_url), "")
