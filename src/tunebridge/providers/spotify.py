"""Spotify Web API provider."""

import logging

from tunebridge.lib.equivalence import albums_equivalent, songs_equivalent
from tunebridge.models.entities import AlbumData, ArtistData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import ShareLink
from tunebridge.models.spotify import (
    SpotifyAlbum,
    SpotifyAlbumSearch,
    SpotifyArtist,
    SpotifyImage,
    SpotifySimplifiedAlbum,
    SpotifyTrack,
    SpotifyTrackSearch,
)
from tunebridge.providers.base import BaseProvider
from tunebridge.utils.duration import milliseconds_to_seconds

logger = logging.getLogger(__name__)

SPOTIFY_API_URL = "https://api.spotify.com/v1"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# Preferred cover width in pixels
_ARTWORK_WIDTH = 300


def _pick_image(images: list[SpotifyImage]) -> str:
    if not images:
        return ""
    best = min(images, key=lambda image: abs((image.width or 0) - _ARTWORK_WIDTH))
    return best.url


def _artists(artists: list[SpotifyArtist]) -> tuple[ArtistData, ...]:
    return tuple(ArtistData(display_name=artist.name) for artist in artists)


def _album_ref(album: SpotifySimplifiedAlbum) -> AlbumData:
    return AlbumData(
        display_name=album.name,
        artists=_artists(album.artists),
        artwork_url=_pick_image(album.images),
    )


def _song_from_track(track: SpotifyTrack) -> SongData:
    return SongData(
        display_name=track.name,
        isrc=track.external_ids.isrc,
        duration_seconds=milliseconds_to_seconds(track.duration_ms),
        albums=(_album_ref(track.album),),
        artists=_artists(track.artists),
    )


class SpotifyProvider(BaseProvider):
    """Spotify catalogue client using client-credentials bearer tokens."""

    platform = Platform.SPOTIFY
    base_url = SPOTIFY_API_URL

    async def fetch_song(self, link: ShareLink) -> SongData:
        self._check_link(link, ObjectType.SONG)
        data = await self._get_json(
            f"/tracks/{link.id}", {"market": link.country_code}
        )
        return _song_from_track(self._parse(SpotifyTrack, data))

    async def fetch_album(self, link: ShareLink) -> AlbumData:
        self._check_link(link, ObjectType.ALBUM)
        data = await self._get_json(
            f"/albums/{link.id}", {"market": link.country_code}
        )
        album = self._parse(SpotifyAlbum, data)
        artists = _artists(album.artists)
        songs = tuple(
            SongData(
                display_name=track.name,
                duration_seconds=milliseconds_to_seconds(track.duration_ms),
                artists=_artists(track.artists),
            )
            for track in album.tracks.items
        )
        return AlbumData(
            display_name=album.name,
            upc=album.external_ids.upc,
            songs=songs,
            artists=artists,
            artwork_url=_pick_image(album.images),
        )

    async def find_song_link(self, song: SongData, country_code: str) -> ShareLink:
        """Search by ISRC and return the first equivalent track."""
        if not song.isrc:
            raise self._no_match(f"'{song.display_name}' (no ISRC)")

        data = await self._get_json(
            "/search",
            {"q": f"isrc:{song.isrc}", "type": "track", "market": country_code},
        )
        for track in self._parse(SpotifyTrackSearch, data).tracks.items:
            if songs_equivalent(_song_from_track(track), song):
                return self._link(ObjectType.SONG, track.id, country_code)
        raise self._no_match(f"ISRC {song.isrc}")

    async def find_album_link(self, album: AlbumData, country_code: str) -> ShareLink:
        """Search by UPC, then fetch candidates until one is equivalent."""
        if not album.upc:
            raise self._no_match(f"'{album.display_name}' (no UPC)")

        data = await self._get_json(
            "/search",
            {"q": f"upc:{album.upc}", "type": "album", "market": country_code},
        )
        for item in self._parse(SpotifyAlbumSearch, data).albums.items:
            candidate = self._link(ObjectType.ALBUM, item.id, country_code)
            if albums_equivalent(await self.fetch_album(candidate), album):
                return candidate
        raise self._no_match(f"UPC {album.upc}")
