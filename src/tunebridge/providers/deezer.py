"""Deezer public API provider.

Deezer needs no credentials. It looks tracks and albums up directly by
ISRC/UPC and reports misses inside a 200 response as an error envelope.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from tunebridge.exceptions import DecodeError, NoMatchFoundError, TransportError
from tunebridge.models.deezer import (
    DEEZER_NOT_FOUND_CODE,
    DeezerAlbum,
    DeezerErrorEnvelope,
    DeezerTrack,
)
from tunebridge.models.entities import AlbumData, ArtistData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import ShareLink
from tunebridge.providers.base import BaseProvider

logger = logging.getLogger(__name__)

DEEZER_API_URL = "https://api.deezer.com"


class DeezerProvider(BaseProvider):
    """Deezer catalogue client."""

    platform = Platform.DEEZER
    base_url = DEEZER_API_URL

    async def fetch_song(self, link: ShareLink) -> SongData:
        """Fetch a track, plus its album for UPC and artwork."""
        self._check_link(link, ObjectType.SONG)
        track = self._parse(DeezerTrack, await self._get_deezer(f"/track/{link.id}"))
        album = await self.fetch_album(
            self._link(ObjectType.ALBUM, str(track.album.id), link.country_code)
        )
        return SongData(
            display_name=track.title,
            isrc=track.isrc,
            duration_seconds=track.duration,
            albums=(album,),
            artists=(ArtistData(display_name=track.artist.name, albums=(album,)),),
        )

    async def fetch_album(self, link: ShareLink) -> AlbumData:
        self._check_link(link, ObjectType.ALBUM)
        album = self._parse(DeezerAlbum, await self._get_deezer(f"/album/{link.id}"))
        artists = (ArtistData(display_name=album.artist.name),) if album.artist else ()
        songs = tuple(
            SongData(
                display_name=item.title,
                isrc=item.isrc,
                duration_seconds=item.duration,
                artists=artists,
            )
            for item in album.tracks.data
        )
        return AlbumData(
            display_name=album.title,
            upc=album.upc,
            songs=songs,
            artists=artists,
            artwork_url=album.artwork_url,
        )

    async def find_song_link(self, song: SongData, country_code: str) -> ShareLink:
        if not song.isrc:
            raise self._no_match(f"'{song.display_name}' (no ISRC)")
        data = await self._get_deezer(f"/track/isrc:{song.isrc}")
        track = self._parse(DeezerTrack, data)
        return self._link(ObjectType.SONG, str(track.id), country_code)

    async def find_album_link(self, album: AlbumData, country_code: str) -> ShareLink:
        if not album.upc:
            raise self._no_match(f"'{album.display_name}' (no UPC)")
        data = await self._get_deezer(f"/album/upc:{album.upc}")
        found = self._parse(DeezerAlbum, data)
        return self._link(ObjectType.ALBUM, str(found.id), country_code)

    async def expand_short_link(self, url: str) -> str:
        """Follow a ``link.deezer.com`` redirect to the full share link.

        Raises:
            TransportError: If the redirect chain can't be followed.
        """
        logger.debug("Expanding Deezer short link %s", url)
        try:
            response = await self._http.get(
                url, follow_redirects=True, timeout=self._config.timeout
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"Failed to expand Deezer short link: {e}", self.platform
            ) from e
        if not response.is_success:
            raise TransportError(
                f"Deezer short link returned HTTP {response.status_code}",
                self.platform,
            )
        return str(response.url)

    async def _get_deezer(
        self, path: str, params: Mapping[str, str] | None = None
    ) -> Any:
        data = await self._get_json(path, params)
        if isinstance(data, dict) and "error" in data:
            envelope = self._parse(DeezerErrorEnvelope, data)
            if envelope.error.code == DEEZER_NOT_FOUND_CODE:
                raise NoMatchFoundError(
                    f"Deezer has no resource at {path}", self.platform
                )
            logger.warning("Deezer error for %s: %s", path, envelope.error.message)
            raise DecodeError(
                f"Deezer error: {envelope.error.message or envelope.error.type}",
                self.platform,
            )
        return data
