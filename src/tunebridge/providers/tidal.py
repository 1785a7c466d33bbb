"""Tidal OpenAPI v2 provider.

Tidal speaks JSON:API: related albums, artists and tracks arrive in the
``included`` list of the same document when requested via ``include``.
Link lookups use ISRC/barcode filters, which can return several
candidates; each is fetched and compared with the source entity.
"""

import logging

from tunebridge.exceptions import DecodeError, NoMatchFoundError
from tunebridge.lib.equivalence import albums_equivalent, songs_equivalent
from tunebridge.models.entities import AlbumData, ArtistData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import ShareLink
from tunebridge.models.tidal import (
    TidalAlbumAttributes,
    TidalArtistAttributes,
    TidalArtworkAttributes,
    TidalCollection,
    TidalDocument,
    TidalResource,
    TidalTrackAttributes,
)
from tunebridge.providers.base import BaseProvider
from tunebridge.utils.duration import parse_iso8601_duration

logger = logging.getLogger(__name__)

TIDAL_API_URL = "https://openapi.tidal.com/v2"
TIDAL_TOKEN_URL = "https://auth.tidal.com/v1/oauth2/token"

# Preferred cover width in pixels
_ARTWORK_WIDTH = 320


class TidalProvider(BaseProvider):
    """Tidal catalogue client using client-credentials bearer tokens."""

    platform = Platform.TIDAL
    base_url = TIDAL_API_URL

    async def fetch_song(self, link: ShareLink) -> SongData:
        self._check_link(link, ObjectType.SONG)
        document = await self._get_document(
            f"/tracks/{link.id}", link.country_code, include="albums,artists"
        )
        self._expect_type(document.data, "tracks")
        return SongData(
            **self._track_fields(document.data),
            albums=tuple(
                self._album_ref(r) for r in document.included_of_type("albums")
            ),
            artists=self._artists(document),
        )

    async def fetch_album(self, link: ShareLink) -> AlbumData:
        self._check_link(link, ObjectType.ALBUM)
        document = await self._get_document(
            f"/albums/{link.id}", link.country_code, include="items,artists,coverArt"
        )
        self._expect_type(document.data, "albums")
        attributes = self._parse(TidalAlbumAttributes, document.data.attributes)
        # Album items may include videos, which aren't songs
        songs = tuple(
            SongData(**self._track_fields(r))
            for r in document.included_of_type("tracks")
        )
        return AlbumData(
            display_name=attributes.title,
            upc=attributes.barcode_id,
            songs=songs,
            artists=self._artists(document),
            artwork_url=self._pick_artwork(document),
        )

    async def fetch_artwork(self, link: ShareLink) -> str:
        """Fetch the album cover for a song or album link.

        Songs don't carry artwork, so their first album is looked up.
        """
        self._check_platform(link)
        if link.object_type is ObjectType.ALBUM:
            album_id = link.id
        else:
            self._check_link(link, ObjectType.SONG)
            document = await self._get_document(
                f"/tracks/{link.id}", link.country_code, include="albums"
            )
            album_ids = document.data.related_ids("albums") or [
                r.id for r in document.included_of_type("albums")
            ]
            if not album_ids:
                return ""
            album_id = album_ids[0]

        document = await self._get_document(
            f"/albums/{album_id}", link.country_code, include="coverArt"
        )
        return self._pick_artwork(document)

    async def find_song_link(self, song: SongData, country_code: str) -> ShareLink:
        if not song.isrc:
            raise self._no_match(f"'{song.display_name}' (no ISRC)")

        candidates = await self._filter("/tracks", country_code, "isrc", song.isrc)
        for candidate_id in candidates:
            candidate = self._link(ObjectType.SONG, candidate_id, country_code)
            try:
                if songs_equivalent(await self.fetch_song(candidate), song):
                    return candidate
            except NoMatchFoundError:
                logger.debug("Tidal track %s vanished, skipping", candidate_id)
        raise self._no_match(f"ISRC {song.isrc}")

    async def find_album_link(self, album: AlbumData, country_code: str) -> ShareLink:
        if not album.upc:
            raise self._no_match(f"'{album.display_name}' (no UPC)")

        candidates = await self._filter("/albums", country_code, "barcodeId", album.upc)
        for candidate_id in candidates:
            candidate = self._link(ObjectType.ALBUM, candidate_id, country_code)
            try:
                if albums_equivalent(await self.fetch_album(candidate), album):
                    return candidate
            except NoMatchFoundError:
                logger.debug("Tidal album %s vanished, skipping", candidate_id)
        raise self._no_match(f"UPC {album.upc}")

    # -- Helpers --

    async def _get_document(
        self, path: str, country_code: str, include: str
    ) -> TidalDocument:
        data = await self._get_json(
            path, {"countryCode": country_code, "include": include}
        )
        return self._parse(TidalDocument, data)

    async def _filter(
        self, path: str, country_code: str, field: str, value: str
    ) -> list[str]:
        data = await self._get_json(
            path, {"countryCode": country_code, f"filter[{field}]": value}
        )
        return [resource.id for resource in self._parse(TidalCollection, data).data]

    def _expect_type(self, resource: TidalResource, resource_type: str) -> None:
        if resource.type != resource_type:
            raise DecodeError(
                f"Expected Tidal {resource_type} resource, got {resource.type}",
                self.platform,
            )

    def _track_fields(self, resource: TidalResource) -> dict:
        attributes = self._parse(TidalTrackAttributes, resource.attributes)
        try:
            duration = parse_iso8601_duration(attributes.duration)
        except ValueError as e:
            raise DecodeError(str(e), self.platform) from e
        return {
            "display_name": attributes.title,
            "isrc": attributes.isrc,
            "duration_seconds": duration,
        }

    def _album_ref(self, resource: TidalResource) -> AlbumData:
        attributes = self._parse(TidalAlbumAttributes, resource.attributes)
        return AlbumData(display_name=attributes.title, upc=attributes.barcode_id)

    def _artists(self, document: TidalDocument) -> tuple[ArtistData, ...]:
        return tuple(
            ArtistData(
                display_name=self._parse(TidalArtistAttributes, r.attributes).name
            )
            for r in document.included_of_type("artists")
        )

    def _pick_artwork(self, document: TidalDocument) -> str:
        files = [
            file
            for r in document.included_of_type("artworks")
            for file in self._parse(TidalArtworkAttributes, r.attributes).files
        ]
        if not files:
            return ""
        best = min(files, key=lambda f: abs(f.meta.width - _ARTWORK_WIDTH))
        return best.href
