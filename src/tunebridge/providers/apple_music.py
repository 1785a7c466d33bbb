"""Apple Music provider.

Apple Music links are recognised and can be configured with a developer
token, but no catalogue operation is available yet: every capability
reports UnsupportedFeatureError.
"""

from tunebridge.exceptions import UnsupportedFeatureError
from tunebridge.models.entities import AlbumData, SongData
from tunebridge.models.enums import Platform
from tunebridge.models.share_link import ShareLink
from tunebridge.providers.base import BaseProvider

APPLE_MUSIC_API_URL = "https://api.music.apple.com/v1"


class AppleMusicProvider(BaseProvider):
    """Placeholder client that rejects every operation."""

    platform = Platform.APPLE_MUSIC
    base_url = APPLE_MUSIC_API_URL

    def _unsupported(self) -> UnsupportedFeatureError:
        return UnsupportedFeatureError(
            "Apple Music conversion is not supported yet", self.platform
        )

    async def fetch_song(self, link: ShareLink) -> SongData:
        raise self._unsupported()

    async def fetch_album(self, link: ShareLink) -> AlbumData:
        raise self._unsupported()

    async def fetch_artwork(self, link: ShareLink) -> str:
        raise self._unsupported()

    async def find_song_link(self, song: SongData, country_code: str) -> ShareLink:
        raise self._unsupported()

    async def find_album_link(self, album: AlbumData, country_code: str) -> ShareLink:
        raise self._unsupported()
