"""Canonical share link value type."""

from dataclasses import dataclass

from tunebridge.models.enums import ObjectType, Platform

DEFAULT_COUNTRY = "US"


@dataclass(frozen=True)
class ShareLink:
    """A parsed, provider-specific link to a song, album or artist.

    Attributes:
        platform: Platform owning the link.
        object_type: Kind of object the link points to.
        id: Provider ID. Never contains "/" or query-string remnants.
        country_code: ISO 3166-1 alpha-2 code, upper-case.
    """

    platform: Platform
    object_type: ObjectType
    id: str
    country_code: str = DEFAULT_COUNTRY

    def to_url(self) -> str:
        """Build the canonical public URL for this link.

        The country is embedded only where the provider's URL carries one:
        Apple Music always, Spotify as an ``intl-xx`` locale when it isn't
        the default. Apple Music slugs are replaced by ``_``.
        """
        match self.platform:
            case Platform.SPOTIFY:
                locale = ""
                if self.country_code != DEFAULT_COUNTRY:
                    locale = f"intl-{self.country_code.lower()}/"
                return f"https://open.spotify.com/{locale}{self._path_type}/{self.id}"
            case Platform.TIDAL:
                return f"https://tidal.com/browse/{self._path_type}/{self.id}"
            case Platform.DEEZER:
                return f"https://www.deezer.com/{self._path_type}/{self.id}"
            case Platform.APPLE_MUSIC:
                country = self.country_code.lower()
                return (
                    f"https://music.apple.com/{country}/{self._path_type}/_/{self.id}"
                )

    @property
    def _path_type(self) -> str:
        # Apple Music calls songs "song", everyone else "track"
        if self.object_type is ObjectType.SONG:
            return "song" if self.platform is Platform.APPLE_MUSIC else "track"
        return self.object_type.value
