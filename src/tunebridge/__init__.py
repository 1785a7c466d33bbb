"""tunebridge - Convert music share links between streaming platforms.

This library turns a Spotify, Tidal, Deezer or Apple Music share link
into the equivalent links on every other configured platform. Entities
are matched across catalogues by ISRC/UPC, corroborated by normalized
titles, artists and durations.

Designed for use as a library in applications (e.g., FastAPI) with
a CLI for debugging and development.

Examples:
    Parse a share link:
    ```python
    from tunebridge import parse_share_link

    link = parse_share_link(
        "https://open.spotify.com/intl-de/track/36puuD04lEUD8kVwQsTLm6"
    )
    print(link.platform, link.object_type, link.country_code, link.id)
    ```

    Convert a link:
    ```python
    import httpx
    from tunebridge import ClientCredentials, Credentials, create_converter

    credentials = Credentials(
        spotify=ClientCredentials("id", "secret"),
        deezer=True,
    )
    async with httpx.AsyncClient() as http:
        converter = create_converter(credentials, http)
        results = await converter.convert(url)
    ```
"""

import time
from collections.abc import Callable

import httpx

from tunebridge.auth import AccessToken, TokenCache
from tunebridge.config import (
    AccessTokenSecret,
    APIConfig,
    ClientCredentials,
    Credentials,
)
from tunebridge.exceptions import (
    AuthorizationError,
    DecodeError,
    InvalidUrlError,
    MalformedLinkError,
    NoMatchFoundError,
    NotAShareLinkError,
    ProviderError,
    ShareLinkError,
    SourceNotFoundError,
    TransportError,
    TuneBridgeError,
    UnsuitableLinkError,
    UnsupportedFeatureError,
)
from tunebridge.lib.equivalence import (
    albums_equivalent,
    artists_equivalent,
    songs_equivalent,
)
from tunebridge.lib.normalize import (
    normalize_album_title,
    normalize_artist_name,
    normalize_song_title,
    normalize_title,
)
from tunebridge.models import (
    AlbumData,
    ArtistData,
    ConversionResults,
    Link,
    ObjectType,
    Platform,
    ShareLink,
    SongData,
)
from tunebridge.providers import build_providers
from tunebridge.services import ConversionService
from tunebridge.utils.url import is_supported_url, parse_share_link


def create_converter(
    credentials: Credentials,
    http: httpx.AsyncClient,
    config: APIConfig | None = None,
    clock: Callable[[], float] = time.time,
) -> ConversionService:
    """Create a configured conversion service.

    This is the recommended way to create a converter for library usage.
    It builds one provider client per configured platform and a token
    cache shared between them.

    Args:
        credentials: Provider credentials. Platforms without credentials
                     are left out of conversions.
        http: HTTP client used for every provider request. The caller
              owns it and is responsible for closing it.
        config: Optional API configuration. Uses defaults if not provided.
        clock: Time source for token expiry, in epoch seconds.

    Returns:
        A configured ConversionService instance.

    Examples:
        Basic usage:
        ```python
        async with httpx.AsyncClient() as http:
            converter = create_converter(Credentials(deezer=True), http)
            results = await converter.convert("https://www.deezer.com/track/3135556")
        ```

        With custom config:
        ```python
        config = APIConfig(timeout=5.0)
        converter = create_converter(credentials, http, config)
        ```
    """
    config = config or APIConfig()
    tokens = TokenCache(http, clock=clock, skew_seconds=config.token_skew_seconds)
    providers = build_providers(credentials, http, tokens, config)
    return ConversionService(providers)


__all__ = [
    "APIConfig",
    "AccessToken",
    "AccessTokenSecret",
    "AlbumData",
    "ArtistData",
    "AuthorizationError",
    "ClientCredentials",
    "ConversionResults",
    "ConversionService",
    "Credentials",
    "DecodeError",
    "InvalidUrlError",
    "Link",
    "MalformedLinkError",
    "NoMatchFoundError",
    "NotAShareLinkError",
    "ObjectType",
    "Platform",
    "ProviderError",
    "ShareLink",
    "ShareLinkError",
    "SongData",
    "SourceNotFoundError",
    "TokenCache",
    "TransportError",
    "TuneBridgeError",
    "UnsuitableLinkError",
    "UnsupportedFeatureError",
    "albums_equivalent",
    "artists_equivalent",
    "create_converter",
    "is_supported_url",
    "normalize_album_title",
    "normalize_artist_name",
    "normalize_song_title",
    "normalize_title",
    "parse_share_link",
    "songs_equivalent",
]
