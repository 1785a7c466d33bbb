"""Provider clients, one per streaming platform."""

import httpx

from tunebridge.auth import TokenCache
from tunebridge.config import APIConfig, Credentials
from tunebridge.models.enums import Platform
from tunebridge.providers.apple_music import AppleMusicProvider
from tunebridge.providers.base import (
    BaseProvider,
    Entity,
    ProviderClient,
    ShortLinkExpander,
)
from tunebridge.providers.deezer import DeezerProvider
from tunebridge.providers.spotify import SPOTIFY_TOKEN_URL, SpotifyProvider
from tunebridge.providers.tidal import TIDAL_TOKEN_URL, TidalProvider

__all__ = [
    "AppleMusicProvider",
    "BaseProvider",
    "DeezerProvider",
    "Entity",
    "ProviderClient",
    "ShortLinkExpander",
    "SpotifyProvider",
    "TidalProvider",
    "build_providers",
]

_PROVIDER_CLASSES: dict[Platform, type[BaseProvider]] = {
    Platform.SPOTIFY: SpotifyProvider,
    Platform.TIDAL: TidalProvider,
    Platform.DEEZER: DeezerProvider,
    Platform.APPLE_MUSIC: AppleMusicProvider,
}

_TOKEN_ENDPOINTS: dict[Platform, str] = {
    Platform.SPOTIFY: SPOTIFY_TOKEN_URL,
    Platform.TIDAL: TIDAL_TOKEN_URL,
}


def build_providers(
    credentials: Credentials,
    http: httpx.AsyncClient,
    tokens: TokenCache,
    config: APIConfig | None = None,
) -> dict[Platform, BaseProvider]:
    """Create a client for every configured platform.

    Client credentials are registered with the token cache; no token is
    requested until a provider first needs one.

    Returns:
        Providers keyed by platform, in canonical platform order.
    """
    config = config or APIConfig()
    client_credentials = {
        Platform.SPOTIFY: credentials.spotify,
        Platform.TIDAL: credentials.tidal,
    }
    providers: dict[Platform, BaseProvider] = {}
    for platform in credentials.configured_platforms:
        platform_tokens = None
        if (creds := client_credentials.get(platform)) is not None:
            tokens.register(platform, creds, _TOKEN_ENDPOINTS[platform])
            platform_tokens = tokens
        providers[platform] = _PROVIDER_CLASSES[platform](http, platform_tokens, config)
    return providers
