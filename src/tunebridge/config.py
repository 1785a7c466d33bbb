"""Configuration for tunebridge."""

from dataclasses import dataclass

from tunebridge.models.enums import Platform


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth2 client-credentials pair.

    Attributes:
        client_id: Application client ID.
        client_secret: Application client secret. Never logged.
    """

    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"ClientCredentials(client_id={self.client_id!r}, client_secret='***')"


@dataclass(frozen=True)
class AccessTokenSecret:
    """Static developer token for providers without a client-credentials grant."""

    secret: str

    def __repr__(self) -> str:
        return "AccessTokenSecret(secret='***')"


@dataclass(frozen=True)
class Credentials:
    """Credentials for every provider, absent ones left as None.

    A provider without credentials is not configured and takes no part in
    conversions. Deezer's catalogue API is public, so it is a plain opt-in.

    Attributes:
        spotify: Spotify client credentials.
        tidal: Tidal client credentials.
        deezer: Whether the Deezer provider is enabled.
        apple_music: Apple Music developer token.
    """

    spotify: ClientCredentials | None = None
    tidal: ClientCredentials | None = None
    deezer: bool = False
    apple_music: AccessTokenSecret | None = None

    @property
    def configured_platforms(self) -> list[Platform]:
        """Configured platforms in canonical iteration order."""
        configured = {
            Platform.SPOTIFY: self.spotify is not None,
            Platform.TIDAL: self.tidal is not None,
            Platform.DEEZER: self.deezer,
            Platform.APPLE_MUSIC: self.apple_music is not None,
        }
        return [platform for platform in Platform if configured[platform]]


@dataclass(frozen=True)
class APIConfig:
    """Provider HTTP configuration.

    Attributes:
        timeout: Per-request timeout in seconds.
        token_skew_seconds: Safety margin subtracted from token lifetimes.
    """

    timeout: float = 10.0
    token_skew_seconds: int = 5
