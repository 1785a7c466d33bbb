"""Application settings using pydantic-settings."""

from functools import cache
from typing import Annotated, Literal, Self

from pydantic import BeforeValidator, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tunebridge.config import (
    AccessTokenSecret,
    APIConfig,
    ClientCredentials,
    Credentials,
)

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TUNEBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Log level")

    # Provider HTTP settings
    http_timeout: float = Field(
        default=10.0, gt=0, description="Provider request timeout in seconds"
    )
    token_skew_seconds: int = Field(
        default=5, ge=0, description="Refresh tokens this many seconds early"
    )

    # Provider credentials
    spotify_client_id: str | None = Field(default=None, description="Spotify ID")
    spotify_client_secret: str | None = Field(
        default=None, description="Spotify client secret"
    )
    tidal_client_id: str | None = Field(default=None, description="Tidal ID")
    tidal_client_secret: str | None = Field(
        default=None, description="Tidal client secret"
    )
    deezer_enabled: bool = Field(default=True, description="Enable Deezer")
    apple_music_token: str | None = Field(
        default=None, description="Apple Music developer token"
    )

    # CORS settings
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    @model_validator(mode="after")
    def check_credential_pairs(self) -> Self:
        """Reject a client ID without its secret and vice versa."""
        pairs = {
            "spotify": (self.spotify_client_id, self.spotify_client_secret),
            "tidal": (self.tidal_client_id, self.tidal_client_secret),
        }
        for name, (client_id, client_secret) in pairs.items():
            if bool(client_id) != bool(client_secret):
                raise ValueError(
                    f"TUNEBRIDGE_{name.upper()}_CLIENT_ID and "
                    f"TUNEBRIDGE_{name.upper()}_CLIENT_SECRET must be set together"
                )
        return self

    @property
    def credentials(self) -> Credentials:
        spotify = None
        if self.spotify_client_id and self.spotify_client_secret:
            spotify = ClientCredentials(
                self.spotify_client_id, self.spotify_client_secret
            )
        tidal = None
        if self.tidal_client_id and self.tidal_client_secret:
            tidal = ClientCredentials(self.tidal_client_id, self.tidal_client_secret)
        apple_music = None
        if self.apple_music_token:
            apple_music = AccessTokenSecret(self.apple_music_token)
        return Credentials(
            spotify=spotify,
            tidal=tidal,
            deezer=self.deezer_enabled,
            apple_music=apple_music,
        )

    @property
    def api_config(self) -> APIConfig:
        return APIConfig(
            timeout=self.http_timeout, token_skew_seconds=self.token_skew_seconds
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
