"""OAuth2 client-credentials token cache.

Tokens are issued lazily on first use and refreshed when they come within
``skew_seconds`` of expiry. The cache is the only mutable state shared by
concurrent conversions, so each provider slot is guarded by a
read-preferring shared/exclusive lock: any number of readers while the
token is valid, a single writer while it is being refreshed.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from tunebridge.config import ClientCredentials
from tunebridge.exceptions import AuthorizationError
from tunebridge.models.enums import Platform

logger = logging.getLogger(__name__)

DEFAULT_SKEW_SECONDS = 5


class TokenResponse(BaseModel):
    """Client-credentials grant response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str
    expires_in: int


@dataclass(frozen=True)
class AccessToken:
    """An issued bearer token.

    Attributes:
        token: Bearer token value. Never logged.
        expires_at: Absolute expiry as seconds since the epoch.
        issuer_endpoint: Authorization endpoint that issued the token.
    """

    token: str = field(repr=False)
    expires_at: float
    issuer_endpoint: str

    def is_valid(self, now: float, skew_seconds: float = 0) -> bool:
        """Whether the token can still be used at ``now``."""
        return now < self.expires_at - skew_seconds


class ReadWriteLock:
    """Read-preferring shared/exclusive lock for asyncio tasks.

    Readers only wait for an active writer; a writer waits for all
    readers and any other writer to finish.
    """

    def __init__(self) -> None:
        self._condition = asyncio.Condition()
        self._readers = 0
        self._writing = False

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(lambda: not self._writing)
            self._readers += 1
        try:
            yield
        finally:
            async with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(
                lambda: not self._writing and self._readers == 0
            )
            self._writing = True
        try:
            yield
        finally:
            async with self._condition:
                self._writing = False
                self._condition.notify_all()


@dataclass
class _TokenSlot:
    credentials: ClientCredentials
    endpoint: str
    lock: ReadWriteLock = field(default_factory=ReadWriteLock)
    token: AccessToken | None = None


class TokenCache:
    """Per-provider bearer token cache.

    Example:
        ```python
        cache = TokenCache(http_client)
        cache.register(Platform.SPOTIFY, credentials, SPOTIFY_TOKEN_URL)
        token = await cache.get_valid_token(Platform.SPOTIFY)
        ```
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        clock: Callable[[], float] = time.time,
        skew_seconds: float = DEFAULT_SKEW_SECONDS,
    ) -> None:
        """Initialize the cache.

        Args:
            http: Shared HTTP client used for token requests.
            clock: Returns the current time in epoch seconds.
            skew_seconds: Safety margin before expiry at which tokens are
                refreshed.
        """
        self._http = http
        self._clock = clock
        self._skew_seconds = skew_seconds
        self._slots: dict[Platform, _TokenSlot] = {}

    def register(
        self, platform: Platform, credentials: ClientCredentials, endpoint: str
    ) -> None:
        """Register client credentials and token endpoint for a platform."""
        self._slots[platform] = _TokenSlot(credentials=credentials, endpoint=endpoint)

    def current_token(self, platform: Platform) -> AccessToken | None:
        """Last issued token for a platform, valid or not."""
        slot = self._slots.get(platform)
        return slot.token if slot else None

    async def get_valid_token(self, platform: Platform) -> str:
        """Return a token valid for at least ``skew_seconds``.

        Raises:
            AuthorizationError: If the platform isn't registered or the
                refresh fails. A previously issued token is kept.
        """
        slot = self._slots.get(platform)
        if slot is None:
            raise AuthorizationError(
                f"No credentials registered for {platform.label}", platform
            )

        async with slot.lock.read():
            if slot.token and slot.token.is_valid(self._clock(), self._skew_seconds):
                return slot.token.token

        async with slot.lock.write():
            # Another writer may have refreshed while we waited
            if slot.token and slot.token.is_valid(self._clock(), self._skew_seconds):
                logger.debug("Token for %s refreshed concurrently", platform.label)
                return slot.token.token
            slot.token = await self._request_token(platform, slot)
            return slot.token.token

    async def _request_token(
        self, platform: Platform, slot: _TokenSlot
    ) -> AccessToken:
        logger.debug(
            "Requesting %s access token from %s", platform.label, slot.endpoint
        )
        issued_at = self._clock()
        try:
            response = await self._http.post(
                slot.endpoint,
                data={"grant_type": "client_credentials"},
                auth=(slot.credentials.client_id, slot.credentials.client_secret),
            )
            response.raise_for_status()
            payload = TokenResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.warning(
                "%s token request rejected: HTTP %d",
                platform.label,
                e.response.status_code,
            )
            raise AuthorizationError(
                f"{platform.label} rejected the token request "
                f"(HTTP {e.response.status_code})",
                platform,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("%s token request failed: %s", platform.label, e)
            raise AuthorizationError(
                f"Failed to request {platform.label} token: {e}", platform
            ) from e
        except (ValueError, ValidationError) as e:
            logger.warning("Invalid %s token response: %s", platform.label, e)
            raise AuthorizationError(
                f"Invalid {platform.label} token response", platform
            ) from e

        logger.debug(
            "Issued %s token valid for %ds", platform.label, payload.expires_in
        )
        return AccessToken(
            token=payload.access_token,
            expires_at=issued_at + payload.expires_in,
            issuer_endpoint=slot.endpoint,
        )
