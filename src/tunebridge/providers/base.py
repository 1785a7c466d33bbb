"""Provider client interface and shared HTTP plumbing.

Every provider exposes the same capability set: fetch a song or album by
share link, find its own link for an entity fetched elsewhere, and fetch
artwork. Low-level failures never leave a provider; they are re-raised
as :class:`~tunebridge.exceptions.ProviderError` subclasses.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import BaseModel, ValidationError

from tunebridge.auth import TokenCache
from tunebridge.config import APIConfig
from tunebridge.exceptions import (
    AuthorizationError,
    DecodeError,
    NoMatchFoundError,
    TransportError,
    UnsuitableLinkError,
    UnsupportedFeatureError,
)
from tunebridge.models.entities import AlbumData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import ShareLink

logger = logging.getLogger(__name__)

Entity = SongData | AlbumData

_M = TypeVar("_M", bound=BaseModel)


class ProviderClient(Protocol):
    """Protocol for provider clients.

    This protocol enables dependency injection and testing.
    Implement this protocol to create fake providers for testing.
    """

    platform: Platform

    async def fetch_entity(self, link: ShareLink) -> Entity:
        """Fetch the song or album a link points to."""
        ...

    async def find_link(self, entity: Entity, country_code: str) -> ShareLink:
        """Find this provider's link for an entity fetched elsewhere."""
        ...

    async def fetch_artwork(self, link: ShareLink) -> str:
        """Fetch the cover image URL for a link."""
        ...


@runtime_checkable
class ShortLinkExpander(Protocol):
    """Provider able to resolve its redirecting short links."""

    async def expand_short_link(self, url: str) -> str:
        """Follow a short link and return the full share link."""
        ...


class BaseProvider(ABC):
    """Shared behaviour for REST-backed providers.

    Subclasses implement the per-type operations and set ``platform`` and
    ``base_url``. Dispatch by object type happens here.
    """

    platform: ClassVar[Platform]
    base_url: ClassVar[str]

    def __init__(
        self,
        http: httpx.AsyncClient,
        tokens: TokenCache | None = None,
        config: APIConfig | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            http: Shared async HTTP client.
            tokens: Token cache for providers requiring bearer auth.
            config: Optional API configuration. Uses defaults if not provided.
        """
        self._http = http
        self._tokens = tokens
        self._config = config or APIConfig()

    # -- Capability dispatch --

    async def fetch_entity(self, link: ShareLink) -> Entity:
        """Fetch the song or album a link points to.

        Raises:
            UnsuitableLinkError: If the link belongs to another platform.
            UnsupportedFeatureError: For artist links.
        """
        self._check_platform(link)
        match link.object_type:
            case ObjectType.SONG:
                return await self.fetch_song(link)
            case ObjectType.ALBUM:
                return await self.fetch_album(link)
            case _:
                raise UnsupportedFeatureError(
                    f"{link.object_type.label} links are not supported",
                    self.platform,
                )

    async def find_link(self, entity: Entity, country_code: str) -> ShareLink:
        """Find this provider's link for an entity fetched elsewhere."""
        if isinstance(entity, SongData):
            return await self.find_song_link(entity, country_code)
        return await self.find_album_link(entity, country_code)

    async def fetch_artwork(self, link: ShareLink) -> str:
        """Fetch the cover image URL for a link, empty if there is none."""
        entity = await self.fetch_entity(link)
        return entity.artwork_url

    @abstractmethod
    async def fetch_song(self, link: ShareLink) -> SongData: ...

    @abstractmethod
    async def fetch_album(self, link: ShareLink) -> AlbumData: ...

    @abstractmethod
    async def find_song_link(self, song: SongData, country_code: str) -> ShareLink: ...

    @abstractmethod
    async def find_album_link(
        self, album: AlbumData, country_code: str
    ) -> ShareLink: ...

    # -- Helpers --

    def _check_link(self, link: ShareLink, object_type: ObjectType) -> None:
        self._check_platform(link)
        if link.object_type is not object_type:
            raise UnsuitableLinkError(
                f"Expected a {object_type.label} link, got {link.object_type.label}",
                self.platform,
            )

    def _check_platform(self, link: ShareLink) -> None:
        if link.platform is not self.platform:
            raise UnsuitableLinkError(
                f"{self.platform.label} cannot handle {link.platform.label} links",
                self.platform,
            )

    def _link(self, object_type: ObjectType, item_id: str, country: str) -> ShareLink:
        return ShareLink(
            platform=self.platform,
            object_type=object_type,
            id=item_id,
            country_code=country,
        )

    def _no_match(self, what: str) -> NoMatchFoundError:
        logger.debug("%s has no match for %s", self.platform.label, what)
        return NoMatchFoundError(
            f"No {self.platform.label} match for {what}", self.platform
        )

    async def _auth_headers(self) -> dict[str, str]:
        if self._tokens is None:
            return {}
        token = await self._tokens.get_valid_token(self.platform)
        return {"Authorization": f"Bearer {token}"}

    async def _get_json(
        self, path: str, params: Mapping[str, str] | None = None
    ) -> Any:
        """GET a JSON document from the provider API.

        Raises:
            AuthorizationError: On 401/403 or if a token can't be issued.
            NoMatchFoundError: On 404.
            TransportError: On network failure or any other non-2xx status.
            DecodeError: If the body isn't JSON.
        """
        url = f"{self.base_url}{path}"
        headers = await self._auth_headers()
        logger.debug("GET %s %s", url, dict(params or {}))
        try:
            response = await self._http.get(
                url, params=params, headers=headers, timeout=self._config.timeout
            )
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", self.platform.label, e)
            raise TransportError(
                f"{self.platform.label} request failed: {e}", self.platform
            ) from e

        status = response.status_code
        if status in (401, 403):
            raise AuthorizationError(
                f"{self.platform.label} rejected our credentials (HTTP {status})",
                self.platform,
            )
        if status == 404:
            raise NoMatchFoundError(
                f"{self.platform.label} has no resource at {path}", self.platform
            )
        if not response.is_success:
            logger.warning(
                "%s returned HTTP %d for %s", self.platform.label, status, path
            )
            raise TransportError(
                f"{self.platform.label} returned HTTP {status}", self.platform
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                f"{self.platform.label} returned invalid JSON", self.platform
            ) from e

    def _parse(self, model: type[_M], data: Any) -> _M:
        """Validate a decoded payload, mapping failures to DecodeError."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Unexpected %s payload for %s: %s",
                self.platform.label,
                model.__name__,
                e.errors()[0]["msg"] if e.errors() else e,
            )
            raise DecodeError(
                f"Unexpected {self.platform.label} response for {model.__name__}",
                self.platform,
            ) from e
