"""Test fixtures and configuration."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import pytest
from tunebridge.models.entities import AlbumData, ArtistData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import ShareLink
from tunebridge.providers.base import Entity

Handler = Callable[[httpx.Request], httpx.Response]


class MockClock:
    """Controllable epoch-seconds clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class RecordingHandler:
    """MockTransport handler that records requests and routes by URL.

    Routes map "host/path" or a bare path to a response, or to a callable
    producing one. Unrouted requests get a 404.
    """

    routes: dict[str, httpx.Response | Handler] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.url.host}{request.url.path}")
        if route is None:
            route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, httpx.Response):
            return route
        return route(request)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


def make_http(handler: Callable) -> httpx.AsyncClient:
    """Create an AsyncClient whose requests never leave the process."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class MockProvider:
    """Mock provider client for testing."""

    def __init__(
        self,
        platform: Platform,
        entity: Entity | None = None,
        item_id: str = "mock-id",
        artwork: str = "",
        error: BaseException | None = None,
        artwork_error: BaseException | None = None,
        delay: float = 0,
    ) -> None:
        self.platform = platform
        self._entity = entity
        self._item_id = item_id
        self._artwork = artwork
        self._error = error
        self._artwork_error = artwork_error
        self._delay = delay
        self.fetch_entity_calls: list[ShareLink] = []
        self.find_link_calls: list[tuple[Entity, str]] = []
        self.fetch_artwork_calls: list[ShareLink] = []

    async def fetch_entity(self, link: ShareLink) -> Entity:
        """Mock fetch_entity."""
        self.fetch_entity_calls.append(link)
        if self._error is not None:
            raise self._error
        if self._entity is None:
            raise ValueError("No entity configured")
        return self._entity

    async def find_link(self, entity: Entity, country_code: str) -> ShareLink:
        """Mock find_link."""
        self.find_link_calls.append((entity, country_code))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        if isinstance(entity, SongData):
            object_type = ObjectType.SONG
        else:
            object_type = ObjectType.ALBUM
        return ShareLink(self.platform, object_type, self._item_id, country_code)

    async def fetch_artwork(self, link: ShareLink) -> str:
        """Mock fetch_artwork."""
        self.fetch_artwork_calls.append(link)
        if self._artwork_error is not None:
            raise self._artwork_error
        return self._artwork


class MockShortLinkProvider(MockProvider):
    """Mock provider that can also expand short links."""

    def __init__(self, *args, expanded_url: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._expanded_url = expanded_url
        self.expand_calls: list[str] = []

    async def expand_short_link(self, url: str) -> str:
        """Mock expand_short_link."""
        self.expand_calls.append(url)
        return self._expanded_url


@pytest.fixture
def clock() -> MockClock:
    """Create a mock clock."""
    return MockClock()


@pytest.fixture
def sample_artist() -> ArtistData:
    """Create a sample artist without albums."""
    return ArtistData(display_name="The Weeknd")


@pytest.fixture
def sample_album(sample_artist: ArtistData) -> AlbumData:
    """Create a sample album with a UPC."""
    return AlbumData(
        display_name="After Hours",
        upc="00602508793186",
        artists=(sample_artist,),
        artwork_url="https://example.com/after-hours.jpg",
    )


@pytest.fixture
def sample_song(sample_album: AlbumData, sample_artist: ArtistData) -> SongData:
    """Create a sample song with an ISRC."""
    return SongData(
        display_name="Blinding Lights",
        isrc="USUG11904206",
        duration_seconds=200,
        albums=(sample_album,),
        artists=(sample_artist,),
    )
