"""Tests for the conversion service."""

import json

import pytest
from tunebridge.exceptions import (
    InvalidUrlError,
    NoMatchFoundError,
    NotAShareLinkError,
    SourceNotFoundError,
    TransportError,
    UnsupportedFeatureError,
)
from tunebridge.models.entities import AlbumData, ArtistData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import ShareLink
from tunebridge.services import ConversionService

from conftest import MockProvider, MockShortLinkProvider

SPOTIFY_URL = "https://open.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b?si=abc"
DEEZER_URL = "https://www.deezer.com/track/3135556"
SHORT_URL = "https://link.deezer.com/s/30ZfPsU2a5NSJ4DtdHu7y"


def make_song(title: str = "Blinding Lights", artwork: str = "") -> SongData:
    album = AlbumData(display_name="After Hours", upc="1", artwork_url=artwork)
    return SongData(
        display_name=title,
        isrc="USUG11904206",
        duration_seconds=200,
        albums=(album,),
        artists=(ArtistData(display_name="The Weeknd"),),
    )


@pytest.fixture
def spotify(sample_song: SongData) -> MockProvider:
    return MockProvider(Platform.SPOTIFY, entity=sample_song)


@pytest.fixture
def tidal() -> MockProvider:
    return MockProvider(
        Platform.TIDAL,
        entity=make_song(artwork="https://tidal.example/cover.jpg"),
        item_id="300807510",
    )


@pytest.fixture
def deezer() -> MockProvider:
    return MockProvider(
        Platform.DEEZER,
        entity=make_song(artwork="https://deezer.example/cover.jpg"),
        item_id="3135556",
    )


def make_service(*providers: MockProvider) -> ConversionService:
    return ConversionService({p.platform: p for p in providers})


class TestConvert:
    """Tests for ConversionService.convert."""

    @pytest.mark.asyncio
    async def test_converts_to_every_provider(
        self, spotify: MockProvider, tidal: MockProvider, deezer: MockProvider
    ) -> None:
        """Should return the source link plus one link per matching provider."""
        service = make_service(spotify, tidal, deezer)

        results = await service.convert(SPOTIFY_URL)

        assert results.providers == ["Spotify", "Tidal", "Deezer"]
        spotify_link, tidal_link, deezer_link = results.results
        assert spotify_link.url == SPOTIFY_URL.split("?")[0]
        assert spotify_link.type == "Song"
        assert spotify_link.display_name == "Blinding Lights"
        assert spotify_link.artwork == "https://example.com/after-hours.jpg"
        assert tidal_link.url == "https://tidal.com/browse/track/300807510"
        assert tidal_link.artwork == "https://tidal.example/cover.jpg"
        assert deezer_link.url == "https://www.deezer.com/track/3135556"
        assert spotify.find_link_calls == []

    @pytest.mark.asyncio
    async def test_target_failure_is_tolerated(
        self, spotify: MockProvider, deezer: MockProvider
    ) -> None:
        """A failing provider should be left out without failing the conversion."""
        tidal = MockProvider(
            Platform.TIDAL, error=TransportError("timed out", Platform.TIDAL)
        )
        service = make_service(spotify, tidal, deezer)

        results = await service.convert(SPOTIFY_URL)

        assert results.providers == ["Spotify", "Deezer"]

    @pytest.mark.asyncio
    async def test_no_match_is_omitted(
        self, spotify: MockProvider, deezer: MockProvider
    ) -> None:
        """Providers without a match should be absent, not placeholders."""
        tidal = MockProvider(
            Platform.TIDAL, error=NoMatchFoundError("no match", Platform.TIDAL)
        )
        service = make_service(spotify, tidal, deezer)

        results = await service.convert(SPOTIFY_URL)

        assert results.providers == ["Spotify", "Deezer"]

    @pytest.mark.asyncio
    async def test_unexpected_target_error_is_tolerated(
        self, spotify: MockProvider, deezer: MockProvider
    ) -> None:
        """Unexpected exceptions in one provider should not abort the others."""
        tidal = MockProvider(Platform.TIDAL, error=RuntimeError("boom"))
        service = make_service(spotify, tidal, deezer)

        results = await service.convert(SPOTIFY_URL)

        assert results.providers == ["Spotify", "Deezer"]

    @pytest.mark.asyncio
    async def test_only_source_configured(self, spotify: MockProvider) -> None:
        """With a single provider the result holds only the source link."""
        results = await make_service(spotify).convert(SPOTIFY_URL)

        assert results.providers == ["Spotify"]

    @pytest.mark.asyncio
    async def test_results_follow_provider_order(
        self, tidal: MockProvider, deezer: MockProvider
    ) -> None:
        """Results should be ordered by provider, not by completion time."""
        slow_spotify = MockProvider(
            Platform.SPOTIFY, entity=make_song(), item_id="abc", delay=0.01
        )
        service = make_service(slow_spotify, tidal, deezer)

        results = await service.convert(DEEZER_URL)

        assert results.providers == ["Spotify", "Tidal", "Deezer"]

    @pytest.mark.asyncio
    async def test_country_code_propagates(
        self, spotify: MockProvider, tidal: MockProvider
    ) -> None:
        """Targets should search in the source link's country."""
        service = make_service(spotify, tidal)

        results = await service.convert(
            "https://open.spotify.com/intl-de/track/0VjIjW4GlUZAMYd2vXMi3b"
        )

        assert tidal.find_link_calls[0][1] == "DE"
        assert results.results[0].url == (
            "https://open.spotify.com/intl-de/track/0VjIjW4GlUZAMYd2vXMi3b"
        )

    @pytest.mark.asyncio
    async def test_album_conversion(self) -> None:
        """Album links should produce album entries."""
        album = AlbumData(display_name="After Hours", upc="1")
        spotify = MockProvider(Platform.SPOTIFY, entity=album)
        target = MockProvider(Platform.TIDAL, entity=album, item_id="130114567")
        service = make_service(spotify, target)

        results = await service.convert(
            "https://open.spotify.com/album/4yP0hdKOZPNshxUOjY0cZj"
        )

        assert [link.type for link in results.results] == ["Album", "Album"]
        assert results.results[1].url == "https://tidal.com/browse/album/130114567"


class TestConvertFailures:
    """Tests for failures that abort a conversion."""

    @pytest.mark.asyncio
    async def test_invalid_url(self, spotify: MockProvider) -> None:
        """Parse errors should propagate before any provider is called."""
        with pytest.raises(InvalidUrlError):
            await make_service(spotify).convert("http://open.spotify.com/track/x")
        assert spotify.fetch_entity_calls == []

    @pytest.mark.asyncio
    async def test_unsupported_host(self, spotify: MockProvider) -> None:
        """Unknown hosts should raise NotAShareLinkError."""
        with pytest.raises(NotAShareLinkError):
            await make_service(spotify).convert("https://example.com/track/1")

    @pytest.mark.asyncio
    async def test_unconfigured_source(self, spotify: MockProvider) -> None:
        """Links from unconfigured platforms should be unsupported."""
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            await make_service(spotify).convert(DEEZER_URL)

        assert exc_info.value.platform is Platform.DEEZER
        assert spotify.fetch_entity_calls == []

    @pytest.mark.asyncio
    async def test_source_failure_aborts(self, deezer: MockProvider) -> None:
        """A failing source provider should fail the whole conversion."""
        spotify = MockProvider(
            Platform.SPOTIFY, error=TransportError("down", Platform.SPOTIFY)
        )

        with pytest.raises(TransportError):
            await make_service(spotify, deezer).convert(SPOTIFY_URL)
        assert deezer.find_link_calls == []

    @pytest.mark.asyncio
    async def test_source_no_match_is_upstream_failure(
        self, deezer: MockProvider
    ) -> None:
        """An unknown source ID should fail as an upstream error, not a 404."""
        spotify = MockProvider(
            Platform.SPOTIFY, error=NoMatchFoundError("404", Platform.SPOTIFY)
        )

        with pytest.raises(SourceNotFoundError) as exc_info:
            await make_service(spotify, deezer).convert(SPOTIFY_URL)

        assert exc_info.value.status_code >= 500
        assert exc_info.value.platform is Platform.SPOTIFY
        assert isinstance(exc_info.value.__cause__, NoMatchFoundError)
        assert deezer.find_link_calls == []

    @pytest.mark.asyncio
    async def test_artist_links_unsupported(self, deezer: MockProvider) -> None:
        """Artist links should surface the source provider's error."""
        spotify = MockProvider(
            Platform.SPOTIFY,
            error=UnsupportedFeatureError("Artist links", Platform.SPOTIFY),
        )

        with pytest.raises(UnsupportedFeatureError):
            await make_service(spotify, deezer).convert(
                "https://open.spotify.com/artist/1Xyo4u8uXC1ZmMpatF05PJ"
            )


class TestShortLinks:
    """Tests for short link expansion during conversion."""

    @pytest.mark.asyncio
    async def test_expands_before_parsing(self, spotify: MockProvider) -> None:
        """Short links should be expanded by their platform's provider."""
        deezer = MockShortLinkProvider(
            Platform.DEEZER,
            entity=make_song(),
            item_id="3135556",
            expanded_url="https://www.deezer.com/en/track/3135556?host=0",
        )
        service = make_service(spotify, deezer)

        results = await service.convert(SHORT_URL)

        assert deezer.expand_calls == [SHORT_URL]
        assert deezer.fetch_entity_calls == [
            ShareLink(Platform.DEEZER, ObjectType.SONG, "3135556")
        ]
        assert results.providers == ["Spotify", "Deezer"]

    @pytest.mark.asyncio
    async def test_unconfigured_short_link_platform(
        self, spotify: MockProvider
    ) -> None:
        """Short links of unconfigured platforms should be unsupported."""
        with pytest.raises(UnsupportedFeatureError):
            await make_service(spotify).convert(SHORT_URL)


class TestArtwork:
    """Tests for artwork resolution."""

    @pytest.mark.asyncio
    async def test_target_artwork_fallback(self, spotify: MockProvider) -> None:
        """Targets without entity artwork should use fetch_artwork."""
        tidal = MockProvider(
            Platform.TIDAL,
            entity=make_song(),
            item_id="300807510",
            artwork="https://tidal.example/fetched.jpg",
        )

        results = await make_service(spotify, tidal).convert(SPOTIFY_URL)

        assert results.results[1].artwork == "https://tidal.example/fetched.jpg"
        assert tidal.fetch_artwork_calls == [
            ShareLink(Platform.TIDAL, ObjectType.SONG, "300807510")
        ]

    @pytest.mark.asyncio
    async def test_entity_artwork_skips_fetch(
        self, spotify: MockProvider, deezer: MockProvider
    ) -> None:
        """Entities carrying artwork should not trigger an artwork fetch."""
        await make_service(spotify, deezer).convert(SPOTIFY_URL)

        assert spotify.fetch_artwork_calls == []
        assert deezer.fetch_artwork_calls == []

    @pytest.mark.asyncio
    async def test_source_artwork_failure_tolerated(
        self, deezer: MockProvider
    ) -> None:
        """The source entry should survive an artwork failure."""
        spotify = MockProvider(
            Platform.SPOTIFY,
            entity=make_song(),
            artwork_error=TransportError("down", Platform.SPOTIFY),
        )

        results = await make_service(spotify, deezer).convert(SPOTIFY_URL)

        assert results.providers == ["Spotify", "Deezer"]
        assert results.results[0].artwork == ""

    @pytest.mark.asyncio
    async def test_target_artwork_failure_drops_entry(
        self, spotify: MockProvider
    ) -> None:
        """A failing artwork fetch is part of the target chain."""
        tidal = MockProvider(
            Platform.TIDAL,
            entity=make_song(),
            artwork_error=TransportError("down", Platform.TIDAL),
        )

        results = await make_service(spotify, tidal).convert(SPOTIFY_URL)

        assert results.providers == ["Spotify"]


class TestConvertJson:
    """Tests for the serialized result shape."""

    @pytest.mark.asyncio
    async def test_json_shape(
        self, spotify: MockProvider, deezer: MockProvider
    ) -> None:
        """Should serialize results with camel-case display names."""
        payload = json.loads(
            await make_service(spotify, deezer).convert_json(SPOTIFY_URL)
        )

        assert payload == {
            "results": [
                {
                    "provider": "Spotify",
                    "type": "Song",
                    "displayName": "Blinding Lights",
                    "url": "https://open.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b",
                    "artwork": "https://example.com/after-hours.jpg",
                },
                {
                    "provider": "Deezer",
                    "type": "Song",
                    "displayName": "Blinding Lights",
                    "url": "https://www.deezer.com/track/3135556",
                    "artwork": "https://deezer.example/cover.jpg",
                },
            ]
        }

    def test_providers_property(
        self, spotify: MockProvider, deezer: MockProvider
    ) -> None:
        """Should list configured platforms in result order."""
        service = make_service(spotify, deezer)

        assert service.providers == [Platform.SPOTIFY, Platform.DEEZER]
