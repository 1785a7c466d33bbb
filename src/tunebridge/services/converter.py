"""Conversion orchestration service.

Converts one share link into the equivalent links of every configured
provider:

1. Expand redirecting short links and parse the URL.
2. Fetch the canonical entity from the provider owning the link.
3. Fan out to every other provider concurrently: find its link for the
   entity, re-fetch its own view for display name and artwork.
4. Join all outcomes. A provider that fails or has no match is left out;
   only failures of the owning provider abort the conversion.
"""

import asyncio
import logging
from collections.abc import Mapping

from tunebridge.exceptions import (
    NoMatchFoundError,
    ProviderError,
    SourceNotFoundError,
    UnsupportedFeatureError,
)
from tunebridge.models.enums import Platform
from tunebridge.models.results import ConversionResults, Link
from tunebridge.models.share_link import ShareLink
from tunebridge.providers.base import Entity, ProviderClient, ShortLinkExpander
from tunebridge.utils.url import parse_share_link, short_link_platform

logger = logging.getLogger(__name__)


class ConversionService:
    """Convert share links across the configured providers.

    Example:
        ```python
        service = ConversionService(build_providers(credentials, http, tokens))
        results = await service.convert("https://tidal.com/browse/track/300807510")
        print(results.to_json())
        ```
    """

    def __init__(self, providers: Mapping[Platform, ProviderClient]) -> None:
        """Initialize the service.

        Args:
            providers: Configured provider clients. Iteration order is the
                order of the conversion results.
        """
        self._providers = dict(providers)

    @property
    def providers(self) -> list[Platform]:
        """Configured platforms in result order."""
        return list(self._providers)

    async def convert(self, url: str) -> ConversionResults:
        """Convert a share link into links for every configured provider.

        Args:
            url: Share link (or supported short link) to convert.

        Returns:
            Links for the owning provider and every provider with a match.

        Raises:
            ShareLinkError: If the URL isn't a valid share link.
            UnsupportedFeatureError: If the owning platform isn't configured
                or the link points to an artist.
            SourceNotFoundError: If the owning provider doesn't know the
                linked entity.
            ProviderError: If the owning provider fails to fetch the entity.
        """
        link = parse_share_link(await self._expand(url))
        source = self._providers.get(link.platform)
        if source is None:
            raise UnsupportedFeatureError(
                f"Cannot convert links from {link.platform.label}", link.platform
            )

        logger.info(
            "Converting %s %s %s", link.platform.label, link.object_type.label, link.id
        )
        try:
            entity = await source.fetch_entity(link)
        except NoMatchFoundError as e:
            raise SourceNotFoundError(
                f"{link.platform.label} has no {link.object_type.label.lower()} "
                f"with ID {link.id}",
                link.platform,
            ) from e

        platforms = list(self._providers)
        outcomes = await asyncio.gather(
            *(
                self._source_entry(source, link, entity)
                if platform is link.platform
                else self._target_entry(platform, entity, link.country_code)
                for platform in platforms
            ),
            return_exceptions=True,
        )

        results: list[Link] = []
        for platform, outcome in zip(platforms, outcomes, strict=True):
            if isinstance(outcome, Link):
                results.append(outcome)
            elif isinstance(outcome, NoMatchFoundError):
                logger.info("No %s match: %s", platform.label, outcome.message)
            elif isinstance(outcome, ProviderError):
                logger.warning("%s lookup failed: %s", platform.label, outcome.message)
            elif isinstance(outcome, Exception):
                logger.error(
                    "Unexpected error converting to %s",
                    platform.label,
                    exc_info=outcome,
                )
            else:
                # CancelledError and other BaseExceptions propagate
                raise outcome

        logger.info(
            "Converted %s link to %d provider(s)", link.platform.label, len(results)
        )
        return ConversionResults(results=results)

    async def convert_json(self, url: str) -> str:
        """Convert a share link and serialize the results to JSON."""
        return (await self.convert(url)).to_json()

    async def _expand(self, url: str) -> str:
        platform = short_link_platform(url)
        if platform is None:
            return url
        provider = self._providers.get(platform)
        if not isinstance(provider, ShortLinkExpander):
            raise UnsupportedFeatureError(
                f"Cannot expand {platform.label} short links", platform
            )
        expanded = await provider.expand_short_link(url)
        logger.debug("Expanded short link %s to %s", url, expanded)
        return expanded

    async def _source_entry(
        self, provider: ProviderClient, link: ShareLink, entity: Entity
    ) -> Link:
        artwork = entity.artwork_url
        if not artwork:
            try:
                artwork = await provider.fetch_artwork(link)
            except ProviderError as e:
                logger.warning(
                    "No artwork for %s link: %s", link.platform.label, e.message
                )
        return Link.build(
            link.platform, link.object_type, entity.display_name, link.to_url(), artwork
        )

    async def _target_entry(
        self, platform: Platform, entity: Entity, country_code: str
    ) -> Link:
        provider = self._providers[platform]
        target_link = await provider.find_link(entity, country_code)
        target_entity = await provider.fetch_entity(target_link)
        artwork = target_entity.artwork_url or await provider.fetch_artwork(
            target_link
        )
        return Link.build(
            platform,
            target_link.object_type,
            target_entity.display_name,
            target_link.to_url(),
            artwork,
        )
