"""Share link parsing utilities.

Links are parsed segment by segment after cutting the URL at the first
``?`` or ``#``:

    https://open.spotify.com[/intl-XX]/{track|album|artist}/ID
    https://tidal.com/browse/{track|album|artist}/ID
    https://www.deezer.com[/LANG]/{track|album|artist}/ID
    https://music.apple.com/CC/{song|track|album|artist}/SLUG/ID
"""

import logging
from collections.abc import Iterator
from urllib.parse import urlparse

import pycountry

from tunebridge.exceptions import (
    InvalidUrlError,
    MalformedLinkError,
    NotAShareLinkError,
)
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.share_link import DEFAULT_COUNTRY, ShareLink

logger = logging.getLogger(__name__)

# Maximum URL length to prevent potential abuse (standard browser limit)
MAX_URL_LENGTH = 2048

_HOSTS: dict[str, Platform] = {
    "open.spotify.com": Platform.SPOTIFY,
    "tidal.com": Platform.TIDAL,
    "www.deezer.com": Platform.DEEZER,
    "music.apple.com": Platform.APPLE_MUSIC,
}

# Redirecting short links that must be expanded before parsing
_SHORT_LINK_HOSTS: dict[str, Platform] = {
    "link.deezer.com": Platform.DEEZER,
}

_OBJECT_TYPES: dict[str, ObjectType] = {
    "track": ObjectType.SONG,
    "album": ObjectType.ALBUM,
    "artist": ObjectType.ARTIST,
}

_SPOTIFY_LOCALE_PREFIX = "intl-"


def parse_country_code(code: str) -> str | None:
    """Resolve an ISO 3166-1 alpha-2 country code.

    Args:
        code: Two-letter code in any case.

    Returns:
        The upper-case code, or None if it isn't a known country.
    """
    if len(code) != 2 or not code.isalpha():
        return None
    country = pycountry.countries.get(alpha_2=code.upper())
    return country.alpha_2 if country else None


def short_link_platform(url: str) -> Platform | None:
    """Return the platform of a redirecting short link, if ``url`` is one.

    Examples:
        >>> short_link_platform("https://link.deezer.com/s/30ZfPsU2a5NSJ4DtdHu7y")
        <Platform.DEEZER: 'deezer'>
    """
    if not url or len(url) > MAX_URL_LENGTH:
        return None
    parsed = urlparse(url)
    if parsed.scheme != "https":
        return None
    return _SHORT_LINK_HOSTS.get(parsed.hostname or "")


def is_supported_url(url: str) -> bool:
    """Check whether ``url`` parses as a share link."""
    try:
        parse_share_link(url)
    except (InvalidUrlError, NotAShareLinkError, MalformedLinkError):
        return False
    return True


def parse_share_link(url: str) -> ShareLink:
    """Parse a provider URL into a ShareLink.

    Args:
        url: Raw share link as pasted by a user.

    Returns:
        The parsed link. Country defaults to "US" where the URL has none.

    Raises:
        InvalidUrlError: If the scheme isn't ``https`` or the URL has no host.
        NotAShareLinkError: If the host isn't a supported provider.
        MalformedLinkError: If the path doesn't follow the provider's grammar.
    """
    if not url or len(url) > MAX_URL_LENGTH:
        raise InvalidUrlError(f"Not a valid URL: {url[:100]!r}")

    # Query string and fragment are discarded
    for separator in ("?", "#"):
        url = url.split(separator, 1)[0]

    segments = iter(url.split("/"))
    if next(segments) != "https:":
        raise InvalidUrlError("Share links must use HTTPS")
    if next(segments, None) != "":
        raise InvalidUrlError(f"Not a valid URL: {url}")

    host = next(segments, "")
    if not host:
        raise InvalidUrlError(f"Not a valid URL: {url}")
    platform = _HOSTS.get(host)
    if platform is None:
        raise NotAShareLinkError(f"Unsupported link host: {host}")

    country = DEFAULT_COUNTRY
    match platform:
        case Platform.SPOTIFY:
            segment = _next_segment(segments, platform)
            if segment.startswith(_SPOTIFY_LOCALE_PREFIX) and len(segment) == 7:
                country = _country_or_raise(segment[len(_SPOTIFY_LOCALE_PREFIX) :])
                segment = _next_segment(segments, platform)
            elif segment not in _OBJECT_TYPES:
                raise MalformedLinkError(
                    f"Not a valid Spotify share link, malformed locale: {segment}"
                )
        case Platform.TIDAL:
            if next(segments, None) != "browse":
                raise MalformedLinkError("Not a valid Tidal share link")
            segment = _next_segment(segments, platform)
        case Platform.DEEZER:
            segment = _next_segment(segments, platform)
            # Optional language segment, e.g. /en/ or /fr/
            if segment not in _OBJECT_TYPES and len(segment) == 2:
                segment = _next_segment(segments, platform)
        case Platform.APPLE_MUSIC:
            country = _country_or_raise(_next_segment(segments, platform))
            segment = _next_segment(segments, platform)

    object_type = _parse_object_type(segment, platform)

    # Apple Music carries a human-readable slug before the ID
    if platform is Platform.APPLE_MUSIC:
        _next_segment(segments, platform)

    item_id = next(segments, "")
    if not item_id:
        raise MalformedLinkError(f"Missing {platform.label} ID in link")
    if next(segments, None) is not None:
        raise MalformedLinkError(f"Unexpected trailing path in {platform.label} link")

    link = ShareLink(
        platform=platform,
        object_type=object_type,
        id=item_id,
        country_code=country,
    )
    logger.debug("Parsed share link: %s", link)
    return link


def _next_segment(segments: Iterator[str], platform: Platform) -> str:
    segment = next(segments, None)
    if not segment:
        raise MalformedLinkError(f"Not a valid {platform.label} share link")
    return segment


def _country_or_raise(code: str) -> str:
    country = parse_country_code(code)
    if country is None:
        raise MalformedLinkError(
            f"Link does not contain a valid ISO 3166-1 alpha-2 country code: {code}"
        )
    return country


def _parse_object_type(segment: str, platform: Platform) -> ObjectType:
    if segment == "song" and platform is Platform.APPLE_MUSIC:
        return ObjectType.SONG
    object_type = _OBJECT_TYPES.get(segment)
    if object_type is None:
        raise MalformedLinkError(
            f"Not a valid {platform.label} share link, unknown object type: {segment}"
        )
    return object_type
