"""Utility functions for tunebridge."""

from tunebridge.utils.duration import milliseconds_to_seconds, parse_iso8601_duration
from tunebridge.utils.url import (
    is_supported_url,
    parse_country_code,
    parse_share_link,
    short_link_platform,
)

__all__ = [
    "is_supported_url",
    "milliseconds_to_seconds",
    "parse_country_code",
    "parse_iso8601_duration",
    "parse_share_link",
    "short_link_platform",
]
