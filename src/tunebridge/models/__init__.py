"""Data models for tunebridge.

Public API:
    ShareLink - Parsed provider link
    SongData, AlbumData, ArtistData - Canonical catalogue entities
    Link, ConversionResults - Conversion output
    Platform, ObjectType - Enumerations

Internal (not exported):
    spotify.py, tidal.py, deezer.py - Models for parsing provider responses
"""

from tunebridge.models.entities import AlbumData, ArtistData, SongData
from tunebridge.models.enums import ObjectType, Platform
from tunebridge.models.results import ConversionResults, Link
from tunebridge.models.share_link import ShareLink

__all__ = [
    "AlbumData",
    "ArtistData",
    "ConversionResults",
    "Link",
    "ObjectType",
    "Platform",
    "ShareLink",
    "SongData",
]
