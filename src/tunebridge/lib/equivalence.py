"""Cross-provider equivalence predicates for songs, albums and artists.

Providers assign unrelated IDs to the same work, so "same entity" is
decided from metadata. Identifiers (ISRC, UPC) are authoritative when
present; otherwise thresholds absorb catalogue drift such as bonus
tracks or region-locked releases.

All predicates are symmetric but not transitive.
"""

import math
from collections.abc import Callable, Sequence
from typing import TypeVar

from tunebridge.models.entities import AlbumData, ArtistData, SongData

_T = TypeVar("_T")

# Maximum duration difference for songs sharing an ISRC
_DURATION_TOLERANCE_SECONDS = 2

# Share of tracks two albums without UPCs must have in common
_ALBUM_SONG_MATCH_RATIO = 0.9

# Share of the smaller discography two artists must have in common
_ARTIST_ALBUM_MATCH_RATIO = 0.5


def _any_equivalent(
    items: Sequence[_T], others: Sequence[_T], predicate: Callable[[_T, _T], bool]
) -> bool:
    return any(predicate(a, b) for a in items for b in others)


def _count_found(
    items: Sequence[_T], others: Sequence[_T], predicate: Callable[[_T, _T], bool]
) -> int:
    return sum(1 for a in items if any(predicate(a, b) for b in others))


def songs_equivalent(a: SongData, b: SongData) -> bool:
    """Decide whether two songs are the same recording.

    A shared, non-empty ISRC is required. It is accepted when durations
    agree within two seconds, or otherwise when title, at least one album
    and at least one artist all match.
    """
    if not a.isrc or a.isrc != b.isrc:
        return False

    if abs(a.duration_seconds - b.duration_seconds) <= _DURATION_TOLERANCE_SECONDS:
        return True

    return (
        a.normalized_name == b.normalized_name
        and _any_equivalent(a.albums, b.albums, albums_equivalent)
        and _any_equivalent(a.artists, b.artists, artists_equivalent)
    )


def albums_equivalent(a: AlbumData, b: AlbumData) -> bool:
    """Decide whether two albums are the same release.

    If either side has a UPC the decision is UPC equality alone. Otherwise
    titles must match, at least 90% of the longer track listing must be
    found across both, and at least one artist must match.
    """
    if a.upc or b.upc:
        return a.upc == b.upc

    if a.normalized_name != b.normalized_name:
        return False

    required = math.ceil(_ALBUM_SONG_MATCH_RATIO * max(len(a.songs), len(b.songs)))
    found = max(
        _count_found(a.songs, b.songs, songs_equivalent),
        _count_found(b.songs, a.songs, songs_equivalent),
    )
    if found < required:
        return False

    return _any_equivalent(a.artists, b.artists, artists_equivalent)


def artists_equivalent(a: ArtistData, b: ArtistData) -> bool:
    """Decide whether two artists are the same act.

    Without a discography on both sides only names can be compared. With
    both, at least half of the smaller discography must be found in the
    larger one.
    """
    if not a.albums or not b.albums:
        return a.normalized_name == b.normalized_name

    required = math.ceil(_ARTIST_ALBUM_MATCH_RATIO * min(len(a.albums), len(b.albums)))
    # Count from the smaller side; equal sizes count both ways
    found: list[int] = []
    if len(a.albums) <= len(b.albums):
        found.append(_count_found(a.albums, b.albums, albums_equivalent))
    if len(b.albums) <= len(a.albums):
        found.append(_count_found(b.albums, a.albums, albums_equivalent))
    return max(found) >= required
