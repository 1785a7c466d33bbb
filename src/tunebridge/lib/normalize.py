"""Normalization of free-text catalogue metadata into comparison keys.

Providers format the same work differently: accents, casing, curly quotes,
"(Remastered 2011)" style decorations and artist lists joined with "&",
"x" or ",". Every function here folds a raw string into a key that is
equal across providers for the same work. All functions are pure.
"""

import re
import string
import unicodedata
from collections.abc import Callable

# ============================================================================
# PRIVATE CONSTANTS - Patterns and replacement tables (not exported)
# ============================================================================

# Song-level decoration such as "(Remastered 2019)" or "- Live 2001"
_DECORATION_RE = re.compile(
    r"(?:[\(\[\{][^)\]\}]*?"
    r"(?:remaster|live|version|edit|mix|karaoke|mono|instrumental|acoustic)"
    r"[^)\]\}]*?[\)\]\}]"
    r"|\s*[-–—]\s*(?:\d{2,4}\s*)?"
    r"(?:live|remaster|version|edit|mix|karaoke|mono|instrumental|acoustic)"
    r"(?:\s*\d{2,4})?\s*$)",
    re.IGNORECASE,
)

# Album-level decoration such as "(Deluxe Edition)" or "- Anniversary Edition".
# "EP" and "Single" suffixes are deliberately absent.
_ALBUM_DECORATION_RE = re.compile(
    r"(?:[\(\[\{][^)\]\}]*?"
    r"(?:deluxe|expanded|anniversary|remaster|edition|version)"
    r"[^)\]\}]*?[\)\]\}]"
    r"|\s*[-–—]\s*(?:(?:deluxe|expanded|anniversary|remaster|edition|version)"
    r"(?:\s+(?:edition|version))?)\s*$)",
    re.IGNORECASE,
)

# "feat." clauses, bare or wrapped in (), [], {} or quotes
_FEAT_RE = re.compile(
    r"(?:\s+[(\[{\"]?|\s*[(\[{\"])\s*"
    r"(?:feat(?:\.|\b)|featuring|ft(?:\.|\b))"
    r"\s+[^)\]}\"]+[)\]}\"]?",
    re.IGNORECASE,
)

# Connectors joining multiple artists in one credit
_ARTIST_SPLIT_RE = re.compile(r"\s*(?:&| and | x |,|;|\+)\s*", re.IGNORECASE)

_ARTIST_JOINER = " and "
_VARIOUS_ARTISTS = "various artists"

_DASHES = str.maketrans(dict.fromkeys("-‐‒–—−", " "))

_ENTITIES = (
    ("&amp;", "&"),
    ("“", '"'),
    ("”", '"'),
    ("‘", "'"),
    ("’", "'"),
)

_ASCII_PUNCTUATION = str.maketrans("", "", string.punctuation)


# ============================================================================
# PRIVATE HELPERS
# ============================================================================


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def _fold(raw: str) -> str:
    """Accent-fold, lower-case, decode entities and collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", raw)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).lower()
    for entity, replacement in _ENTITIES:
        folded = folded.replace(entity, replacement)
    return _collapse_whitespace(folded)


def _strip_punctuation(text: str) -> str:
    return _collapse_whitespace(text.translate(_ASCII_PUNCTUATION))


def _until_stable(step: Callable[[str], str], text: str) -> str:
    """Apply ``step`` until it no longer changes the text.

    Stripping punctuation can expose a clause the patterns missed while it
    was still bracketed or quoted, so a single pass is not idempotent.
    Every step only removes characters, which bounds the loop.
    """
    while (stepped := step(text)) != text:
        text = stepped
    return text


def _title_step(text: str) -> str:
    text = _FEAT_RE.sub("", text)
    text = _DECORATION_RE.sub("", text)
    return _strip_punctuation(text)


def _album_title_step(text: str) -> str:
    return _strip_punctuation(_ALBUM_DECORATION_RE.sub("", text))


# ============================================================================
# PUBLIC API
# ============================================================================


def normalize_title(raw: str) -> str:
    """Normalize a song title.

    Removes "feat." clauses and bracketed or dash-suffixed decorations
    (remaster, live, version, edit, mix, karaoke, mono, instrumental,
    acoustic, optionally with a year).

    Args:
        raw: Title as returned by a provider.

    Returns:
        Comparison key, e.g. "blinding lights" for
        "Blinding Lights (feat. ROSALÍA)".
    """
    return _until_stable(_title_step, _fold(raw))


normalize_song_title = normalize_title


def normalize_album_title(raw: str) -> str:
    """Normalize an album title.

    Removes edition decorations (deluxe, expanded, anniversary, remaster,
    edition, version) but keeps "EP" and "Single" suffixes, so
    "Random Title - EP" becomes "random title ep".
    """
    return _until_stable(_album_title_step, _fold(raw))


def normalize_artist_name(raw: str) -> str:
    """Normalize an artist credit, possibly naming several artists.

    Connectors are unified to " and ", tokens are sorted and deduplicated,
    and "Various Artists" is dropped, so "JAY-Z & Beyoncé" and
    "Beyonce x Jay Z" both become "beyonce and jay z".
    """
    text = _fold(raw).translate(_DASHES)
    text = _ARTIST_SPLIT_RE.sub(_ARTIST_JOINER, text)
    text = text.translate(_ASCII_PUNCTUATION)
    tokens = {_collapse_whitespace(token) for token in text.split(_ARTIST_JOINER)}
    tokens.discard("")
    tokens.discard(_VARIOUS_ARTISTS)
    return _ARTIST_JOINER.join(sorted(tokens))
