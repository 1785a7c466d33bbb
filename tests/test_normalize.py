"""Tests for metadata normalization.

Normalized keys must be equal across providers for the same work, so
these tests mostly compare pairs of provider spellings.
"""

import pytest
from tunebridge.lib.normalize import (
    normalize_album_title,
    normalize_artist_name,
    normalize_song_title,
    normalize_title,
)


class TestNormalizeTitle:
    """Tests for normalize_title function."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Blinding Lights (feat. ROSALÍA)", "blinding lights"),
            ("Blinding Lights ft. Rosalia", "blinding lights"),
            ("Blinding Lights featuring Rosalía", "blinding lights"),
            ("Blinding Lights", "blinding lights"),
            ("Here Comes the Sun (Remastered 2019)", "here comes the sun"),
            ("Here Comes the Sun - 2009 Remaster", "here comes the sun"),
            ("Hotel California - Live 1994", "hotel california"),
            ("Song [Radio Edit]", "song"),
            ("Song (Acoustic Version)", "song"),
            ("Song {Instrumental}", "song"),
            ("Blinding Lights [feat. Rosalia]", "blinding lights"),
            ("Blinding Lights {ft. Rosalia}", "blinding lights"),
            ('Blinding Lights "ft. Rosalia"', "blinding lights"),
        ],
        ids=[
            "feat_in_parens",
            "ft_without_parens",
            "featuring",
            "plain",
            "remastered_year",
            "dash_year_remaster",
            "dash_live_year",
            "bracket_edit",
            "acoustic_version",
            "brace_instrumental",
            "feat_in_brackets",
            "ft_in_braces",
            "ft_in_quotes",
        ],
    )
    def test_strips_decorations(self, raw: str, expected: str) -> None:
        """Should strip feat. clauses and version decorations."""
        assert normalize_title(raw) == expected

    def test_accent_folding_and_case(self) -> None:
        """Should fold accents and lower-case."""
        assert normalize_title("Déjà Vu") == normalize_title("DEJA VU") == "deja vu"

    def test_typographic_quotes_match_ascii(self) -> None:
        """Curly quotes should normalize like their ASCII equivalents."""
        assert normalize_title("Don’t Stop Me Now") == normalize_title(
            "Don't Stop Me Now"
        )

    def test_html_entities_decoded(self) -> None:
        """&amp; should normalize like a literal ampersand."""
        assert normalize_title("Rock &amp; Roll") == normalize_title("Rock & Roll")

    def test_whitespace_collapsed(self) -> None:
        """Whitespace runs should collapse and ends should be trimmed."""
        assert normalize_title("  Blinding    Lights \t") == "blinding lights"

    def test_empty_string(self) -> None:
        """Empty input should produce an empty key."""
        assert normalize_title("") == ""

    def test_keeps_non_decoration_parentheses(self) -> None:
        """Parenthesized text that isn't a decoration should be kept."""
        assert normalize_title("(I Can't Get No) Satisfaction") == (
            "i cant get no satisfaction"
        )

    @pytest.mark.parametrize(
        "raw",
        [
            "Blinding Lights (feat. ROSALÍA)",
            "Here Comes the Sun - 2009 Remaster",
            "Don’t Stop Me Now",
            "Blinding Lights [feat. Rosalia]",
            'Blinding Lights "ft. Rosalia"',
            "Song (feat. X",
            "Song [Live",
            "Song (Live) - Remaster",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        """Normalizing a key again should not change it."""
        once = normalize_title(raw)
        assert normalize_title(once) == once

    def test_feat_bracket_styles_match(self) -> None:
        """Feat. clauses in any bracket style should give the same key."""
        assert normalize_title("Blinding Lights [feat. Rosalia]") == normalize_title(
            "Blinding Lights (feat. Rosalia)"
        )

    def test_song_title_alias(self) -> None:
        """normalize_song_title should behave like normalize_title."""
        raw = "Blinding Lights (feat. ROSALÍA)"
        assert normalize_song_title(raw) == normalize_title(raw)


class TestNormalizeAlbumTitle:
    """Tests for normalize_album_title function."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("After Hours (Deluxe)", "after hours"),
            ("Abbey Road (Super Deluxe Edition)", "abbey road"),
            ("Rumours - Deluxe Edition", "rumours"),
            ("Nevermind [20th Anniversary]", "nevermind"),
            ("OK Computer (Remastered)", "ok computer"),
            ("Random Title - EP", "random title ep"),
            ("Random Title - Single", "random title single"),
        ],
        ids=[
            "deluxe",
            "super_deluxe_edition",
            "dash_deluxe_edition",
            "anniversary",
            "remastered",
            "keeps_ep",
            "keeps_single",
        ],
    )
    def test_album_titles(self, raw: str, expected: str) -> None:
        """Should strip edition decorations but keep EP and Single."""
        assert normalize_album_title(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["After Hours (Deluxe)", "Album [Deluxe", "Album - Deluxe (Remastered)"],
    )
    def test_idempotent(self, raw: str) -> None:
        """Normalizing a key again should not change it."""
        once = normalize_album_title(raw)
        assert normalize_album_title(once) == once

    def test_does_not_strip_song_decorations(self) -> None:
        """Live albums should stay distinct from studio albums."""
        assert normalize_album_title("Alive (Live)") != normalize_album_title("Alive")


class TestNormalizeArtistName:
    """Tests for normalize_artist_name function."""

    def test_connector_and_order_insensitive(self) -> None:
        """Different connectors and orders should produce the same key."""
        expected = "beyonce and jay z"
        assert normalize_artist_name("JAY-Z & Beyoncé") == expected
        assert normalize_artist_name("Beyonce x Jay Z") == expected
        assert normalize_artist_name("Beyoncé, JAY Z") == expected
        assert normalize_artist_name("Jay-Z and Beyonce") == expected

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("Simon & Garfunkel", "Garfunkel and Simon"),
            ("Daft Punk; Pharrell Williams", "Pharrell Williams + Daft Punk"),
            ("Sigur Rós", "SIGUR ROS"),
        ],
    )
    def test_equivalent_spellings(self, a: str, b: str) -> None:
        """Provider spellings of the same credit should match."""
        assert normalize_artist_name(a) == normalize_artist_name(b)

    def test_duplicates_collapsed(self) -> None:
        """Repeated artists should appear once."""
        assert normalize_artist_name("Drake & Drake") == "drake"

    def test_various_artists_dropped(self) -> None:
        """'Various Artists' should not contribute to the key."""
        assert normalize_artist_name("Various Artists") == ""
        assert normalize_artist_name("Adele & Various Artists") == "adele"

    def test_idempotent(self) -> None:
        """Normalizing a key again should not change it."""
        once = normalize_artist_name("JAY-Z & Beyoncé")
        assert normalize_artist_name(once) == once
