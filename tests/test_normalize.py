"""Tests for the row normalizer: identity canonicalization and row validation."""

from datetime import date

import pytest

from chartrace.models import RawRow
from chartrace.normalize import (
    canonical_id,
    normalize_artist,
    normalize_rows,
    parse_int,
    parse_week,
)


class TestNormalizeArtist:
    @pytest.mark.parametrize("credit", [
        "Artist A feat. Artist B",
        "Artist A ft Artist B",
        "Artist A Ft. Artist B",
        "ARTIST A Featuring Artist B",
        "Artist A with Artist B",
        "Artist A x Artist B",
        "Artist A × Artist B",
        "Artist A   feat.  Artist B ",
    ])
    def test_connector_variants_merge(self, credit):
        assert normalize_artist(credit) == "artist a feat artist b"

    def test_parenthetical_feature_removed(self):
        assert normalize_artist("Drake (Featuring Rihanna)") == "drake"
        assert normalize_artist("Drake (with Future)") == "drake"

    def test_other_parentheses_kept(self):
        assert normalize_artist("Prince (and The Revolution)") == "prince (and the revolution)"

    def test_ampersand_and_commas(self):
        assert normalize_artist("Lady Gaga&Bruno Mars") == "lady gaga & bruno mars"
        assert normalize_artist("A, B  &  C") == "a b & c"

    @pytest.mark.parametrize("credit", [
        "Artist A feat. Artist B",
        "Post Malone Featuring 21 Savage (with Swae Lee)",
        "Lil Nas X x Billy Ray Cyrus",
        "Crosby, Stills, Nash & Young",
        "Artist A x, Artist B",
        "Artist A with, Artist B",
        "Artist A &x Artist B",
        "Artist A feat.& Artist B",
        "Artist A (,feat Artist B)",
        "Artist A ( x Artist B)",
        "Artist A (ft. Artist B)",
        "",
    ])
    def test_idempotent(self, credit):
        once = normalize_artist(credit)
        assert normalize_artist(once) == once

    def test_word_containing_connector_untouched(self):
        assert normalize_artist("Withers") == "withers"
        assert normalize_artist("The Weeknd") == "the weeknd"


class TestCanonicalId:
    def test_credit_variants_share_id(self):
        a = canonical_id("Song", "Artist A feat. Artist B")
        b = canonical_id("Song", "Artist A ft Artist B")
        assert a == b

    def test_parenthetical_ft_variants_share_id(self):
        a = canonical_id("Song", "Artist A (ft. Artist B)")
        b = canonical_id("Song", "Artist A (ft Artist B)")
        c = canonical_id("Song", "Artist A (Feat. Artist B)")
        assert a == b == c == "song|artist a"

    def test_connector_next_to_punctuation(self):
        assert normalize_artist("Artist A x, Artist B") == "artist a feat artist b"
        assert normalize_artist("Artist A feat.& Artist B") == "artist a feat & artist b"

    def test_title_case_and_spacing_ignored(self):
        assert canonical_id("Bad  Guy", "Billie Eilish") == canonical_id("bad guy", "billie eilish")

    def test_different_titles_differ(self):
        assert canonical_id("Song", "X") != canonical_id("Other Song", "X")


class TestParsing:
    def test_iso_week(self):
        assert parse_week("2024-08-03") == date(2024, 8, 3)
        assert parse_week("2024-08-03T00:00:00") == date(2024, 8, 3)

    def test_us_week(self):
        assert parse_week("8/3/2024") == date(2024, 8, 3)

    def test_bad_week(self):
        assert parse_week("next tuesday") is None
        assert parse_week("") is None
        assert parse_week(None) is None

    def test_parse_int(self):
        assert parse_int(" 7 ") == 7
        assert parse_int("NEW") is None
        assert parse_int(None) is None


class TestNormalizeRows:
    def test_drops_non_numeric_rank(self):
        rows = [
            RawRow(week="2024-08-03", rank="1", title="A", artist="X"),
            RawRow(week="Source: Billboard", rank="", title="", artist=""),
            RawRow(week="2024-08-03", rank="two", title="B", artist="Y"),
            RawRow(week="2024-08-03", rank="0", title="C", artist="Z"),
            RawRow(week="2024-08-03", rank="3", title="D", artist="W"),
        ]
        records = normalize_rows(rows)
        assert [r.title for r in records] == ["A", "D"]

    def test_optional_fields_null_out(self):
        row = RawRow(
            week="2024-08-03", rank="5", title="A", artist="X",
            last_week="NEW", peak_rank="2", weeks_on_chart=None,
        )
        (record,) = normalize_rows([row])
        assert record.last_week is None
        assert record.peak_rank == 2
        assert record.weeks_on_chart is None

    def test_unparseable_week_kept_undated(self):
        (record,) = normalize_rows([RawRow(week="??", rank="1", title="A", artist="X")])
        assert record.week is None

    def test_points_inverse_rank(self):
        records = normalize_rows([
            RawRow(week="2024-08-03", rank="1", title="A", artist="X"),
            RawRow(week="2024-08-03", rank="100", title="B", artist="Y"),
            RawRow(week="2024-08-03", rank="150", title="C", artist="Z"),
        ])
        assert [r.points for r in records] == [100, 1, 0]

    def test_display_artist_unchanged(self):
        (record,) = normalize_rows([
            RawRow(week="2024-08-03", rank="1", title="A", artist="Artist A Feat. B"),
        ])
        assert record.artist == "Artist A Feat. B"
        assert record.entity_id == "a|artist a feat b"
