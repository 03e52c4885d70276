"""Tests for the artist weeks leaderboard."""

import pytest

from chartrace.leaderboard import artist_leaderboard, concentration
from chartrace.models import ArtistWeeks


@pytest.fixture()
def credits(make_records):
    return make_records([
        ("2024-01-06", 1, "Song A", "Taylor Swift"),
        ("2024-01-13", 1, "Song A", "Taylor Swift"),
        ("2024-01-13", 2, "Song B", "Taylor Swift"),
        ("2024-01-06", 2, "Duet", "Drake feat. Future"),
        ("2024-01-13", 3, "Duet", "Drake Ft Future"),
        ("2024-01-06", 3, "One Off", "Solo Act"),
        ("not a date", 4, "One Off", "Solo Act"),
    ])


class TestArtistLeaderboard:
    def test_ranked_by_weeks(self, credits):
        board = artist_leaderboard(credits)
        assert [(a.artist, a.weeks) for a in board] == [
            ("Taylor Swift", 3),
            ("Drake feat. Future", 2),
            ("Solo Act", 1),
        ]

    def test_credit_variants_grouped(self, credits):
        board = artist_leaderboard(credits)
        drake = board[1]
        assert drake.artist_key == "drake feat future"

    def test_limit(self, credits):
        assert len(artist_leaderboard(credits, limit=2)) == 2

    def test_empty(self):
        assert artist_leaderboard([]) == []


class TestConcentration:
    def test_share(self):
        board = [
            ArtistWeeks(artist_key="a", artist="A", weeks=6),
            ArtistWeeks(artist_key="b", artist="B", weeks=3),
            ArtistWeeks(artist_key="c", artist="C", weeks=1),
        ]
        assert concentration(board, top=1) == pytest.approx(0.6)
        assert concentration(board, top=10) == pytest.approx(1.0)

    def test_empty(self):
        assert concentration([]) == 0.0
