"""Tests for stats.py — per-player counts and report formatting."""

from dubsched.models import Court, Game, Round
from dubsched.stats import compute_stats, format_stats_report


def _rounds():
    c1, c2 = Court(1, "Centre"), Court(2, "Side")
    return [
        Round(1, [Game(c1, ("A", "B"), ("C", "D"))], byes=["E"]),
        Round(2, [Game(c2, ("A", "C"), ("E", "B"))], byes=["D"]),
    ]


class TestComputeStats:
    def test_totals(self):
        stats = compute_stats(_rounds(), list("ABCDE"))
        assert stats["total_rounds"] == 2
        assert stats["total_games"] == 2

    def test_games_and_byes(self):
        stats = compute_stats(_rounds(), list("ABCDE"))
        assert stats["games_per_player"] == {"A": 2, "B": 2, "C": 2, "D": 1, "E": 1}
        assert stats["byes_per_player"] == {"A": 0, "B": 0, "C": 0, "D": 1, "E": 1}

    def test_partner_counts(self):
        stats = compute_stats(_rounds(), list("ABCDE"))
        assert stats["partner_counts"]["A"] == {"B": 1, "C": 1}
        assert stats["partner_counts"]["B"] == {"A": 1, "E": 1}

    def test_opponent_counts(self):
        stats = compute_stats(_rounds(), list("ABCDE"))
        assert stats["opponent_counts"]["A"] == {"C": 1, "D": 1, "E": 1, "B": 1}
        assert stats["opponent_counts"]["C"]["B"] == 2

    def test_games_per_court(self):
        stats = compute_stats(_rounds(), list("ABCDE"))
        assert stats["games_per_court"] == {1: 1, 2: 1}
        assert stats["court_names"] == {1: "Centre", 2: "Side"}

    def test_empty(self):
        stats = compute_stats([], ["A"])
        assert stats["games_per_player"] == {"A": 0}
        assert stats["total_games"] == 0


class TestFormatStatsReport:
    def test_sections(self):
        players = list("ABCDE")
        text = format_stats_report(compute_stats(_rounds(), players), players)
        assert "Rounds: 2   Games: 2" in text
        assert "--- PER PLAYER ---" in text
        assert "--- PARTNER MATRIX ---" in text
        assert "--- OPPONENT MATRIX ---" in text
        assert "Centre" in text

    def test_no_games(self):
        text = format_stats_report(compute_stats([], ["A"]), ["A"])
        assert "GAMES PER COURT" not in text
