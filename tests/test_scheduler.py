"""Tests for scheduler.py — the public generate_schedule entry point."""

import random

import pytest

from dubsched.models import BYE, Court, Mode, Strategy, Tournament
from dubsched.roundrobin import verify_fixed_round_robin, verify_solo_rounds
from dubsched.scheduler import (
    ScheduleInputError,
    generate_schedule,
    has_enough_players,
    schedule_tournament,
)


def _courts(n):
    return [Court(i, f"Court {i}") for i in range(1, n + 1)]


def _players(n):
    return [f"P{i}" for i in range(n)]


class TestFixedMode:
    def test_four_players_one_court(self):
        rounds = generate_schedule(["A", "B", "C", "D"], _courts(1), "fixed")
        assert len(rounds) == 1
        assert len(rounds[0].games) == 1
        game = rounds[0].games[0]
        assert game.team1 == ("A", "B")
        assert game.team2 == ("C", "D")

    def test_eight_players_two_courts(self):
        players = _players(8)
        rounds = generate_schedule(players, _courts(2), Mode.FIXED)
        assert len(rounds) == 3
        assert all(len(r.games) == 2 for r in rounds)
        result = verify_fixed_round_robin(rounds, players)
        assert result["valid"], result["errors"]

    def test_strategy_ignored(self):
        players = _players(8)
        assert (generate_schedule(players, _courts(2), "fixed", strategy="greedy", seed=3)
                == generate_schedule(players, _courts(2), "fixed"))

    def test_odd_player_count_is_empty(self):
        assert generate_schedule(_players(7), _courts(2), "fixed") == []

    def test_too_few_players_is_empty(self):
        assert generate_schedule(["A", "B"], _courts(1), "fixed") == []


class TestSoloMode:
    def test_rotation_default(self):
        players = _players(8)
        rounds = generate_schedule(players, _courts(2), "solo")
        assert len(rounds) == 7
        result = verify_solo_rounds(rounds, players)
        assert result["valid"], result["errors"]

    def test_five_players(self):
        rounds = generate_schedule(list("ABCDE"), _courts(1), "solo")
        assert len(rounds) == 5
        assert all(len(r.games) == 1 for r in rounds)

    def test_three_players_is_empty(self):
        assert generate_schedule(list("ABC"), _courts(1), "solo") == []

    def test_greedy_strategy(self):
        players = _players(8)
        rounds = generate_schedule(players, _courts(2), "solo",
                                   strategy=Strategy.GREEDY, rounds=1, seed=11)
        assert len(rounds) == 1
        assert len(rounds[0].games) == 2

    def test_greedy_seed_reproducible(self):
        players = _players(12)
        r1 = generate_schedule(players, _courts(3), "solo", strategy="greedy",
                               rounds=2, seed=42)
        r2 = generate_schedule(players, _courts(3), "solo", strategy="greedy",
                               rounds=2, seed=42)
        assert r1 == r2

    def test_greedy_injected_rng(self):
        players = _players(12)
        r1 = generate_schedule(players, _courts(3), "solo", strategy="greedy",
                               rounds=2, rng=random.Random(9))
        r2 = generate_schedule(players, _courts(3), "solo", strategy="greedy",
                               rounds=2, seed=9)
        assert r1 == r2

    def test_greedy_infeasible_is_empty(self):
        assert generate_schedule(list("ABCD"), _courts(1), "solo",
                                 strategy="greedy", rounds=2, seed=1) == []


class TestInputs:
    def test_no_courts_is_empty(self):
        assert generate_schedule(_players(8), [], "fixed") == []
        assert generate_schedule(_players(8), [], "solo") == []

    def test_inputs_not_mutated(self):
        players = _players(7)
        courts = _courts(2)
        generate_schedule(players, courts, "solo")
        assert players == _players(7)
        assert courts == _courts(2)

    def test_accepts_tuples(self):
        rounds = generate_schedule(("A", "B", "C", "D"), (Court(1, "C1"),), "fixed")
        assert len(rounds) == 1

    def test_duplicate_players_rejected(self):
        with pytest.raises(ScheduleInputError, match="Duplicate players: A"):
            generate_schedule(["A", "B", "A", "C"], _courts(1), "solo")

    def test_blank_player_rejected(self):
        with pytest.raises(ScheduleInputError):
            generate_schedule(["A", "B", " ", "C"], _courts(1), "solo")

    def test_non_string_player_rejected(self):
        with pytest.raises(ScheduleInputError):
            generate_schedule(["A", "B", 3, "C"], _courts(1), "solo")

    def test_reserved_player_rejected(self):
        with pytest.raises(ScheduleInputError, match="reserved"):
            generate_schedule(["A", "B", "C", BYE], _courts(1), "solo")

    def test_duplicate_court_ids_rejected(self):
        with pytest.raises(ScheduleInputError, match="Duplicate court id"):
            generate_schedule(_players(4), [Court(1, "a"), Court(1, "b")], "fixed")

    def test_invalid_court_rejected(self):
        with pytest.raises(ScheduleInputError):
            generate_schedule(_players(4), [{"id": 1, "name": "a"}], "fixed")

    def test_unknown_mode(self):
        with pytest.raises(ScheduleInputError, match="Unknown mode"):
            generate_schedule(_players(4), _courts(1), "triples")

    def test_unknown_strategy(self):
        with pytest.raises(ScheduleInputError, match="Unknown strategy"):
            generate_schedule(_players(4), _courts(1), "solo", strategy="best")

    def test_bad_round_count(self):
        with pytest.raises(ScheduleInputError):
            generate_schedule(_players(4), _courts(1), "solo",
                              strategy="greedy", rounds=0)

    def test_schedule_error_is_value_error(self):
        assert issubclass(ScheduleInputError, ValueError)


class TestHasEnoughPlayers:
    def test_fixed(self):
        assert has_enough_players(_players(4), Mode.FIXED)
        assert not has_enough_players(_players(5), Mode.FIXED)
        assert not has_enough_players(_players(2), Mode.FIXED)

    def test_solo(self):
        assert has_enough_players(_players(5), Mode.SOLO)
        assert not has_enough_players(_players(3), Mode.SOLO)


class TestScheduleTournament:
    def test_uses_tournament_settings(self):
        t = Tournament(
            name="Club night", mode=Mode.SOLO, players=_players(6),
            courts=_courts(1),
        )
        rounds = schedule_tournament(t)
        assert len(rounds) == 5

    def test_greedy_tournament(self):
        t = Tournament(
            name="Club night", mode=Mode.SOLO, players=_players(8),
            courts=_courts(2), strategy=Strategy.GREEDY, rounds=1, seed=4,
        )
        rounds = schedule_tournament(t)
        assert len(rounds) == 1
