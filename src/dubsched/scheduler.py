"""Public entry point: generate a doubles fixture for a set of players.

Two modes:
- fixed: players arrive pre-paired (0&1, 2&3, ...) and the teams play a
  round-robin (roundrobin.generate_fixed_rounds).
- solo: partners rotate every round, either by the deterministic circle
  method (strategy "rotation", the default) or by the greedy matcher
  (strategy "greedy", matcher.generate_greedy_schedule).

Too few players or courts yields an empty schedule. Malformed input
(duplicate or blank player ids, duplicate court ids, unknown mode) raises
ScheduleInputError.
"""

import random
from typing import Optional

from dubsched.matcher import generate_greedy_schedule
from dubsched.models import BYE, Court, Mode, Round, Strategy, Tournament
from dubsched.roundrobin import generate_fixed_rounds, generate_solo_rounds

MIN_PLAYERS = 4


class ScheduleInputError(ValueError):
    """Players, courts or options that cannot describe a valid fixture."""


def _check_players(players: list[str]) -> None:
    seen = set()
    dupes = []
    for p in players:
        if not isinstance(p, str) or not p.strip():
            raise ScheduleInputError(f"Invalid player identifier: {p!r}")
        if p == BYE:
            raise ScheduleInputError(f"Player identifier {BYE!r} is reserved")
        if p in seen and p not in dupes:
            dupes.append(p)
        seen.add(p)
    if dupes:
        raise ScheduleInputError(f"Duplicate players: {', '.join(dupes)}")


def _check_courts(courts: list[Court]) -> None:
    seen = set()
    for c in courts:
        if not isinstance(c, Court):
            raise ScheduleInputError(f"Invalid court: {c!r}")
        if c.id in seen:
            raise ScheduleInputError(f"Duplicate court id: {c.id}")
        seen.add(c.id)


def has_enough_players(players: list[str], mode: Mode) -> bool:
    if len(players) < MIN_PLAYERS:
        return False
    if mode is Mode.FIXED and len(players) % 2 != 0:
        return False
    return True


def generate_schedule(players: list[str], courts: list[Court],
                      mode: "Mode | str",
                      strategy: "Strategy | str" = Strategy.ROTATION,
                      rounds: Optional[int] = None,
                      seed: Optional[int] = None,
                      rng: Optional[random.Random] = None) -> list[Round]:
    """Generate the ordered rounds for one tournament.

    Returns [] when there are fewer than 4 players, an odd player count in
    fixed mode, no courts, or (greedy strategy) no feasible schedule.
    The inputs are never mutated.
    """
    try:
        mode = Mode.from_str(mode)
    except ValueError:
        raise ScheduleInputError(f"Unknown mode: {mode!r}") from None
    try:
        strategy = Strategy.from_str(strategy)
    except ValueError:
        raise ScheduleInputError(f"Unknown strategy: {strategy!r}") from None
    if rounds is not None and rounds < 1:
        raise ScheduleInputError(f"Round count must be at least 1, got {rounds}")

    players = list(players)
    courts = list(courts)
    _check_players(players)
    _check_courts(courts)

    if not courts or not has_enough_players(players, mode):
        return []

    if mode is Mode.FIXED:
        return generate_fixed_rounds(players, courts)

    if strategy is Strategy.GREEDY:
        if rng is None:
            rng = random.Random(seed)
        return generate_greedy_schedule(players, courts, num_rounds=rounds, rng=rng)

    return generate_solo_rounds(players, courts)


def schedule_tournament(tournament: Tournament) -> list[Round]:
    """Generate the schedule for a loaded Tournament config."""
    return generate_schedule(
        tournament.players,
        tournament.courts,
        tournament.mode,
        strategy=tournament.strategy,
        rounds=tournament.rounds,
        seed=tournament.seed,
    )
