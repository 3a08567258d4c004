"""Greedy randomized round construction with strict repeat avoidance.

An alternative to the circle-method rotation for solo play: each round is
built directly from the pairing ledger so that nobody partners the same
player twice and no two players face each other more than once.

Search is randomized and bounded. A round that cannot be completed within
MAX_ATTEMPTS shuffles is infeasible, and a schedule with any infeasible round
is returned empty rather than partial.
"""

import random
from typing import Optional

from dubsched.ledger import PairingLedger
from dubsched.models import Court, Game, Round

MAX_ATTEMPTS = 100
OPPONENT_LIMIT = 1


def default_greedy_rounds(num_players: int) -> int:
    """Rounds requested when the caller doesn't say.

    Each game gives a player two new opponents, so (n - 1) // 2 rounds is the
    hard ceiling under the opponent limit. The greedy search rarely reaches
    it, so ask for (n - 1) // 3.
    """
    return max(1, (num_players - 1) // 3)


def _find_team(candidates: list[str], ledger: PairingLedger,
               opposing: Optional[tuple[str, str]] = None
               ) -> Optional[tuple[str, str]]:
    """First pair of fresh partners, scanning least-partnered players first."""
    if len(candidates) < 2:
        return None

    # Stable sort keeps the shuffled order among equal partner counts
    ordered = sorted(candidates, key=ledger.partner_count)

    for i, p1 in enumerate(ordered):
        for p2 in ordered[i + 1:]:
            if ledger.has_partnered(p1, p2):
                continue
            if opposing is not None and not ledger.can_oppose(
                    (p1, p2), opposing, limit=OPPONENT_LIMIT):
                continue
            return (p1, p2)
    return None


def _try_create_game(pool: list[str], ledger: PairingLedger, court: Court,
                     rng: random.Random) -> Optional[Game]:
    shuffled = list(pool)
    rng.shuffle(shuffled)

    team1 = _find_team(shuffled, ledger)
    if team1 is None:
        return None

    remaining = [p for p in shuffled if p not in team1]
    team2 = _find_team(remaining, ledger, opposing=team1)
    if team2 is None:
        return None

    return Game(court=court, team1=team1, team2=team2)


def generate_greedy_round(players: list[str], courts: list[Court],
                          ledger: PairingLedger,
                          rng: random.Random) -> list[Game]:
    """Build one full round of len(players) // 4 games, or return [].

    The ledger is only updated when the round is complete.
    """
    games_needed = len(players) // 4
    if games_needed == 0 or not courts:
        return []

    games: list[Game] = []
    available = list(players)
    attempts = 0

    while (len(available) >= 4 and len(games) < games_needed
           and attempts < MAX_ATTEMPTS):
        pool = list(available)
        rng.shuffle(pool)
        game = _try_create_game(pool, ledger, courts[len(games) % len(courts)], rng)
        if game is not None:
            games.append(game)
            taken = set(game.players())
            available = [p for p in available if p not in taken]
        attempts += 1

    if len(games) != games_needed:
        return []

    for g in games:
        ledger.record_game(g)
    return games


def generate_greedy_schedule(players: list[str], courts: list[Court],
                             num_rounds: Optional[int] = None,
                             rng: Optional[random.Random] = None) -> list[Round]:
    """Generate `num_rounds` greedy rounds, or [] if any round is infeasible."""
    if len(players) < 4 or not courts:
        return []
    if num_rounds is None:
        num_rounds = default_greedy_rounds(len(players))
    if rng is None:
        rng = random.Random()
    ledger = PairingLedger(players)

    rounds = []
    for r in range(num_rounds):
        games = generate_greedy_round(players, courts, ledger, rng)
        if not games:
            return []
        playing = {p for g in games for p in g.players()}
        byes = [p for p in players if p not in playing]
        rounds.append(Round(number=r + 1, games=games, byes=byes))

    return rounds
