"""Partnership and opponent bookkeeping for the greedy matcher."""

from collections import defaultdict
from typing import Iterable

from dubsched.models import Game


class PairingLedger:
    """Who has partnered whom, and how often each pair has been opponents.

    Both relations are symmetric and only ever grow. One ledger lives for a
    single schedule-generation call.
    """

    def __init__(self, players: Iterable[str] = ()):
        self._partners: dict[str, set[str]] = defaultdict(set)
        self._opponents: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        for p in players:
            self._partners[p] = set()
            self._opponents[p] = defaultdict(int)

    def record_partnership(self, a: str, b: str) -> None:
        if a == b:
            return
        self._partners[a].add(b)
        self._partners[b].add(a)

    def record_opponency(self, a: str, b: str) -> None:
        if a == b:
            return
        self._opponents[a][b] += 1
        self._opponents[b][a] += 1

    def record_game(self, game: Game) -> None:
        self.record_partnership(*game.team1)
        self.record_partnership(*game.team2)
        for p1 in game.team1:
            for p2 in game.team2:
                self.record_opponency(p1, p2)

    def partner_count(self, player: str) -> int:
        """Number of distinct partners so far (load-balancing tie-break)."""
        return len(self._partners.get(player, ()))

    def has_partnered(self, a: str, b: str) -> bool:
        return b in self._partners.get(a, ())

    def opponent_count(self, a: str, b: str) -> int:
        opp = self._opponents.get(a)
        if opp is None:
            return 0
        return opp.get(b, 0)

    def can_oppose(self, team_a: Iterable[str], team_b: Iterable[str],
                   limit: int = 1) -> bool:
        """True if every cross-team pair has met fewer than `limit` times."""
        team_b = list(team_b)
        return all(
            self.opponent_count(p1, p2) < limit
            for p1 in team_a for p2 in team_b
        )
