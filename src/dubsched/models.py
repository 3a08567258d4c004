"""Data models for the doubles schedule generator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# Padding entry used to even out an odd population for the circle method.
# It never appears in an emitted game or bye list.
BYE = "__BYE__"


class Mode(Enum):
    SOLO = "solo"
    FIXED = "fixed"

    @classmethod
    def from_str(cls, s: "str | Mode") -> "Mode":
        if isinstance(s, cls):
            return s
        return cls(str(s).strip().lower())


class Strategy(Enum):
    ROTATION = "rotation"
    GREEDY = "greedy"

    @classmethod
    def from_str(cls, s: "str | Strategy") -> "Strategy":
        if isinstance(s, cls):
            return s
        return cls(str(s).strip().lower())


@dataclass(frozen=True)
class Court:
    """A court games are played on. Identity is the id; name is display-only."""
    id: int
    name: str = field(default="", compare=False)

    @property
    def label(self) -> str:
        return self.name or f"Court {self.id}"


@dataclass
class Game:
    """Two teams of two meeting on one court."""
    court: Court
    team1: tuple[str, str]
    team2: tuple[str, str]

    def players(self) -> list[str]:
        return [*self.team1, *self.team2]

    def involves(self, player: str) -> bool:
        return player in self.team1 or player in self.team2

    def team_of(self, player: str) -> Optional[tuple[str, str]]:
        if player in self.team1:
            return self.team1
        if player in self.team2:
            return self.team2
        return None

    def partner(self, player: str) -> Optional[str]:
        team = self.team_of(player)
        if team is None:
            return None
        return team[1] if team[0] == player else team[0]

    def opponents(self, player: str) -> tuple[str, ...]:
        if player in self.team1:
            return self.team2
        if player in self.team2:
            return self.team1
        return ()


@dataclass
class Round:
    """Games played concurrently; no player appears in more than one game."""
    number: int
    games: list[Game]
    byes: list[str] = field(default_factory=list)

    def players(self) -> list[str]:
        return [p for g in self.games for p in g.players()]


@dataclass
class Tournament:
    """One schedule-generation request, as loaded from config."""
    name: str
    mode: Mode
    players: list[str]
    courts: list[Court]
    strategy: Strategy = Strategy.ROTATION
    rounds: Optional[int] = None  # greedy strategy only
    seed: Optional[int] = None
    total_points: Optional[int] = None
