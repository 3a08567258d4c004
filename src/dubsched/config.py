"""Config loading and validation for the doubles schedule generator."""

from pathlib import Path

import yaml

from dubsched.models import Court, Mode, Strategy, Tournament


class ConfigError(ValueError):
    """A tournament config that cannot be turned into a Tournament."""


def parse_courts(raw_courts: list) -> list[Court]:
    """Parse court entries: plain names or {id, name} mappings.

    Blank names are dropped. Ids default to the 1-based position.
    """
    if raw_courts is None:
        return []
    if not isinstance(raw_courts, list):
        raise ConfigError(f"courts must be a list, got {raw_courts!r}")
    courts = []
    for pos, entry in enumerate(raw_courts, 1):
        if isinstance(entry, dict):
            name = str(entry.get("name", "") or "").strip()
            court_id = entry.get("id", pos)
        else:
            name = str(entry or "").strip()
            court_id = pos
        if not name:
            continue
        try:
            court_id = int(court_id)
        except (TypeError, ValueError):
            raise ConfigError(f"Court {name!r} has a non-integer id: {court_id!r}") from None
        courts.append(Court(id=court_id, name=name))
    return courts


def parse_players(raw_players: list) -> list[str]:
    """Player names as strings, with blank entries dropped."""
    if raw_players is None:
        return []
    if not isinstance(raw_players, list):
        raise ConfigError(f"players must be a list, got {raw_players!r}")
    players = []
    for entry in raw_players:
        if entry is None:
            continue
        name = str(entry).strip()
        if name:
            players.append(name)
    return players


def _optional_int(raw: dict, key: str):
    value = raw.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"tournament.{key} must be an integer, got {value!r}") from None


def load_config(path: str | Path) -> Tournament:
    """Load and validate a tournament config YAML.

    Expected layout:
        tournament: {name, mode, strategy, rounds, seed, total_points}
        players: [names]    (fixed mode: consecutive pairs are teams)
        courts: [names or {id, name}]
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file {path} not found")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    meta = raw.get("tournament") or {}
    if not isinstance(meta, dict):
        raise ConfigError(f"tournament must be a mapping, got {meta!r}")

    try:
        mode = Mode.from_str(meta.get("mode", "fixed"))
    except ValueError:
        raise ConfigError(f"Unknown mode {meta.get('mode')!r} (expected solo or fixed)") from None
    try:
        strategy = Strategy.from_str(meta.get("strategy", "rotation"))
    except ValueError:
        raise ConfigError(
            f"Unknown strategy {meta.get('strategy')!r} (expected rotation or greedy)"
        ) from None

    if "players" not in raw:
        raise ConfigError(f"Config file {path} has no players list")
    players = parse_players(raw["players"])
    courts = parse_courts(raw.get("courts", []))

    tournament = Tournament(
        name=str(meta.get("name", "") or ""),
        mode=mode,
        players=players,
        courts=courts,
        strategy=strategy,
        rounds=_optional_int(meta, "rounds"),
        seed=_optional_int(meta, "seed"),
        total_points=_optional_int(meta, "total_points"),
    )

    errors = validate_tournament(tournament)
    if errors:
        print("Config validation errors:")
        for e in errors:
            print(f"  {e}")
    for w in tournament_warnings(tournament):
        print(f"Warning: {w}")

    return tournament


def validate_tournament(tournament: Tournament) -> list[str]:
    """Problems that will leave the generated schedule empty or rejected."""
    errors = []
    players = tournament.players

    if tournament.mode is Mode.FIXED:
        if len(players) < 4 or len(players) % 2 != 0:
            errors.append(
                f"Fixed mode needs at least 2 complete teams (an even number of "
                f"at least 4 players), got {len(players)} players"
            )
    elif len(players) < 4:
        errors.append(f"Solo mode needs at least 4 players, got {len(players)}")

    if not tournament.courts:
        errors.append("At least one court with a name is required")

    seen = set()
    for p in players:
        if p in seen:
            errors.append(f"Player {p} is listed more than once")
        seen.add(p)

    court_ids = set()
    for c in tournament.courts:
        if c.id in court_ids:
            errors.append(f"Court id {c.id} is used more than once")
        court_ids.add(c.id)

    if tournament.rounds is not None and tournament.rounds < 1:
        errors.append(f"tournament.rounds must be at least 1, got {tournament.rounds}")
    return errors


def tournament_warnings(tournament: Tournament) -> list[str]:
    """Settings that are accepted but have no effect."""
    warnings = []
    if tournament.strategy is Strategy.GREEDY and tournament.mode is Mode.FIXED:
        warnings.append("Greedy strategy only applies to solo mode; fixed teams rotate")
    return warnings
