"""Constraint validation for generated or re-imported schedules.

Hard violations (errors) make a schedule unusable: a player booked twice
in one round, a team with the same player twice, a player on both sides of
a game, an unknown player, a fixed team that changes, or broken round
numbering. Soft issues (warnings) are reported but do not invalidate it.
"""

from collections import defaultdict

from dubsched.models import Mode, Round


def _pair(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a < b else (b, a)


def validate_schedule(rounds: list[Round], players: list[str],
                      mode: "Mode | str") -> dict:
    """Validate a schedule against the doubles invariants.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft constraint issues
    """
    mode = Mode.from_str(mode)
    errors = []
    warnings = []

    known = set(players)
    fixed_partner: dict[str, str] = {}
    if mode is Mode.FIXED:
        for i in range(0, len(players) - 1, 2):
            fixed_partner[players[i]] = players[i + 1]
            fixed_partner[players[i + 1]] = players[i]

    partner_counts = defaultdict(int)
    opponent_counts = defaultdict(int)
    matchup_counts = defaultdict(int)
    games_played = {p: 0 for p in players}

    for expected, rnd in enumerate(rounds, 1):
        if rnd.number != expected:
            errors.append(f"Round {rnd.number} found where round {expected} expected")

        booked = set()
        court_use = defaultdict(int)
        for g in rnd.games:
            court_use[g.court.id] += 1

            for team in (g.team1, g.team2):
                if len(team) != 2:
                    errors.append(
                        f"Round {rnd.number}: team {list(team)} does not have 2 players"
                    )
                elif team[0] == team[1]:
                    errors.append(
                        f"Round {rnd.number}: {team[0]} partners themselves"
                    )

            both_sides = set(g.team1) & set(g.team2)
            for p in sorted(both_sides):
                errors.append(f"Round {rnd.number}: {p} is on both teams of a game")

            for p in g.players():
                if p not in known:
                    errors.append(f"Round {rnd.number}: unknown player {p}")
                if p in booked and p not in both_sides:
                    errors.append(f"Round {rnd.number}: {p} appears twice")
                booked.add(p)
                games_played[p] = games_played.get(p, 0) + 1

            for team in (g.team1, g.team2):
                if len(team) != 2:
                    continue
                a, b = team
                partner_counts[_pair(a, b)] += 1
                if mode is Mode.FIXED and a in fixed_partner \
                        and fixed_partner[a] != b:
                    errors.append(
                        f"Round {rnd.number}: {a} plays with {b}, "
                        f"fixed partner is {fixed_partner[a]}"
                    )

            for p1 in g.team1:
                for p2 in g.team2:
                    if p1 != p2:
                        opponent_counts[_pair(p1, p2)] += 1
            t1, t2 = tuple(sorted(g.team1)), tuple(sorted(g.team2))
            matchup_counts[(t1, t2) if t1 < t2 else (t2, t1)] += 1

        for p in rnd.byes:
            if p in booked:
                errors.append(f"Round {rnd.number}: {p} has a bye but also plays")

        for court_id, count in sorted(court_use.items()):
            if count > 1:
                warnings.append(
                    f"Round {rnd.number}: court {court_id} hosts {count} games"
                )

    if mode is Mode.SOLO:
        for (a, b), count in sorted(partner_counts.items()):
            if count > 1:
                warnings.append(f"Partners {a} & {b} paired {count} times")

    if mode is Mode.FIXED:
        for (t1, t2), count in sorted(matchup_counts.items()):
            if count > 1:
                warnings.append(
                    f"Teams {' & '.join(t1)} vs {' & '.join(t2)} met {count} times"
                )
    else:
        for (a, b), count in sorted(opponent_counts.items()):
            if count > 1:
                warnings.append(f"Opponents {a} vs {b} met {count} times")

    if rounds and games_played:
        lo = min(games_played.values())
        hi = max(games_played.values())
        if hi - lo > 1:
            under = [p for p in players if games_played.get(p, 0) == lo]
            warnings.append(
                f"Games-played spread {hi - lo} exceeds 1: min={lo}, max={hi}. "
                f"Fewest games: {', '.join(under)}"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no hard constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
