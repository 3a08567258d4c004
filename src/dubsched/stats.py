"""Statistics and balance reporting for a doubles schedule."""

from collections import defaultdict

from dubsched.models import Round


def compute_stats(rounds: list[Round], players: list[str]) -> dict:
    """Count games, byes, partners and opponents per player.

    Returns dict with games_per_player, byes_per_player, partner_counts
    (player -> partner -> count), opponent_counts (player -> opponent ->
    count), games_per_court and total_games.
    """
    games_per_player = defaultdict(int)
    byes_per_player = defaultdict(int)
    partner_counts = defaultdict(lambda: defaultdict(int))
    opponent_counts = defaultdict(lambda: defaultdict(int))
    games_per_court = defaultdict(int)
    court_names = {}
    total_games = 0

    for rnd in rounds:
        for p in rnd.byes:
            byes_per_player[p] += 1
        for g in rnd.games:
            total_games += 1
            games_per_court[g.court.id] += 1
            court_names[g.court.id] = g.court.label
            for team, other in ((g.team1, g.team2), (g.team2, g.team1)):
                a, b = team
                partner_counts[a][b] += 1
                partner_counts[b][a] += 1
                for p in team:
                    games_per_player[p] += 1
                    for o in other:
                        opponent_counts[p][o] += 1

    return {
        "total_rounds": len(rounds),
        "total_games": total_games,
        "games_per_player": {p: games_per_player.get(p, 0) for p in players},
        "byes_per_player": {p: byes_per_player.get(p, 0) for p in players},
        "partner_counts": {p: dict(v) for p, v in partner_counts.items()},
        "opponent_counts": {p: dict(v) for p, v in opponent_counts.items()},
        "games_per_court": dict(games_per_court),
        "court_names": court_names,
    }


def _z(n: int, width: int = 5) -> str:
    """Right-aligned count, '.' for zero."""
    return f"{n:>{width}}" if n else " " * (width - 1) + "."


def format_stats_report(stats: dict, players: list[str]) -> str:
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 60)
    lines.append(f"\nRounds: {stats['total_rounds']}   Games: {stats['total_games']}")

    width = max([len(p) for p in players] + [6])

    lines.append("\n--- PER PLAYER ---")
    lines.append(f"{'Player':<{width}} {'Games':>5} {'Byes':>5} {'Ptnrs':>5} {'Opps':>5}")
    lines.append("-" * (width + 24))
    for p in players:
        games = stats["games_per_player"].get(p, 0)
        byes = stats["byes_per_player"].get(p, 0)
        ptnrs = len(stats["partner_counts"].get(p, {}))
        opps = len(stats["opponent_counts"].get(p, {}))
        lines.append(f"{p:<{width}} {_z(games)} {_z(byes)} {_z(ptnrs)} {_z(opps)}")

    lines.append("\n--- PARTNER MATRIX ---")
    lines.extend(_matrix(stats["partner_counts"], players, width))

    lines.append("\n--- OPPONENT MATRIX ---")
    lines.extend(_matrix(stats["opponent_counts"], players, width))

    if stats["games_per_court"]:
        lines.append("\n--- GAMES PER COURT ---")
        for court_id in sorted(stats["games_per_court"]):
            name = stats["court_names"].get(court_id, str(court_id))
            lines.append(f"  {name:<20} {stats['games_per_court'][court_id]:>4}")

    return "\n".join(lines)


def _matrix(counts: dict, players: list[str], width: int) -> list[str]:
    cols = [p[:5] for p in players]
    lines = [f"{'':<{width}}" + "".join(f" {c:>5}" for c in cols)]
    lines.append("-" * (width + 6 * len(players)))
    for p1 in players:
        row = f"{p1:<{width}}"
        for p2 in players:
            if p1 == p2:
                row += "     -"
            else:
                row += " " + _z(counts.get(p1, {}).get(p2, 0))
        lines.append(row)
    return lines
