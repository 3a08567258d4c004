"""Output formatters for the doubles schedule generator."""

import csv
from io import StringIO
from pathlib import Path

from dubsched.models import Court, Game, Mode, Round, Tournament

CSV_COLUMNS = [
    "round", "court_id", "court",
    "team1_player1", "team1_player2",
    "team2_player1", "team2_player2",
]


def _team(team: tuple[str, str]) -> str:
    return " & ".join(team)


def format_schedule(rounds: list[Round], tournament: Tournament) -> str:
    """Format schedule as human-readable text, organized by round."""
    mode_label = "FIXED TEAMS" if tournament.mode is Mode.FIXED else "SOLO"
    title = tournament.name.upper() if tournament.name else "DOUBLES SCHEDULE"

    lines = []
    lines.append("=" * 80)
    lines.append(f"{title} ({mode_label})")
    lines.append("=" * 80)
    if tournament.total_points:
        lines.append(f"Games to {tournament.total_points} points")

    if not rounds:
        lines.append("\nNo games scheduled.")
        return "\n".join(lines)

    width = max((len(g.court.label) for r in rounds for g in r.games), default=0)
    for rnd in rounds:
        lines.append(f"\n--- ROUND {rnd.number} ---")
        for g in rnd.games:
            lines.append(
                f"  {g.court.label:<{width}}  {_team(g.team1)}  vs  {_team(g.team2)}"
            )
        if rnd.byes:
            lines.append(f"  Sitting out: {', '.join(rnd.byes)}")

    # Per-player schedule
    lines.append("\n" + "=" * 80)
    lines.append("PLAYER SCHEDULES")
    lines.append("=" * 80)
    for p in tournament.players:
        lines.append(f"\n{p}")
        for rnd in rounds:
            game = next((g for g in rnd.games if g.involves(p)), None)
            if game is None:
                lines.append(f"  R{rnd.number:<3} --  bye")
                continue
            lines.append(
                f"  R{rnd.number:<3} {game.court.label:<{width}}  "
                f"with {game.partner(p)}  vs  {' & '.join(game.opponents(p))}"
            )

    return "\n".join(lines)


def format_schedule_csv(rounds: list[Round]) -> str:
    """One row per game, keyed by round number."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)
    for rnd in rounds:
        for g in rnd.games:
            writer.writerow([
                rnd.number, g.court.id, g.court.name,
                g.team1[0], g.team1[1],
                g.team2[0], g.team2[1],
            ])
    return output.getvalue()


def parse_schedule_csv(csv_path: str | Path) -> list[Round]:
    """Read a schedule CSV written by format_schedule_csv back into rounds.

    Rows missing a round number or a player are skipped with a warning.
    Byes are not stored in the CSV, so parsed rounds have none.
    """
    by_round: dict[int, list[Game]] = {}
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, 2):
            try:
                number = int(row.get("round", "").strip())
                court_id = int(row.get("court_id", "").strip())
            except (AttributeError, ValueError):
                print(f"Warning: line {line_no}: bad round or court id, skipping row")
                continue
            names = [(row.get(col) or "").strip() for col in CSV_COLUMNS[3:]]
            if not all(names):
                print(f"Warning: line {line_no}: missing player, skipping row")
                continue
            by_round.setdefault(number, []).append(Game(
                court=Court(id=court_id, name=(row.get("court") or "").strip()),
                team1=(names[0], names[1]),
                team2=(names[2], names[3]),
            ))

    return [Round(number=n, games=by_round[n]) for n in sorted(by_round)]


def write_schedule(rounds: list[Round], tournament: Tournament,
                   output_prefix: str = "output") -> None:
    """Write schedule.txt and schedule.csv into {output_prefix}/."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(rounds, tournament))
    print(f"Written: {schedule_path}")

    csv_path = out_dir / "schedule.csv"
    csv_path.write_text(format_schedule_csv(rounds))
    print(f"Written: {csv_path}")
