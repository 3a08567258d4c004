#!/usr/bin/env python3
"""Doubles Tournament Schedule Builder.

Generate mode (default):
    dubsched [config.yaml] [--mode solo|fixed] [--strategy rotation|greedy]
             [--rounds N] [--seed N] [-o DIR]

    Generates the round-by-round fixture from the YAML config and writes:
      {DIR}/schedule.txt  - Human-readable rounds + per-player schedule
      {DIR}/schedule.csv  - One row per game, keyed by round number
      {DIR}/stats.txt     - Validation report + statistics

Verify mode:
    dubsched --verify <schedule.csv> [config.yaml]

    Re-imports a schedule CSV and checks all constraints against config.
    Exit code 0 if valid, 1 if violations found.

Examples:
    dubsched                                   # default config.yaml
    dubsched club.yaml --mode solo             # rotate partners
    dubsched club.yaml --strategy greedy --seed 42 --rounds 3
    dubsched --verify output/schedule.csv club.yaml
"""

import argparse
import sys
from pathlib import Path

from dubsched.config import (
    ConfigError, load_config, tournament_warnings, validate_tournament,
)
from dubsched.constraints import format_validation_report, validate_schedule
from dubsched.models import Mode, Strategy
from dubsched.output import parse_schedule_csv, write_schedule
from dubsched.scheduler import ScheduleInputError, schedule_tournament
from dubsched.stats import compute_stats, format_stats_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dubsched",
        description="Doubles Tournament Schedule Builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files (generate mode):
  {prefix}/schedule.txt   Human-readable schedule (rounds + per-player)
  {prefix}/schedule.csv   One row per game, keyed by round number
  {prefix}/stats.txt      Validation report + balance statistics

Exit codes:
  0  Schedule valid
  1  Constraint violations found, no games scheduled, or config error
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to tournament config YAML (default: config.yaml)"
    )
    parser.add_argument(
        "--mode", choices=[m.value for m in Mode],
        help="Override tournament.mode from the config"
    )
    parser.add_argument(
        "--strategy", choices=[s.value for s in Strategy],
        help="Solo-mode round construction (default: rotation)"
    )
    parser.add_argument(
        "--rounds", type=int, default=None,
        help="Number of rounds for the greedy strategy"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for the greedy strategy. Try a few seeds if a "
             "schedule cannot be found."
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--verify", metavar="CSV",
        help="Verify an existing schedule CSV instead of generating"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    try:
        tournament = load_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.mode:
        tournament.mode = Mode.from_str(args.mode)
    if args.strategy:
        tournament.strategy = Strategy.from_str(args.strategy)
    if args.rounds is not None:
        tournament.rounds = args.rounds
    if args.seed is not None:
        tournament.seed = args.seed

    if args.verify:
        if not Path(args.verify).exists():
            print(f"Error: {args.verify} not found")
            sys.exit(1)
        print(f"Verifying schedule from {args.verify}...")
        rounds = parse_schedule_csv(args.verify)
        print(f"Loaded {sum(len(r.games) for r in rounds)} games "
              f"in {len(rounds)} rounds")

        result = validate_schedule(rounds, tournament.players, tournament.mode)
        print(format_validation_report(result))
        stats = compute_stats(rounds, tournament.players)
        print("\n" + format_stats_report(stats, tournament.players))
        sys.exit(0 if result["valid"] else 1)

    # Generation mode
    if args.mode or args.strategy or args.rounds is not None:
        for e in validate_tournament(tournament) + tournament_warnings(tournament):
            print(f"Warning: {e}")

    print(f"Generating {tournament.mode.value} schedule "
          f"(strategy={tournament.strategy.value}, seed={tournament.seed})...")
    try:
        rounds = schedule_tournament(tournament)
    except ScheduleInputError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not rounds:
        print("Error: no games were scheduled!")
        sys.exit(1)

    print(f"Scheduled {sum(len(r.games) for r in rounds)} games "
          f"in {len(rounds)} rounds")

    # Validate
    print("\nValidating...")
    result = validate_schedule(rounds, tournament.players, tournament.mode)
    report = format_validation_report(result)
    print(report)

    # Stats
    stats = compute_stats(rounds, tournament.players)
    stats_text = format_stats_report(stats, tournament.players)
    print("\n" + stats_text)

    # Write outputs
    print("\nWriting output files...")
    write_schedule(rounds, tournament, output_prefix=args.output_prefix)

    stats_path = Path(args.output_prefix) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text)
    print(f"Written: {stats_path}")

    if result["valid"]:
        print("\nSchedule generated successfully!")
    else:
        print(f"\nSchedule has {len(result['errors'])} constraint violations.")
        sys.exit(1)


if __name__ == "__main__":
    main()
