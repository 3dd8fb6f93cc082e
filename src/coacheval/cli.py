"""Command-line interface for submitting and reviewing player evaluations."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from coacheval.board import (
    HEATMAP_COLUMNS,
    SORT_DIRECTIONS,
    SORT_FIELDS,
    build_board,
    build_heatmap_rows,
    build_player_profile,
    export_heatmap_to_csv,
    sort_players,
)
from coacheval.config import EVALUATION_TYPES, get_criteria, load_settings
from coacheval.config_loader import EvaluatorProfile
from coacheval.ingest import build_new_evaluation, load_records_from_json, parse_submission
from coacheval.models import EvaluationRecord
from coacheval.persistence import EvaluationStore


DEFAULT_DB_PATH = Path("coacheval.sqlite")


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="SQLite evaluation database")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Read evaluations from a JSON export instead of the database",
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Submit and review youth baseball player evaluations")
    commands = parser.add_subparsers(dest="command", required=True)

    heatmap = commands.add_parser("heatmap", help="Print the player heatmap")
    _add_source_arguments(heatmap)
    heatmap.add_argument("--sort", choices=SORT_FIELDS, default="name", help="Column to sort by")
    heatmap.add_argument("--direction", choices=SORT_DIRECTIONS, default="asc", help="Sort direction")
    heatmap.add_argument("--output", type=Path, default=None, help="Optional path to write heatmap CSV")
    heatmap.add_argument("--ranges", type=Path, default=None, help="Optional path to write color ranges JSON")

    recent = commands.add_parser("recent", help="Print the most recent evaluations")
    _add_source_arguments(recent)
    recent.add_argument("--limit", type=int, default=None, help="Number of evaluations to show")

    player = commands.add_parser("player", help="Print a player profile")
    _add_source_arguments(player)
    player.add_argument("name", help="Player name (exact match)")

    submit = commands.add_parser("submit", help="Store a new evaluation")
    submit.add_argument("evaluation_type", choices=EVALUATION_TYPES, help="Skill category")
    submit.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="SQLite evaluation database")
    submit.add_argument("--player", required=True, help="Player name")
    submit.add_argument("--evaluator", default=None, help="Evaluator name (defaults to loaded profile)")
    submit.add_argument(
        "--rating",
        action="append",
        default=[],
        help="Criteria rating, repeatable (e.g., Mechanics=6.5)",
    )
    submit.add_argument("--velocity", type=float, default=None, help="Pitching velocity in MPH")
    submit.add_argument("--sixty-time", dest="sixty_time", type=float, default=None, help="60 yard time in seconds")
    submit.add_argument("--notes", default=None, help="Optional notes")
    submit.add_argument("--load-profile", type=Path, default=None, help="Load evaluator profile JSON")
    submit.add_argument("--save-profile", type=Path, default=None, help="Save evaluator profile JSON")
    return parser.parse_args(argv)


def _parse_ratings(entries: list[str]) -> dict[str, str]:
    ratings: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid rating entry '{entry}', expected criteria=value")
        key, value = entry.split("=", 1)
        ratings[key.strip()] = value.strip()
    return ratings


def _load_records(args: argparse.Namespace) -> list[EvaluationRecord]:
    if args.input:
        records = load_records_from_json(args.input)
        return sorted(records, key=lambda record: (record.created_at, record.id), reverse=True)
    return EvaluationStore(args.db).fetch_all()


def _print_heatmap(args: argparse.Namespace) -> None:
    board = build_board(_load_records(args))
    players = sort_players(board.players, args.sort, args.direction)
    if not players:
        print("No evaluations available for heatmap.")
    else:
        labels = [label for _, label in HEATMAP_COLUMNS]
        width = max(len(player.name) for player in players)
        width = max(width, len(labels[0]))
        print(labels[0].ljust(width) + "  " + "  ".join(label.rjust(11) for label in labels[1:]))
        for row in build_heatmap_rows(players, board.ranges):
            cells = "  ".join(cell.display.rjust(11) for cell in row.cells)
            print(row.name.ljust(width) + "  " + cells)

    if args.output:
        args.output.write_text(export_heatmap_to_csv(players), encoding="utf-8")
        print(f"Wrote heatmap CSV to {args.output}")
    if args.ranges:
        payload = {
            "score": {
                "min": board.ranges.score.min,
                "max": board.ranges.score.max,
                "breakpoints": list(board.ranges.score.breakpoints),
            },
            "velocity": {
                "min": board.ranges.velocity.min,
                "max": board.ranges.velocity.max,
                "breakpoints": list(board.ranges.velocity.breakpoints),
            },
        }
        args.ranges.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote color ranges to {args.ranges}")


def _print_recent(args: argparse.Namespace) -> None:
    limit = args.limit if args.limit is not None else load_settings().recent_limit
    records = _load_records(args)[: max(0, limit)]
    if not records:
        print("No evaluations found.")
        return
    for record in records:
        line = (
            f"{record.created_at.astimezone().strftime('%Y-%m-%d %H:%M')}  "
            f"{record.player_name} [{record.evaluation_type.upper()}] "
            f"by {record.evaluator_name}: {record.average_score:.1f}/8"
        )
        velocity = getattr(record, "velocity", None)
        if velocity:
            line += f", {velocity:g} MPH"
        print(line)
        if record.notes:
            print(f"    Notes: {record.notes}")


def _print_player(args: argparse.Namespace) -> None:
    board = build_board(_load_records(args))
    summary = board.find_player(args.name)
    if summary is None:
        raise SystemExit(f"player {args.name!r} not found")
    profile = build_player_profile(summary)
    print(f"{summary.name}: overall {summary.overall:.1f}")
    if summary.velocity > 0:
        print(f"  Velocity: {summary.velocity:.1f} MPH")
    for category in profile.categories:
        print(f"  {category.label}: {category.score:.1f} ({category.evaluations} evaluations)")
        for name, value in category.criteria_averages.items():
            print(f"    {name}: {value:.2f}")
    if profile.evaluators:
        print(f"  Evaluators: {', '.join(profile.evaluators)}")


def _submit(args: argparse.Namespace) -> None:
    evaluator = args.evaluator
    if args.load_profile:
        profile = EvaluatorProfile.load(args.load_profile)
        evaluator = evaluator or profile.evaluator_name
    if not evaluator:
        raise SystemExit("Please provide --evaluator or --load-profile")

    payload: dict = {
        "evaluation_type": args.evaluation_type,
        "player_name": args.player,
        "evaluator_name": evaluator,
        "notes": args.notes,
    }
    if args.evaluation_type == "speed":
        payload["sixty_time"] = args.sixty_time
    else:
        try:
            payload["ratings"] = _parse_ratings(args.rating)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
    if args.evaluation_type == "pitching":
        payload["velocity"] = args.velocity

    try:
        submission = parse_submission(payload)
    except ValidationError as exc:
        expected = ", ".join(get_criteria(args.evaluation_type).criteria)
        raise SystemExit(f"Invalid {args.evaluation_type} evaluation (criteria: {expected}):\n{exc}") from exc

    record = EvaluationStore(args.db).add_evaluation(build_new_evaluation(submission))
    print(
        f"Stored {record.evaluation_type} evaluation {record.id} for {record.player_name} "
        f"(score {record.average_score:.2f})"
    )
    if args.save_profile:
        EvaluatorProfile(evaluator).save(args.save_profile)
        print(f"Saved evaluator profile to {args.save_profile}")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.command == "heatmap":
        _print_heatmap(args)
    elif args.command == "recent":
        _print_recent(args)
    elif args.command == "player":
        _print_player(args)
    elif args.command == "submit":
        _submit(args)


if __name__ == "__main__":
    main()
