"""Lightweight REST client for the coacheval API."""

from __future__ import annotations

import argparse
import json
import urllib.parse

import httpx


def build_ratings(entries: list[str]) -> dict[str, float]:
    ratings: dict[str, float] = {}
    for entry in entries:
        if "=" not in entry:
            raise SystemExit(f"Invalid rating '{entry}', expected criteria=value")
        key, value = entry.split("=", 1)
        try:
            ratings[key.strip()] = float(value)
        except ValueError as exc:
            raise SystemExit(f"Invalid rating value in '{entry}'") from exc
    return ratings


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the coacheval REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--recent", action="store_true", help="List recent evaluations and exit")
    parser.add_argument("--limit", type=int, default=20, help="Number of recent evaluations")
    parser.add_argument("--heatmap", action="store_true", help="Fetch the heatmap and exit")
    parser.add_argument("--sort", default="name", help="Heatmap sort field")
    parser.add_argument("--direction", default="asc", help="Heatmap sort direction")
    parser.add_argument("--player", metavar="NAME", help="Fetch a player profile and exit")
    parser.add_argument("--submit", metavar="TYPE", help="Submit an evaluation of this type")
    parser.add_argument("--player-name", help="Player name for --submit")
    parser.add_argument("--evaluator", help="Evaluator name for --submit")
    parser.add_argument("--rating", action="append", default=[], help="criteria=value, repeatable")
    parser.add_argument("--velocity", type=float, help="Pitching velocity in MPH")
    parser.add_argument("--sixty-time", type=float, help="60 yard time in seconds")
    parser.add_argument("--notes", help="Optional notes")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.recent:
            resp = client.get("/evaluations", params={"limit": args.limit})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.heatmap:
            resp = client.get("/heatmap", params={"sort": args.sort, "direction": args.direction})
            if resp.status_code == 400:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.player:
            resp = client.get(f"/players/{urllib.parse.quote(args.player, safe='')}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.player} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.submit:
            payload: dict = {
                "evaluation_type": args.submit,
                "player_name": args.player_name,
                "evaluator_name": args.evaluator,
                "notes": args.notes,
            }
            if args.submit == "speed":
                payload["sixty_time"] = args.sixty_time
            else:
                payload["ratings"] = build_ratings(args.rating)
            if args.submit == "pitching":
                payload["velocity"] = args.velocity
            resp = client.post("/evaluations", json=payload)
            if resp.status_code == 422:
                raise SystemExit(f"Rejected: {json.dumps(resp.json()['detail'], indent=2)}")
            resp.raise_for_status()
            print("Stored:", json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
