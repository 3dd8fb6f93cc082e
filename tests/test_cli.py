import json
from pathlib import Path

import pytest

from coacheval.cli import main


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv("COACHEVAL_DB_PATH", raising=False)
    monkeypatch.delenv("COACHEVAL_RECENT_LIMIT", raising=False)
    return tmp_path / "cli.sqlite"


def _submit_batting(db_path: Path, player: str, rating: str, *extra: str) -> None:
    main(
        [
            "submit",
            "batting",
            "--db",
            str(db_path),
            "--player",
            player,
            "--rating",
            f"Mechanics={rating}",
            "--rating",
            f"Contact={rating}",
            "--rating",
            f"Power={rating}",
            *extra,
        ]
    )


def test_submit_then_heatmap(db_path: Path, tmp_path: Path, capsys):
    _submit_batting(db_path, "Alex", "6", "--evaluator", "Coach Lee")
    main(
        [
            "submit",
            "pitching",
            "--db",
            str(db_path),
            "--player",
            "Sam",
            "--evaluator",
            "Coach Lee",
            "--velocity",
            "70",
            "--rating",
            "Mechanics=4",
            "--rating",
            "Control=4",
        ]
    )
    out = capsys.readouterr().out
    assert "Stored batting evaluation 1 for Alex (score 6.00)" in out
    assert "Stored pitching evaluation 2 for Sam (score 4.00)" in out

    csv_path = tmp_path / "heatmap.csv"
    ranges_path = tmp_path / "ranges.json"
    main(
        [
            "heatmap",
            "--db",
            str(db_path),
            "--sort",
            "overall",
            "--direction",
            "desc",
            "--output",
            str(csv_path),
            "--ranges",
            str(ranges_path),
        ]
    )
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Player Name")
    assert lines[1].startswith("Alex")
    assert "70.0 MPH" in lines[2]
    assert csv_path.read_text(encoding="utf-8").startswith("Player,Pitching,Velocity")
    ranges = json.loads(ranges_path.read_text(encoding="utf-8"))
    assert ranges["score"]["min"] == 4.0
    assert ranges["velocity"]["breakpoints"] == [70.0] * 6


def test_heatmap_empty(db_path: Path, capsys):
    main(["heatmap", "--db", str(db_path)])
    assert "No evaluations available for heatmap." in capsys.readouterr().out


def test_recent_and_player(db_path: Path, capsys):
    _submit_batting(db_path, "Alex", "5", "--evaluator", "Coach Lee", "--notes", "Quick hands")
    _submit_batting(db_path, "Alex", "7", "--evaluator", "Coach Diaz")
    capsys.readouterr()

    main(["recent", "--db", str(db_path), "--limit", "1"])
    out = capsys.readouterr().out
    assert "Alex [BATTING] by Coach Diaz: 7.0/8" in out
    assert "Coach Lee" not in out

    main(["player", "--db", str(db_path), "Alex"])
    out = capsys.readouterr().out
    assert "Alex: overall 6.0" in out
    assert "Batting: 6.0 (2 evaluations)" in out
    assert "Mechanics: 6.00" in out
    assert "Evaluators: Coach Diaz, Coach Lee" in out

    with pytest.raises(SystemExit):
        main(["player", "--db", str(db_path), "Nobody"])


def test_recent_from_json_input(tmp_path: Path, capsys):
    source = tmp_path / "evaluations.json"
    source.write_text(
        json.dumps(
            [
                {
                    "id": 1,
                    "player_name": "Alex",
                    "evaluator_name": "Coach",
                    "evaluation_type": "speed",
                    "ratings": [{"criteria": "60 Time", "rating": 5.0, "time": "7.00s"}],
                    "average_score": 5.0,
                    "created_at": "2024-04-01T12:00:00Z",
                },
                {
                    "id": 2,
                    "player_name": "Sam",
                    "evaluator_name": "Coach",
                    "evaluation_type": "pitching",
                    "velocity": 64.5,
                    "ratings": [{"criteria": "Mechanics", "rating": 5}],
                    "average_score": 5.0,
                    "created_at": "2024-04-02T12:00:00Z",
                },
            ]
        ),
        encoding="utf-8",
    )
    main(["recent", "--input", str(source)])
    lines = capsys.readouterr().out.splitlines()
    assert "Sam [PITCHING]" in lines[0]
    assert lines[0].endswith("64.5 MPH")
    assert "Alex [SPEED]" in lines[1]


def test_submit_with_profile_round_trip(db_path: Path, tmp_path: Path, capsys):
    profile_path = tmp_path / "evaluator.json"
    main(
        [
            "submit",
            "speed",
            "--db",
            str(db_path),
            "--player",
            "Jordan",
            "--evaluator",
            "Coach Lee",
            "--sixty-time",
            "6.5",
            "--save-profile",
            str(profile_path),
        ]
    )
    out = capsys.readouterr().out
    assert "Stored speed evaluation 1 for Jordan (score 6.50)" in out
    assert json.loads(profile_path.read_text(encoding="utf-8")) == {"evaluator_name": "Coach Lee"}

    _submit_batting(db_path, "Jordan", "6", "--load-profile", str(profile_path))
    assert "Stored batting evaluation 2 for Jordan" in capsys.readouterr().out


def test_submit_rejects_bad_input(db_path: Path):
    with pytest.raises(SystemExit):
        _submit_batting(db_path, "Alex", "6")
    with pytest.raises(SystemExit, match="Invalid batting evaluation"):
        _submit_batting(db_path, "Alex", "9", "--evaluator", "Coach Lee")
    with pytest.raises(SystemExit, match="expected criteria=value"):
        main(["submit", "infield", "--db", str(db_path), "--player", "Alex", "--evaluator", "Lee", "--rating", "Glove"])
