"""REST API and HTML board for coach evaluations."""

from __future__ import annotations

import urllib.parse
from contextlib import asynccontextmanager
from html import escape
from pathlib import Path
from typing import Any, Mapping

from fastapi import Body, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError

from coacheval.api.schemas import (
    EvaluationResponse,
    HeatmapResponse,
    PlayerProfileResponse,
    PlayerSummaryResponse,
    ScoreRangeResponse,
    ValidationErrorItem,
    to_evaluation_response,
    to_heatmap_response,
    to_profile_response,
    to_ranges_response,
    to_summary_response,
)
from coacheval.board import (
    HEATMAP_COLUMNS,
    BoardSnapshot,
    LiveBoard,
    PlayerProfile,
    build_heatmap_rows,
    build_player_profile,
    export_heatmap_to_csv,
    next_sort_direction,
    sort_players,
)
from coacheval.config import get_criteria, iter_criteria, load_settings
from coacheval.config.criteria import RATING_MAX, RATING_MIN, SIXTY_TIME_MAX, SIXTY_TIME_MIN, VELOCITY_MAX
from coacheval.ingest import build_new_evaluation, parse_submission
from coacheval.models import EvaluationRecord
from coacheval.persistence import EvaluationStore


EVALUATOR_COOKIE = "evaluator_name"
_EVALUATOR_COOKIE_MAX_AGE = 365 * 24 * 60 * 60

_SORT_ARROWS = {"asc": "&#9650;", "desc": "&#9660;", "none": "&#8693;"}


def _error_items(exc: ValidationError) -> list[ValidationErrorItem]:
    return [
        ValidationErrorItem(loc=list(error["loc"]), msg=error["msg"], type=error["type"])
        for error in exc.errors()
    ]


def _format_validation_error(exc: ValidationError, evaluation_type: str) -> str:
    messages: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part != evaluation_type]
        prefix = f"{' '.join(loc).replace('_', ' ')}: " if loc else ""
        messages.append(f"{prefix}{error['msg']}")
    return "; ".join(messages)


def _player_href(name: str) -> str:
    return f"/ui/players/{urllib.parse.quote(name, safe='')}"


def _render_page(body: str, team_name: str) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>{escape(team_name)} Player Evaluations</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #0f0f0f; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; border: 3px solid #FFD700; }}
        nav a {{ margin-right: 1rem; color: #FFD700; text-decoration: none; }}
        form {{ display: grid; gap: 0.75rem; margin-bottom: 1rem; }}
        label {{ font-weight: 600; }}
        input, textarea {{ width: 100%; padding: 0.5rem; border-radius: 6px; border: 1px solid #cbd5e1; }}
        button {{ padding: 0.6rem 1.2rem; border-radius: 6px; border: 2px solid #FFD700; background: #000; color: #fff; cursor: pointer; }}
        table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; min-width: 800px; }}
        th {{ background: #000; color: #fff; border: 1px solid #FFD700; padding: 0.5rem; }}
        th a {{ color: #fff; text-decoration: none; }}
        td {{ padding: 0.5rem; border: 1px solid #ddd; text-align: center; }}
        td.name {{ text-align: left; font-weight: 700; background: #f8f9fa; }}
        td.cell {{ color: #fff; font-weight: 700; }}
        td.overall {{ border: 2px solid #FFD700; font-size: 16px; }}
        .forms {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(260px, 1fr)); gap: 1rem; }}
        .form-card {{ border: 1px solid #e2e8f0; padding: 1rem; border-radius: 8px; background: #f8f9fa; }}
        .feed-item {{ background: #1a1a1a; color: #fff; border: 1px solid #FFD700; border-radius: 8px; padding: 1rem; margin-bottom: 0.5rem; }}
        .feed-item .badge {{ background: #FFD700; color: #000; border-radius: 4px; padding: 0.1rem 0.4rem; font-size: 0.8rem; }}
        .feed-item .meta {{ color: #9ca3af; font-size: 0.85rem; }}
        .notice {{ margin: 0.5rem 0; padding: 0.75rem 1rem; border-radius: 6px; }}
        .notice.success {{ background: #ecfdf5; color: #065f46; border: 1px solid #a7f3d0; }}
        .notice.error {{ background: #fef2f2; color: #991b1b; border: 1px solid #fecaca; }}
        .hint {{ color: #475569; margin: 0; }}
    </style>
</head>
<body>
    <nav><a href=\"/ui\">Board</a><a href=\"/export.csv\">Export CSV</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _render_forms(evaluator_name: str) -> str:
    cards: list[str] = []
    evaluator_value = escape(evaluator_name, quote=True)
    for config in iter_criteria():
        fields = [
            f"<input type=\"hidden\" name=\"evaluation_type\" value=\"{config.evaluation_type}\">",
            f"<label>Evaluator Name<input name=\"evaluator_name\" value=\"{evaluator_value}\" placeholder=\"Your Name (Coach/Evaluator)\" required></label>",
            "<label>Player Name<input name=\"player_name\" placeholder=\"Enter player name\" required></label>",
        ]
        if config.evaluation_type == "pitching":
            fields.append(
                f"<label>Velocity (MPH)<input type=\"number\" name=\"velocity\" min=\"0\" max=\"{VELOCITY_MAX:g}\" step=\"0.1\" required></label>"
            )
        if config.evaluation_type == "speed":
            fields.append(
                f"<label>60 Yard Time (seconds)<input type=\"number\" name=\"sixty_time\" min=\"{SIXTY_TIME_MIN:g}\" max=\"{SIXTY_TIME_MAX:g}\" step=\"0.01\" required></label>"
            )
        else:
            fields.append(f"<p class=\"hint\">Evaluation Criteria ({RATING_MIN:g}=Poor, {RATING_MAX:g}=Excellent)</p>")
            for index, criteria in enumerate(config.criteria):
                fields.append(
                    f"<label>{escape(criteria)}<input type=\"number\" name=\"rating_{index}\" min=\"{RATING_MIN:g}\" max=\"{RATING_MAX:g}\" step=\"0.5\" required></label>"
                )
        fields.append("<label>Notes (Optional)<textarea name=\"notes\" rows=\"2\"></textarea></label>")
        fields.append(f"<button type=\"submit\">Submit {escape(config.label)} Evaluation</button>")
        cards.append(
            f"<div class=\"form-card\"><h3>{escape(config.label)}</h3>"
            f"<form method=\"post\" action=\"/ui\">{''.join(fields)}</form></div>"
        )
    return f"<div class=\"forms\">{''.join(cards)}</div>"


def _render_heatmap(snapshot: BoardSnapshot, sort: str, direction: str) -> str:
    if not snapshot.records:
        return "<p>No evaluations available for heatmap. Submit some evaluations first!</p>"

    headers: list[str] = []
    for field, label in HEATMAP_COLUMNS:
        target = next_sort_direction(sort, direction, field)
        arrow = _SORT_ARROWS[direction] if field == sort else _SORT_ARROWS["none"]
        headers.append(f"<th><a href=\"/ui?sort={field}&amp;direction={target}\">{escape(label)} {arrow}</a></th>")

    players = sort_players(snapshot.players, sort, direction)
    rows: list[str] = []
    for row in build_heatmap_rows(players, snapshot.ranges):
        cells = "".join(
            f"<td class=\"cell{' overall' if cell.field == 'overall' else ''}\" style=\"background-color: {cell.color}\">{escape(cell.display)}</td>"
            for cell in row.cells
        )
        rows.append(
            f"<tr><td class=\"name\"><a href=\"{_player_href(row.name)}\">{escape(row.name)}</a></td>{cells}</tr>"
        )
    return f"<table><thead><tr>{''.join(headers)}</tr></thead><tbody>{''.join(rows)}</tbody></table>"


def _render_feed_item(record: EvaluationRecord) -> str:
    parts = [
        f"<strong>{escape(record.player_name)}</strong> <span class=\"badge\">{escape(record.evaluation_type.upper())}</span>",
        f"<div>Evaluator: {escape(record.evaluator_name)} &middot; Score: {record.average_score:.1f}/8</div>",
    ]
    velocity = getattr(record, "velocity", None)
    if velocity:
        parts.append(f"<div>Velocity: {velocity:g} MPH</div>")
    if record.notes:
        parts.append(f"<div><em>Notes: {escape(record.notes)}</em></div>")
    parts.append(f"<div class=\"meta\">{record.created_at.astimezone().strftime('%Y-%m-%d %H:%M')}</div>")
    return f"<div class=\"feed-item\">{''.join(parts)}</div>"


def _render_recent(records: list[EvaluationRecord]) -> str:
    if not records:
        return "<p>No evaluations found. Submit your first evaluation above!</p>"
    return "".join(_render_feed_item(record) for record in records)


def _render_index_page(
    *,
    snapshot: BoardSnapshot,
    recent: list[EvaluationRecord],
    sort: str,
    direction: str,
    evaluator_name: str,
    team_name: str,
    error: str | None = None,
    success: str | None = None,
) -> str:
    notices = ""
    if success:
        notices += f"<div class=\"notice success\">{escape(success)}</div>"
    if error:
        notices += f"<div class=\"notice error\">{escape(error)}</div>"
    body = (
        f"<h1>{escape(team_name)} - Live Player Evaluations</h1>"
        f"{notices}"
        f"<h2>Submit Evaluation</h2>{_render_forms(evaluator_name)}"
        f"<h2>All Players Heatmap</h2><div style=\"overflow-x: auto\">{_render_heatmap(snapshot, sort, direction)}</div>"
        f"<h2>Recent Evaluations</h2>{_render_recent(recent)}"
    )
    return _render_page(body, team_name)


def _render_profile_page(profile: PlayerProfile, snapshot: BoardSnapshot, team_name: str) -> str:
    summary = profile.summary
    heatmap = build_heatmap_rows([summary], snapshot.ranges)[0]
    header = "".join(f"<th>{escape(label)}</th>" for field, label in HEATMAP_COLUMNS if field != "name")
    cells = "".join(
        f"<td class=\"cell\" style=\"background-color: {cell.color}\">{escape(cell.display)}</td>"
        for cell in heatmap.cells
    )
    sections: list[str] = []
    for category in profile.categories:
        rows = "".join(
            f"<tr><td>{escape(name)}</td><td>{value:.2f}</td></tr>"
            for name, value in category.criteria_averages.items()
        )
        sections.append(
            f"<h3>{escape(category.label)} &ndash; {category.score:.1f} ({category.evaluations} evaluations)</h3>"
            f"<table><thead><tr><th>Criteria</th><th>Average Rating</th></tr></thead><tbody>{rows}</tbody></table>"
        )
    evaluators = ", ".join(escape(name) for name in profile.evaluators) or "-"
    body = (
        f"<h1>{escape(summary.name)}</h1>"
        f"<p>Evaluated by: {evaluators}</p>"
        f"<table><thead><tr>{header}</tr></thead><tbody><tr>{cells}</tr></tbody></table>"
        f"{''.join(sections)}"
        f"<h2>Evaluation History</h2>{_render_recent(list(summary.records))}"
    )
    return _render_page(body, team_name)


def _submission_payload(form: Mapping[str, Any]) -> dict[str, Any]:
    evaluation_type = str(form.get("evaluation_type", "")).strip().lower()
    payload: dict[str, Any] = {
        "evaluation_type": evaluation_type,
        "player_name": form.get("player_name", ""),
        "evaluator_name": form.get("evaluator_name", ""),
        "notes": form.get("notes") or None,
    }
    config = get_criteria(evaluation_type)
    if evaluation_type == "speed":
        payload["sixty_time"] = form.get("sixty_time") or None
    else:
        payload["ratings"] = {
            name: form.get(f"rating_{index}") or None for index, name in enumerate(config.criteria)
        }
    if evaluation_type == "pitching":
        payload["velocity"] = form.get("velocity") or None
    return payload


def create_app(db_path: Path | str | None = None) -> FastAPI:
    settings = load_settings()
    store = EvaluationStore(db_path or Path(__file__).resolve().parent.parent / "coacheval.sqlite")
    board = LiveBoard(store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        board.close()

    app = FastAPI(title="coacheval", lifespan=lifespan)
    app.state.evaluation_store = store
    app.state.board = board

    def _sorted_or_400(snapshot: BoardSnapshot, sort: str, direction: str):
        try:
            return sort_players(snapshot.players, sort, direction)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    def _profile_or_404(name: str) -> PlayerProfile:
        summary = board.snapshot.find_player(name)
        if summary is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return build_player_profile(summary)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/evaluations", response_model=EvaluationResponse, status_code=201)
    async def submit_evaluation(payload: dict[str, Any] = Body(...)) -> EvaluationResponse:
        try:
            submission = parse_submission(payload)
        except ValidationError as exc:
            raise HTTPException(
                status_code=422,
                detail=[item.model_dump() for item in _error_items(exc)],
            ) from exc
        record = store.add_evaluation(build_new_evaluation(submission))
        return to_evaluation_response(record)

    @app.get("/evaluations", response_model=list[EvaluationResponse])
    async def list_evaluations(limit: int | None = Query(None, ge=1, le=500)):
        records = store.list_recent(limit=limit or settings.recent_limit)
        return [to_evaluation_response(record) for record in records]

    @app.get("/evaluations/{evaluation_id}", response_model=EvaluationResponse)
    async def get_evaluation(evaluation_id: int):
        record = store.get_evaluation(evaluation_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Evaluation not found")
        return to_evaluation_response(record)

    @app.get("/players", response_model=list[PlayerSummaryResponse])
    async def list_players(sort: str = "name", direction: str = "asc"):
        players = _sorted_or_400(board.snapshot, sort, direction)
        return [to_summary_response(player) for player in players]

    @app.get("/players/{name:path}", response_model=PlayerProfileResponse)
    async def get_player(name: str):
        return to_profile_response(_profile_or_404(name))

    @app.get("/ranges", response_model=ScoreRangeResponse)
    async def get_ranges():
        return to_ranges_response(board.snapshot.ranges)

    @app.get("/heatmap", response_model=HeatmapResponse)
    async def get_heatmap(sort: str = "name", direction: str = "asc"):
        snapshot = board.snapshot
        players = _sorted_or_400(snapshot, sort, direction)
        rows = build_heatmap_rows(players, snapshot.ranges)
        return to_heatmap_response(rows, snapshot, sort=sort, direction=direction)

    @app.get("/export.csv")
    async def export_csv():
        return Response(
            content=export_heatmap_to_csv(board.snapshot.players),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=heatmap.csv"},
        )

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index(request: Request, sort: str = "name", direction: str = "asc"):
        snapshot = board.snapshot
        _sorted_or_400(snapshot, sort, direction)
        content = _render_index_page(
            snapshot=snapshot,
            recent=store.list_recent(limit=settings.recent_limit),
            sort=sort,
            direction=direction,
            evaluator_name=request.cookies.get(EVALUATOR_COOKIE, ""),
            team_name=settings.team_name,
        )
        return HTMLResponse(content)

    @app.post("/ui", response_class=HTMLResponse)
    async def ui_submit(request: Request):
        form = await request.form()
        evaluator_name = str(form.get("evaluator_name", "")).strip()
        evaluation_type = str(form.get("evaluation_type", "")).strip().lower()
        error: str | None = None
        success: str | None = None
        try:
            submission = parse_submission(_submission_payload(form))
        except KeyError:
            error = f"Unknown evaluation type {evaluation_type!r}"
        except ValidationError as exc:
            error = _format_validation_error(exc, evaluation_type)
        else:
            record = store.add_evaluation(build_new_evaluation(submission))
            success = f"{record.evaluation_type.title()} evaluation submitted for {record.player_name}"

        content = _render_index_page(
            snapshot=board.snapshot,
            recent=store.list_recent(limit=settings.recent_limit),
            sort="name",
            direction="asc",
            evaluator_name=evaluator_name,
            team_name=settings.team_name,
            error=error,
            success=success,
        )
        response = HTMLResponse(content, status_code=200 if error is None else 400)
        if evaluator_name:
            response.set_cookie(EVALUATOR_COOKIE, evaluator_name, max_age=_EVALUATOR_COOKIE_MAX_AGE)
        return response

    @app.get("/ui/players/{name:path}", response_class=HTMLResponse)
    async def ui_player(name: str):
        profile = _profile_or_404(name)
        return HTMLResponse(_render_profile_page(profile, board.snapshot, settings.team_name))

    return app


__all__ = ["create_app"]
