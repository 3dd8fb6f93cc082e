import csv
from io import StringIO

import pytest
from httpx import ASGITransport, AsyncClient

from coacheval.api import create_app


@pytest.fixture
async def client(tmp_path, monkeypatch):
    monkeypatch.delenv("COACHEVAL_DB_PATH", raising=False)
    monkeypatch.delenv("COACHEVAL_TEAM_NAME", raising=False)
    app = create_app(tmp_path / "api.sqlite")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client
    app.state.board.close()


def _batting(player: str = "Alex", rating: float = 6) -> dict:
    return {
        "evaluation_type": "batting",
        "player_name": player,
        "evaluator_name": "Coach Lee",
        "ratings": {"Mechanics": rating, "Contact": rating, "Power": rating},
    }


def _pitching(player: str = "Sam", rating: float = 4, velocity: float = 70) -> dict:
    return {
        "evaluation_type": "pitching",
        "player_name": player,
        "evaluator_name": "Coach Diaz",
        "velocity": velocity,
        "ratings": {"Mechanics": rating, "Control": rating},
        "notes": "Works fast",
    }


async def _seed(client: AsyncClient) -> None:
    for payload in (_batting(), _batting(), _pitching()):
        response = await client.post("/evaluations", json=payload)
        assert response.status_code == 201


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_submit_and_fetch_evaluation(client: AsyncClient):
    response = await client.post("/evaluations", json=_pitching())
    assert response.status_code == 201
    body = response.json()
    assert body["evaluation_type"] == "pitching"
    assert body["velocity"] == pytest.approx(70)
    assert body["average_score"] == pytest.approx(4.0)
    assert [rating["criteria"] for rating in body["ratings"]] == ["Mechanics", "Control"]

    fetched = await client.get(f"/evaluations/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["player_name"] == "Sam"

    missing = await client.get("/evaluations/9999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Evaluation not found"


@pytest.mark.anyio
async def test_invalid_submission_returns_422(client: AsyncClient):
    response = await client.post("/evaluations", json=_pitching(velocity=0))
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert any("velocity" in item["loc"] for item in detail)

    unknown = await client.post("/evaluations", json={**_batting(), "evaluation_type": "bunting"})
    assert unknown.status_code == 422

    listing = await client.get("/evaluations")
    assert listing.json() == []


@pytest.mark.anyio
async def test_recent_feed_is_newest_first_and_limited(client: AsyncClient):
    await _seed(client)
    response = await client.get("/evaluations")
    ids = [item["id"] for item in response.json()]
    assert ids == sorted(ids, reverse=True)
    assert len(ids) == 3

    limited = await client.get("/evaluations", params={"limit": 1})
    assert [item["id"] for item in limited.json()] == ids[:1]


@pytest.mark.anyio
async def test_players_and_ranges_follow_submissions(client: AsyncClient):
    fallback = await client.get("/ranges")
    assert fallback.json()["score"]["breakpoints"] == pytest.approx([2, 3.2, 4.4, 5.6, 6.8, 8])

    await _seed(client)

    players = (await client.get("/players")).json()
    assert [player["name"] for player in players] == ["Alex", "Sam"]
    assert players[0]["overall"] == pytest.approx(6.0)
    assert players[0]["evaluations"] == 2
    assert players[1]["velocity"] == pytest.approx(70.0)

    ranges = (await client.get("/ranges")).json()
    assert ranges["score"]["breakpoints"] == pytest.approx([4.0, 4.4, 4.8, 5.2, 5.6, 6.0])
    assert ranges["velocity"]["breakpoints"] == pytest.approx([70.0] * 6)

    by_overall = (await client.get("/players", params={"sort": "overall", "direction": "asc"})).json()
    assert [player["name"] for player in by_overall] == ["Sam", "Alex"]

    bad = await client.get("/players", params={"sort": "height"})
    assert bad.status_code == 400


@pytest.mark.anyio
async def test_player_profile(client: AsyncClient):
    await _seed(client)
    response = await client.get("/players/Sam")
    assert response.status_code == 200
    body = response.json()
    assert body["player"]["name"] == "Sam"
    assert body["evaluators"] == ["Coach Diaz"]
    assert body["categories"][0]["criteria_averages"] == {"Mechanics": 4.0, "Control": 4.0}
    assert len(body["evaluations"]) == 1

    missing = await client.get("/players/Nobody")
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_heatmap_cells_are_bucketed(client: AsyncClient):
    await _seed(client)
    response = await client.get("/heatmap", params={"sort": "overall", "direction": "desc"})
    assert response.status_code == 200
    body = response.json()
    assert [row["name"] for row in body["rows"]] == ["Alex", "Sam"]
    alex = {cell["field"]: cell for cell in body["rows"][0]["cells"]}
    assert alex["batting"]["bucket"] == "excellent"
    assert alex["pitching"]["display"] == "-"
    sam = {cell["field"]: cell for cell in body["rows"][1]["cells"]}
    assert sam["velocity"]["display"] == "70.0 MPH"

    bad = await client.get("/heatmap", params={"direction": "sideways"})
    assert bad.status_code == 400


@pytest.mark.anyio
async def test_export_csv(client: AsyncClient):
    await _seed(client)
    response = await client.get("/export.csv")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "heatmap.csv" in response.headers["content-disposition"]
    rows = list(csv.reader(StringIO(response.text)))
    assert rows[0][0] == "Player"
    assert rows[1][0] == "Alex"
    assert rows[2][:3] == ["Sam", "4.0", "70.0"]


@pytest.mark.anyio
async def test_ui_home_empty_board(client: AsyncClient):
    response = await client.get("/ui")
    assert response.status_code == 200
    assert "Northview Falcons" in response.text
    assert "No evaluations available for heatmap" in response.text
    assert "No evaluations found" in response.text
    assert "name=\"sixty_time\"" in response.text


@pytest.mark.anyio
async def test_ui_submit_stores_and_remembers_evaluator(client: AsyncClient):
    form = {
        "evaluation_type": "outfield",
        "evaluator_name": "Lee",
        "player_name": "Jordan",
        "rating_0": "6",
        "rating_1": "5",
        "rating_2": "7",
        "notes": "",
    }
    response = await client.post("/ui", data=form)
    assert response.status_code == 200
    assert "Outfield evaluation submitted for Jordan" in response.text
    assert "evaluator_name=Lee" in response.headers["set-cookie"]

    players = (await client.get("/players")).json()
    assert players[0]["name"] == "Jordan"
    assert players[0]["scores_by_category"]["outfield"] == pytest.approx(6.0)

    page = await client.get("/ui", headers={"Cookie": "evaluator_name=Lee"})
    assert "value=\"Lee\"" in page.text
    assert "/ui/players/Jordan" in page.text


@pytest.mark.anyio
async def test_ui_submit_reports_errors(client: AsyncClient):
    response = await client.post(
        "/ui",
        data={"evaluation_type": "speed", "evaluator_name": "Lee", "player_name": "Jordan", "sixty_time": "3"},
    )
    assert response.status_code == 400
    assert "notice error" in response.text

    unknown = await client.post("/ui", data={"evaluation_type": "bunting", "player_name": "Jordan"})
    assert unknown.status_code == 400
    assert "Unknown evaluation type" in unknown.text

    listing = await client.get("/evaluations")
    assert listing.json() == []


@pytest.mark.anyio
async def test_ui_player_page(client: AsyncClient):
    await _seed(client)
    response = await client.get("/ui/players/Alex")
    assert response.status_code == 200
    assert "Evaluated by: Coach Lee" in response.text
    assert "Batting" in response.text

    missing = await client.get("/ui/players/Nobody")
    assert missing.status_code == 404
