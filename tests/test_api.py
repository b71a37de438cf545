from __future__ import annotations

SERIES_URL = "/api/postseason/season-2023-2024/player-1/series"


def test_reference_endpoints(client):
    teams = client.get("/api/teams").json()
    assert len(teams) == 30

    rounds = client.get("/api/postseason/rounds").json()
    assert [r["round_number"] for r in rounds] == [0, 1, 2, 3, 4]
    assert rounds[-1] == {"round_name": "NBA Finals", "round_number": 4, "token": "fnl"}


def test_seasons(client):
    r = client.post("/api/seasons", json={"year_start": 2024})
    assert r.status_code == 200
    assert r.json()["id"] == "season-2024-2025"

    dup = client.post("/api/seasons", json={"year_start": 2024})
    assert dup.status_code == 409
    assert dup.json()["detail"]["code"] == "SEASON_EXISTS"

    ids = [s["id"] for s in client.get("/api/seasons").json()]
    assert ids == ["season-2024-2025", "season-2023-2024"]


def test_players(client):
    r = client.post("/api/players", json={"player_id": "player-3", "player_name": "Third"})
    assert r.status_code == 200
    assert r.json()["player_name"] == "Third"
    assert client.post("/api/players", json={"player_id": " ", "player_name": "x"}).status_code == 400
    assert [p["player_id"] for p in client.get("/api/players").json()] == ["player-1", "player-2", "player-3"]


def test_series_lifecycle(client):
    r = client.post(
        SERIES_URL,
        json={"id": "temp-Round 1-0", "round_name": "Round 1", "team1_id": "team-bos", "team2_id": "team-mia"},
    )
    assert r.status_code == 200
    sid = r.json()["id"]
    assert sid == "1-2324-rnd1-e"

    r = client.post(SERIES_URL, json={"id": sid, "team1_wins": 4, "team1_name": "Boston Celtics"})
    assert r.status_code == 200
    body = r.json()
    assert body["is_complete"] is True
    assert body["winner_team_id"] == "team-bos"
    # Fields not sent stay as stored.
    assert body["team2_id"] == "team-mia"

    listed = client.get(SERIES_URL).json()
    assert [s["id"] for s in listed] == [sid]

    bracket = client.get("/api/postseason/season-2023-2024/player-1/bracket").json()
    assert bracket["is_empty"] is False
    assert bracket["bracket"]["east"]["1"][0]["team1_won"] is True

    r = client.delete(f"{SERIES_URL}/{sid}")
    assert r.json() == {"ok": True, "deleted": sid}
    assert client.delete(f"{SERIES_URL}/{sid}").status_code == 404


def test_series_errors(client):
    r = client.post(SERIES_URL, json={"team1_id": "team-bos"})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "SERIES_ROUND_REQUIRED"

    r = client.post(SERIES_URL, json={"id": "1-2324-cnf-w", "team1_wins": 1})
    assert r.status_code == 404

    r = client.get("/api/postseason/season-1999-2000/player-1/series")
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "SEASON_NOT_FOUND"

    r = client.post(SERIES_URL, json={"round_name": "Round 1", "team1_id": "team-bos", "team1_wins": -2})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "SERIES_BAD_PAYLOAD"


def test_games(client):
    sid = client.post(SERIES_URL, json={"round_name": "Round 1", "team1_id": "team-den"}).json()["id"]
    game = {
        "id": "g-1",
        "game_date": "2024-04-21",
        "opponent_team_id": "team-lal",
        "is_playoff_game": True,
        "playoff_series_id": sid,
        "playoff_game_number": 1,
        "points": 31,
    }
    assert client.post("/api/games/season-2023-2024/player-1", json=game).status_code == 200
    assert client.post("/api/games/season-2023-2024/player-1", json=game).status_code == 409

    rows = client.get("/api/games/season-2023-2024/player-1", params={"playoff_only": True}).json()
    assert [g["id"] for g in rows] == ["g-1"]

    bracket = client.get("/api/postseason/season-2023-2024/player-1/bracket").json()
    assert bracket["bracket"]["west"]["1"][0]["games"][0]["points"] == 31


def test_admin_token_guards_writes(client, monkeypatch):
    monkeypatch.setenv("H2H_ADMIN_TOKEN", "secret")
    assert client.post("/api/seasons", json={"year_start": 2030}).status_code == 401
    assert client.get("/api/seasons").status_code == 200
    r = client.post("/api/seasons", json={"year_start": 2030}, headers={"X-Admin-Token": "secret"})
    assert r.status_code == 200


def test_derived_fields_are_rejected(client):
    r = client.post(
        SERIES_URL,
        json={"round_name": "Round 1", "team1_id": "team-bos", "is_complete": True, "winner_team_id": "team-bos"},
    )
    assert r.status_code == 422
    assert client.get(SERIES_URL).json() == []
