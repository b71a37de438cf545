from __future__ import annotations

import pytest

import state
from league_repo import LeagueRepo
from postseason.service import create_season


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "league.sqlite3")
    with LeagueRepo(path) as repo:
        repo.init_db()
    return path


@pytest.fixture
def seeded_db(db_path):
    """DB with season-2023-2024 and two tracked players."""
    create_season(db_path=db_path, year_start=2023)
    with LeagueRepo(db_path) as repo:
        repo.upsert_player({"player_id": "player-1", "player_name": "Rookie One", "team_id": "team-bos"})
        repo.upsert_player({"player_id": "player-2", "player_name": "Rookie Two", "team_id": "team-lal"})
    return db_path


@pytest.fixture
def season_2324():
    return {"id": "season-2023-2024", "year_start": 2023, "year_end": 2024}


@pytest.fixture
def client(seeded_db, monkeypatch):
    from fastapi.testclient import TestClient

    from app.main import app

    monkeypatch.setenv("LEAGUE_DB_PATH", seeded_db)
    monkeypatch.delenv("H2H_ADMIN_TOKEN", raising=False)
    with TestClient(app) as c:
        yield c
    state.reset_db_path()
