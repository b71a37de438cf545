from __future__ import annotations

import pytest

from postseason import errors
from postseason.errors import PostseasonError
from postseason.models import PlayoffSeries, Season, SeriesPatch


def test_season_create():
    s = Season.create(2023)
    assert s.id == "season-2023-2024"
    assert (s.year_start, s.year_end) == (2023, 2024)
    assert Season.from_row(s.to_row()) == s


def test_season_rejects_bad_years():
    with pytest.raises(PostseasonError) as ei:
        Season(id="s", year_start=2023, year_end=2025)
    assert ei.value.code == errors.SEASON_INVALID_YEARS


def test_series_from_row_coerces_sqlite_values():
    s = PlayoffSeries.from_row(
        {
            "id": "1-2324-rnd1-e",
            "player_id": "player-1",
            "season_id": "season-2023-2024",
            "round_name": "Round 1",
            "round_number": 1,
            "team1_wins": None,
            "team2_wins": 3,
            "is_complete": 0,
            "extra_column": "ignored",
        }
    )
    assert s.team1_wins == 0
    assert s.team2_wins == 3
    assert s.is_complete is False


def test_series_from_row_missing_round_number_keeps_default():
    s = PlayoffSeries.from_row({"id": "x", "player_id": "p", "season_id": "s", "round_name": "Round 1", "round_number": None})
    assert s.round_number == 1


def test_patch_only_touches_named_fields():
    base = PlayoffSeries(
        id="1-2324-rnd1-e",
        player_id="player-1",
        season_id="season-2023-2024",
        round_name="Round 1",
        team1_id="team-bos",
        team1_wins=2,
    )
    patch = SeriesPatch.from_mapping({"team2_id": " team-mia ", "team2_wins": 1})
    assert patch.changed_fields() == {"team2_id": "team-mia", "team2_wins": 1}

    out = patch.apply(base)
    assert out.team1_id == "team-bos"
    assert out.team1_wins == 2
    assert out.team2_id == "team-mia"
    assert base.team2_id is None


def test_patch_none_clears_slot():
    base = PlayoffSeries(id="x", player_id="p", season_id="s", round_name="Round 1", team1_id="team-bos", team1_seed=1)
    out = SeriesPatch.from_mapping({"team1_id": "", "team1_seed": None, "team1_wins": None}).apply(base)
    assert out.team1_id is None
    assert out.team1_seed is None
    assert out.team1_wins == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"winner_team_id": "team-bos"},
        {"team1_wins": -1},
        {"team1_wins": "four"},
        {"team1_wins": True},
        {"team1_seed": 0},
        {"round_name": 1},
    ],
)
def test_patch_rejects_bad_payloads(payload):
    with pytest.raises(PostseasonError) as ei:
        SeriesPatch.from_mapping(payload)
    assert ei.value.code == errors.SERIES_BAD_PAYLOAD
