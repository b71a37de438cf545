from __future__ import annotations

import copy
import logging

from postseason import bracket
from postseason.bracket import (
    bracket_is_empty,
    effective_round_number,
    index_games_by_series,
    is_play_in,
    organize_bracket,
    round_series,
    series_conference,
)
from postseason.models import PlayoffSeries
from team_utils import StaticTeamDirectory


def _row(sid, round_name, round_number, t1=None, t2=None, **extra):
    row = {
        "id": sid,
        "player_id": "player-1",
        "season_id": "season-2023-2024",
        "round_name": round_name,
        "round_number": round_number,
        "team1_id": t1,
        "team1_name": None,
        "team2_id": t2,
        "team2_name": None,
        "team1_wins": 0,
        "team2_wins": 0,
        "winner_team_id": None,
        "is_complete": False,
    }
    row.update(extra)
    return row


def test_finals_never_in_conference_maps():
    rows = [_row("1-2324-fnl", "NBA Finals", 4, "team-bos", "team-lal")]
    b = organize_bracket(rows)
    assert [s["id"] for s in b["finals"]] == ["1-2324-fnl"]
    assert b["east"] == {} and b["west"] == {}


def test_round_zero_is_play_in_without_name_marker():
    rows = [
        _row("a", "Opening Night", 0, "team-mia", "team-chi"),
        _row("b", "West play in", 5, "team-gsw", "team-sac"),
    ]
    b = organize_bracket(rows)
    assert [s["id"] for s in b["east_play_in"]] == ["a"]
    assert [s["id"] for s in b["west_play_in"]] == ["b"]
    assert b["east"] == {} and b["west"] == {}


def test_is_play_in():
    assert is_play_in(0, "Round 1")
    assert is_play_in(None, "PLAY-IN Tournament")
    assert not is_play_in(1, "Round 1")
    assert not is_play_in("x", "Round 1")


def test_rounds_grouped_by_conference_in_input_order():
    rows = [
        _row("e1", "Round 1", 1, "team-bos", "team-mia"),
        _row("w1", "Round 1", 1, "team-den", "team-lal"),
        _row("e2", "Round 1", 1, "team-nyk", "team-phi"),
        _row("e3", "Conference Semifinals", 2, "team-bos", "team-nyk"),
    ]
    b = organize_bracket(rows)
    assert [s["id"] for s in b["east"][1]] == ["e1", "e2"]
    assert [s["id"] for s in b["east"][2]] == ["e3"]
    assert [s["id"] for s in b["west"][1]] == ["w1"]
    assert [s["id"] for s in round_series(b, "East", 1)] == ["e1", "e2"]
    assert round_series(b, "west", 3) == []


def test_unresolved_series_defaults_to_east_with_placeholders():
    b = organize_bracket([_row("x", "Round 1", 1)])
    item = b["east"][1][0]
    assert item["conference"] == "East"
    assert item["team1_display"] == "TBD"
    assert item["team2_display"] == "TBD"
    assert item["team1_abbrev"] == "TBD"


def test_display_names_and_abbreviations():
    directory = StaticTeamDirectory()
    rows = [_row("x", "Round 1", 1, "team-bos", None, team2_name="Seattle SuperSonics")]
    item = organize_bracket(rows, [], directory)["east"][1][0]
    assert item["team1_display"] == "Boston Celtics"
    assert item["team1_abbrev"] == "BOS"
    assert item["team2_display"] == "Seattle SuperSonics"
    assert item["team2_abbrev"] == "Seattle SuperSonics"


def test_games_attached_only_when_playoff_and_matching():
    games = [
        {"id": "g1", "playoff_series_id": "x", "is_playoff_game": True},
        {"id": "g2", "playoff_series_id": "x", "is_playoff_game": False},
        {"id": "g3", "playoff_series_id": "y", "is_playoff_game": True},
        {"id": "g4", "playoff_series_id": None, "is_playoff_game": True},
    ]
    assert set(index_games_by_series(games)) == {"x", "y"}
    item = organize_bracket([_row("x", "Round 1", 1, "team-bos")], games)["east"][1][0]
    assert [g["id"] for g in item["games"]] == ["g1"]


def test_play_in_single_win_is_displayed_as_decided():
    rows = [_row("p", "Play-In Tournament", 0, "team-mia", "team-chi", team1_wins=1)]
    item = organize_bracket(rows)["east_play_in"][0]
    assert item["team1_won"] and not item["team2_won"]
    assert item["display_complete"]
    assert item["is_complete"] is False


def test_stored_winner_drives_team_won_flags():
    rows = [_row("s", "Round 1", 1, "team-den", "team-lal", team2_wins=4, winner_team_id="team-lal", is_complete=True)]
    item = organize_bracket(rows)["west"][1][0]
    assert item["team2_won"] and not item["team1_won"]
    assert item["display_complete"]


def test_round_trip_keeps_stored_fields():
    rows = [
        _row("1-2324-rnd2-w", "Conference Semifinals", 2, "team-den", "team-lal"),
        _row("1-2324-plyn-e", "Play-In Tournament", 0, "team-mia", "team-chi"),
        _row("1-2324-fnl", "NBA Finals", 4, "team-bos", "team-den"),
    ]
    before = copy.deepcopy(rows)
    b = organize_bracket(rows)
    assert rows == before

    flat = b["west"][2] + b["east_play_in"] + b["finals"]
    by_id = {s["id"]: s for s in flat}
    for original in before:
        item = by_id[original["id"]]
        assert item["round_number"] == original["round_number"]
        assert item["round_name"] == original["round_name"]
        for key, value in original.items():
            assert item[key] == value


def test_accepts_dataclass_rows():
    s = PlayoffSeries(
        id="1-2324-rnd1-w",
        player_id="player-1",
        season_id="season-2023-2024",
        round_name="Round 1",
        team1_id="team-okc",
    )
    b = organize_bracket([s])
    assert b["west"][1][0]["id"] == "1-2324-rnd1-w"
    assert s.team1_name is None


def test_bracket_is_empty():
    assert bracket_is_empty(organize_bracket([]))
    assert not bracket_is_empty(organize_bracket([_row("f", "NBA Finals", 4)]))


def test_row_without_round_number_uses_round_name():
    rows = [
        {"id": "x", "round_name": "Round 1", "team1_id": "team-bos"},
        {"id": "p", "round_name": "Play-In Tournament", "team1_id": "team-gsw"},
    ]
    b = organize_bracket(rows)
    assert list(b["east"]) == [1]
    assert b["east"][1][0]["id"] == "x"
    assert "round_number" not in b["east"][1][0]
    assert [s["id"] for s in b["west_play_in"]] == ["p"]


def test_non_integer_round_number_degrades():
    rows = [_row("x", "Conference Finals", "one", "team-den")]
    b = organize_bracket(rows)
    assert [s["id"] for s in b["west"][3]] == ["x"]
    assert b["west"][3][0]["round_number"] == "one"
    assert effective_round_number("2", "Round 1") == 2
    assert effective_round_number(None, "Mystery Round") == 1


def test_default_conference_is_logged(monkeypatch, caplog):
    monkeypatch.setattr(bracket, "_WARN_COUNTS", {})
    with caplog.at_level(logging.WARNING, logger="postseason.bracket"):
        assert series_conference(None, "") == "East"
    assert "UNRESOLVED_CONFERENCE" in caplog.text
