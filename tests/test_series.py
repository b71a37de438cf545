from __future__ import annotations

from postseason.config import PostseasonConfig
from postseason.models import PlayoffSeries, Season, WinnerResult
from postseason.series import canonical_round_number, determine_winner, prepare_series_for_save


def test_team1_clinches():
    r = determine_winner("team-bos", "Boston Celtics", 4, "team-mia", "Miami Heat", 2)
    assert r == WinnerResult(is_complete=True, winner_team_id="team-bos", winner_team_name="Boston Celtics")


def test_team2_clinches():
    r = determine_winner("team-bos", "Boston Celtics", 3, "team-mia", "Miami Heat", 4)
    assert r.is_complete
    assert r.winner_team_id == "team-mia"


def test_threshold_without_team_id_is_incomplete():
    assert determine_winner(None, None, 4, "team-lal", "Lakers", 3).as_dict() == {"is_complete": False}
    assert determine_winner("", "TBD", 4, "team-lal", "Lakers", 2).as_dict() == {"is_complete": False}


def test_in_progress():
    r = determine_winner("team-bos", "Boston Celtics", 3, "team-mia", "Miami Heat", 3)
    assert not r.is_complete
    assert r.winner_team_id is None


def test_both_at_threshold_favors_team1():
    r = determine_winner("team-bos", "Boston Celtics", 4, "team-mia", "Miami Heat", 4)
    assert r.winner_team_id == "team-bos"


def test_custom_clinch_count():
    cfg = PostseasonConfig(wins_to_clinch=1)
    assert determine_winner("team-bos", "B", 1, "team-mia", "M", 0, config=cfg).is_complete


def test_canonical_round_number():
    assert canonical_round_number("Play-In Tournament") == 0
    assert canonical_round_number("NBA Finals") == 4
    assert canonical_round_number("Semis") == 1


def test_prepare_new_series():
    season = Season.create(2023)
    draft = PlayoffSeries(
        id="temp-Round 1-0",
        player_id="",
        season_id="",
        round_name="Round 1",
        round_number=3,
        team1_id="team-bos",
        team1_name="Boston Celtics",
        team2_id="team-mia",
        team2_name="Miami Heat",
        team1_wins=4,
        team2_wins=1,
        winner_team_id="team-mia",
    )
    out = prepare_series_for_save(draft, season=season, player_id="player-1")

    assert out.id == "1-2324-rnd1-e"
    assert out.season_id == season.id
    assert out.player_id == "player-1"
    assert out.round_number == 1
    assert out.is_complete
    assert out.winner_team_id == "team-bos"
    # Input record untouched.
    assert draft.id == "temp-Round 1-0"
    assert draft.winner_team_id == "team-mia"


def test_prepare_keeps_real_id_and_clears_stale_winner():
    season = Season.create(2023)
    stored = PlayoffSeries(
        id="1-2324-rnd1-e",
        player_id="player-1",
        season_id=season.id,
        round_name="Round 1",
        team1_id="team-bos",
        team2_id="team-mia",
        team1_wins=3,
        team2_wins=2,
        winner_team_id="team-bos",
        is_complete=True,
    )
    out = prepare_series_for_save(stored, season=season, player_id="player-1", existing=[stored])
    assert out.id == "1-2324-rnd1-e"
    assert not out.is_complete
    assert out.winner_team_id is None


def test_prepare_suffixes_against_existing():
    season = Season.create(2023)
    existing = [
        PlayoffSeries(id="1-2324-rnd1-e", player_id="player-1", season_id=season.id, round_name="Round 1")
    ]
    draft = PlayoffSeries(id="", player_id="", season_id="", round_name="Round 1", team1_id="team-nyk")
    out = prepare_series_for_save(draft, season=season, player_id="player-1", existing=existing)
    assert out.id == "1-2324-rnd1-e-2"
