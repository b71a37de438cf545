"""Static configuration and reference data.

Team membership is static: conference/division never change at runtime, so it
lives here rather than in the DB.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List

# Environment keys (read by app.main at startup)
DB_PATH_ENV = "LEAGUE_DB_PATH"
ADMIN_TOKEN_ENV = "H2H_ADMIN_TOKEN"


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

TEAMS: Dict[str, Dict[str, str]] = {
    # East - Atlantic
    "team-bos": {"name": "Boston Celtics", "abbreviation": "BOS", "conference": "East", "division": "Atlantic"},
    "team-bkn": {"name": "Brooklyn Nets", "abbreviation": "BKN", "conference": "East", "division": "Atlantic"},
    "team-nyk": {"name": "New York Knicks", "abbreviation": "NYK", "conference": "East", "division": "Atlantic"},
    "team-phi": {"name": "Philadelphia 76ers", "abbreviation": "PHI", "conference": "East", "division": "Atlantic"},
    "team-tor": {"name": "Toronto Raptors", "abbreviation": "TOR", "conference": "East", "division": "Atlantic"},
    # East - Central
    "team-chi": {"name": "Chicago Bulls", "abbreviation": "CHI", "conference": "East", "division": "Central"},
    "team-cle": {"name": "Cleveland Cavaliers", "abbreviation": "CLE", "conference": "East", "division": "Central"},
    "team-det": {"name": "Detroit Pistons", "abbreviation": "DET", "conference": "East", "division": "Central"},
    "team-ind": {"name": "Indiana Pacers", "abbreviation": "IND", "conference": "East", "division": "Central"},
    "team-mil": {"name": "Milwaukee Bucks", "abbreviation": "MIL", "conference": "East", "division": "Central"},
    # East - Southeast
    "team-atl": {"name": "Atlanta Hawks", "abbreviation": "ATL", "conference": "East", "division": "Southeast"},
    "team-cha": {"name": "Charlotte Hornets", "abbreviation": "CHA", "conference": "East", "division": "Southeast"},
    "team-mia": {"name": "Miami Heat", "abbreviation": "MIA", "conference": "East", "division": "Southeast"},
    "team-orl": {"name": "Orlando Magic", "abbreviation": "ORL", "conference": "East", "division": "Southeast"},
    "team-was": {"name": "Washington Wizards", "abbreviation": "WAS", "conference": "East", "division": "Southeast"},
    # West - Northwest
    "team-den": {"name": "Denver Nuggets", "abbreviation": "DEN", "conference": "West", "division": "Northwest"},
    "team-min": {"name": "Minnesota Timberwolves", "abbreviation": "MIN", "conference": "West", "division": "Northwest"},
    "team-okc": {"name": "Oklahoma City Thunder", "abbreviation": "OKC", "conference": "West", "division": "Northwest"},
    "team-por": {"name": "Portland Trail Blazers", "abbreviation": "POR", "conference": "West", "division": "Northwest"},
    "team-uta": {"name": "Utah Jazz", "abbreviation": "UTA", "conference": "West", "division": "Northwest"},
    # West - Pacific
    "team-gsw": {"name": "Golden State Warriors", "abbreviation": "GSW", "conference": "West", "division": "Pacific"},
    "team-lac": {"name": "LA Clippers", "abbreviation": "LAC", "conference": "West", "division": "Pacific"},
    "team-lal": {"name": "Los Angeles Lakers", "abbreviation": "LAL", "conference": "West", "division": "Pacific"},
    "team-phx": {"name": "Phoenix Suns", "abbreviation": "PHX", "conference": "West", "division": "Pacific"},
    "team-sac": {"name": "Sacramento Kings", "abbreviation": "SAC", "conference": "West", "division": "Pacific"},
    # West - Southwest
    "team-dal": {"name": "Dallas Mavericks", "abbreviation": "DAL", "conference": "West", "division": "Southwest"},
    "team-hou": {"name": "Houston Rockets", "abbreviation": "HOU", "conference": "West", "division": "Southwest"},
    "team-mem": {"name": "Memphis Grizzlies", "abbreviation": "MEM", "conference": "West", "division": "Southwest"},
    "team-nop": {"name": "New Orleans Pelicans", "abbreviation": "NOP", "conference": "West", "division": "Southwest"},
    "team-sas": {"name": "San Antonio Spurs", "abbreviation": "SAS", "conference": "West", "division": "Southwest"},
}

ALL_TEAM_IDS: List[str] = list(TEAMS.keys())

EAST_TEAM_IDS: FrozenSet[str] = frozenset(tid for tid, info in TEAMS.items() if info["conference"] == "East")

# Full display name -> abbreviation. Includes the short "LA ..." spellings seen in
# hand-entered rows.
TEAM_NAME_TO_ABBREV: Dict[str, str] = {info["name"]: info["abbreviation"] for info in TEAMS.values()}
TEAM_NAME_TO_ABBREV.update(
    {
        "Los Angeles Clippers": "LAC",
        "LA Lakers": "LAL",
    }
)
