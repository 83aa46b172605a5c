"""Pytest configuration and fixtures for all tests."""

import copy
from typing import Any, Callable, Dict

import pytest

from nhl_standings.config.settings import AppSettings
from nhl_standings.models.team import Team

# Division -> conference, in the order the feed lists them
LEAGUE_LAYOUT = {
    "Atlantic": "Eastern",
    "Metropolitan": "Eastern",
    "Central": "Western",
    "Pacific": "Western",
}


def make_entry(
    abbrev: str,
    name: str,
    wins: int,
    losses: int,
    ot_losses: int,
    regulation_wins: int,
    division: str,
    conference: str,
) -> Dict[str, Any]:
    """One raw standings row with consistent games played and points."""
    return {
        "teamName": {"default": name},
        "teamAbbrev": {"default": abbrev},
        "teamCommonName": {"default": name.split()[-1]},
        "teamLogo": f"https://assets.example.com/{abbrev}.svg",
        "wins": wins,
        "losses": losses,
        "otLosses": ot_losses,
        "points": wins * 2 + ot_losses,
        "gamesPlayed": wins + losses + ot_losses,
        "regulationWins": regulation_wins,
        "regulationPlusOtWins": regulation_wins + 1,
        "divisionName": division,
        "conferenceName": conference,
    }


def build_snapshot() -> Dict[str, Any]:
    standings = []
    for d, (division, conference) in enumerate(LEAGUE_LAYOUT.items()):
        for j in range(8):
            wins = 40 - j * 2 - d
            standings.append(
                make_entry(
                    abbrev=f"{division[:3].upper()}{j}",
                    name=f"{division} Team {j}",
                    wins=wins,
                    losses=20 + j,
                    ot_losses=5,
                    regulation_wins=wins - 3,
                    division=division,
                    conference=conference,
                )
            )
    return {"wildCardIndicator": True, "standings": standings}


@pytest.fixture
def valid_snapshot() -> Dict[str, Any]:
    """A consistent 32-team snapshot: 8 per division, 16 per conference."""
    return build_snapshot()


@pytest.fixture
def snapshot_factory() -> Callable[[], Dict[str, Any]]:
    return lambda: copy.deepcopy(build_snapshot())


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    """Default league settings with cache and output under tmp_path."""
    return AppSettings(
        cache_dir=tmp_path / "cache",
        output_path=tmp_path / "dist" / "standings.json",
    )


@pytest.fixture
def make_team() -> Callable[..., Team]:
    """Factory for Team records; keyword arguments override the defaults."""

    def _make_team(**overrides) -> Team:
        fields = {
            "id": 1,
            "name": "Test Team",
            "abbreviation": "TST",
            "wins": 25,
            "losses": 10,
            "ot_losses": 5,
            "games_played": 40,
            "points": 55,
            "point_percentage": 0.688,
            "regulation_wins": 20,
            "regulation_plus_ot_wins": 22,
            "division": "Atlantic",
            "conference": "Eastern",
        }
        fields.update(overrides)
        return Team(**fields)

    return _make_team
