from typing import Any, Dict, List

from loguru import logger

from nhl_standings.models.raw import RawEntry
from nhl_standings.models.team import Team


class StandingsTransformer:
    """Maps validated raw standing entries into Team records."""

    def transform(self, entries: List[Dict[str, Any]]) -> List[Team]:
        """Builds one Team per entry, in input order.

        Args:
            entries: Raw standing entries that already passed validation.

        Returns:
            Teams with sequential ids starting at 1. Point percentage, playoff
            flags and ranks are left at their defaults for later stages.
        """
        teams = [
            self._to_team(RawEntry.model_validate(entry), team_id)
            for team_id, entry in enumerate(entries, start=1)
        ]
        logger.debug(f"Transformed {len(teams)} raw entries into teams")
        return teams

    def _to_team(self, entry: RawEntry, team_id: int) -> Team:
        return Team(
            id=team_id,
            name=entry.team_name.default,
            abbreviation=entry.team_abbrev.default,
            wins=entry.wins,
            losses=entry.losses,
            ot_losses=entry.ot_losses,
            games_played=entry.games_played,
            points=entry.points,
            point_percentage=0.0,
            regulation_wins=entry.regulation_wins,
            regulation_plus_ot_wins=entry.regulation_plus_ot_wins or 0,
            division=entry.division_name,
            conference=entry.conference_name,
        )
