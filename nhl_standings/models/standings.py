from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .team import Team


class ConferenceStandings(BaseModel):
    """A conference split into its divisions plus the wild card board."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Division name -> teams in rank order
    divisions: Dict[str, List[Team]] = Field(default_factory=dict)
    # Every non-division-leader in standing order; only the first two carry is_wild_card
    wild_cards: List[Team] = Field(default_factory=list)


class StandingsDocument(BaseModel):
    """Complete processed standings handed to the renderer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    eastern: ConferenceStandings
    western: ConferenceStandings
    last_updated: str
    is_stale_data: Optional[bool] = None
    cache_timestamp: Optional[str] = None

    def all_teams(self) -> List[Team]:
        """Every team of both conferences, in division order."""
        return [
            team
            for conference in (self.eastern, self.western)
            for teams in conference.divisions.values()
            for team in teams
        ]

    def find_team(self, abbreviation: str) -> Optional[Team]:
        wanted = abbreviation.strip().upper()
        for team in self.all_teams():
            if team.abbreviation.upper() == wanted:
                return team
        return None
