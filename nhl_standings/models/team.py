# nhl_standings/models/team.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Team(BaseModel):
    """Processed team record with standings and playoff position."""

    model_config = ConfigDict(
        frozen=True,  # Make instances immutable
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int  # Sequential, the feed carries no stable team id
    name: str
    abbreviation: str
    wins: int
    losses: int
    ot_losses: int
    games_played: int
    points: int
    point_percentage: float = 0.0
    regulation_wins: int
    regulation_plus_ot_wins: int = 0
    division: str
    conference: str
    is_division_leader: bool = False
    is_wild_card: bool = False
    division_rank: int = 0
    conference_rank: int = 0
