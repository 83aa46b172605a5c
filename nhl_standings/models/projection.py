from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import PlayoffStatus


class PlayoffProjection(BaseModel):
    """Where a team stands against a points threshold."""

    model_config = ConfigDict(frozen=True)

    remaining_games: int
    remaining_points: int
    max_possible_points: int
    points_gap: int
    status: PlayoffStatus
    # Only set while the team is still competing
    required_points_percentage: Optional[float] = None
