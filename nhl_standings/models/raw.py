# nhl_standings/models/raw.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocalizedName(BaseModel):
    """Localized string as served by the league feed ({"default": ...})."""

    model_config = ConfigDict(extra="ignore")

    default: Optional[str] = None


class RawEntry(BaseModel):
    """One standings row exactly as the league feed serves it.

    Every field is optional: the feed is untrusted until the validator has
    accepted the whole snapshot.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    team_name: Optional[LocalizedName] = Field(None, alias="teamName")
    team_abbrev: Optional[LocalizedName] = Field(None, alias="teamAbbrev")
    wins: Optional[int] = None
    losses: Optional[int] = None
    ot_losses: Optional[int] = Field(None, alias="otLosses")
    points: Optional[int] = None
    games_played: Optional[int] = Field(None, alias="gamesPlayed")
    regulation_wins: Optional[int] = Field(None, alias="regulationWins")
    regulation_plus_ot_wins: Optional[int] = Field(None, alias="regulationPlusOtWins")
    division_name: Optional[str] = Field(None, alias="divisionName")
    conference_name: Optional[str] = Field(None, alias="conferenceName")
