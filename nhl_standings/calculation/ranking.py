"""
Standings ranking: point percentage, tiebreakers and the standings sort.
"""

from decimal import ROUND_HALF_UP, Decimal
from functools import cmp_to_key
from typing import Iterable, List

from nhl_standings.models.enums import TiebreakerResult
from nhl_standings.models.team import Team

POINT_PERCENTAGE_PLACES = Decimal("0.001")


def point_percentage(points: int, games_played: int) -> float:
    """Points earned over points available (games played x 2), to three places.

    Rounds half up on the exact ratio, so 33 points in 40 games is 0.413.
    """
    if games_played == 0:
        return 0.0
    ratio = Decimal(points) / Decimal(games_played * 2)
    return float(ratio.quantize(POINT_PERCENTAGE_PLACES, rounding=ROUND_HALF_UP))


def apply_tiebreaker(team_a: Team, team_b: Team) -> TiebreakerResult:
    """Ranks two teams with identical point percentages.

    Fewer games played ranks higher, then more regulation wins. Anything
    still level is a true tie.
    """
    if team_a.games_played < team_b.games_played:
        return TiebreakerResult.TEAM_A_WINS
    if team_a.games_played > team_b.games_played:
        return TiebreakerResult.TEAM_B_WINS

    if team_a.regulation_wins > team_b.regulation_wins:
        return TiebreakerResult.TEAM_A_WINS
    if team_a.regulation_wins < team_b.regulation_wins:
        return TiebreakerResult.TEAM_B_WINS

    return TiebreakerResult.TIE


def compare_teams(team_a: Team, team_b: Team) -> TiebreakerResult:
    if team_a.point_percentage > team_b.point_percentage:
        return TiebreakerResult.TEAM_A_WINS
    if team_a.point_percentage < team_b.point_percentage:
        return TiebreakerResult.TEAM_B_WINS
    return apply_tiebreaker(team_a, team_b)


def sort_teams(teams: Iterable[Team]) -> List[Team]:
    """Returns a new list in standings order; ties keep their input order."""
    return sorted(teams, key=cmp_to_key(lambda a, b: compare_teams(a, b).value))


def with_point_percentages(teams: Iterable[Team]) -> List[Team]:
    return [
        team.model_copy(
            update={"point_percentage": point_percentage(team.points, team.games_played)}
        )
        for team in teams
    ]
