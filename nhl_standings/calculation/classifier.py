"""
Playoff position identification: division leaders, wild cards, conference ranks.
"""

from typing import Callable, Dict, List

from loguru import logger

from nhl_standings.calculation.ranking import sort_teams
from nhl_standings.models.standings import ConferenceStandings
from nhl_standings.models.team import Team

DIVISION_LEADER_SPOTS = 3
WILD_CARD_SPOTS = 2


def _group_by(teams: List[Team], key: Callable[[Team], str]) -> Dict[str, List[Team]]:
    groups: Dict[str, List[Team]] = {}
    for team in teams:
        groups.setdefault(key(team), []).append(team)
    return groups


def identify_division_leaders(teams: List[Team]) -> List[Team]:
    """Ranks every division and flags its top three teams as leaders."""
    processed: List[Team] = []
    for division_teams in _group_by(teams, lambda t: t.division).values():
        for rank, team in enumerate(sort_teams(division_teams), start=1):
            processed.append(
                team.model_copy(
                    update={
                        "division_rank": rank,
                        "is_division_leader": rank <= DIVISION_LEADER_SPOTS,
                    }
                )
            )
    return processed


def identify_wild_cards(teams: List[Team]) -> List[Team]:
    """Flags the top two non-division-leaders of each conference.

    Expects division leaders to be identified already.
    """
    processed: List[Team] = []
    for conference_teams in _group_by(teams, lambda t: t.conference).values():
        non_leaders = sort_teams(t for t in conference_teams if not t.is_division_leader)
        wild_card_ids = {team.id for team in non_leaders[:WILD_CARD_SPOTS]}
        processed.extend(
            team.model_copy(update={"is_wild_card": team.id in wild_card_ids})
            for team in conference_teams
        )
    return processed


def calculate_conference_ranks(teams: List[Team]) -> List[Team]:
    processed: List[Team] = []
    for conference_teams in _group_by(teams, lambda t: t.conference).values():
        processed.extend(
            team.model_copy(update={"conference_rank": rank})
            for rank, team in enumerate(sort_teams(conference_teams), start=1)
        )
    return processed


def classify(teams: List[Team]) -> List[Team]:
    """Populates division rank, leader flag, wild card flag and conference rank.

    Point percentages must already be set. The input list and its teams are
    left untouched.
    """
    classified = calculate_conference_ranks(identify_wild_cards(identify_division_leaders(teams)))
    logger.debug(
        f"Classified {len(classified)} teams: "
        f"{sum(t.is_division_leader for t in classified)} division leaders, "
        f"{sum(t.is_wild_card for t in classified)} wild cards"
    )
    return classified


def organize_conference(teams: List[Team], conference: str) -> ConferenceStandings:
    """Builds one conference's divisions and its wild card board.

    The board holds every non-division-leader so bubble teams below the two
    wild card spots can be shown; only the top two carry is_wild_card.
    """
    conference_teams = [team for team in teams if team.conference == conference]
    divisions = {
        division: sort_teams(division_teams)
        for division, division_teams in _group_by(conference_teams, lambda t: t.division).items()
    }
    wild_cards = sort_teams(team for team in conference_teams if not team.is_division_leader)
    return ConferenceStandings(divisions=divisions, wild_cards=wild_cards)
