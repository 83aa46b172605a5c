from nhl_standings.config.settings import AppSettings
from nhl_standings.models.enums import PlayoffStatus
from nhl_standings.models.projection import PlayoffProjection
from nhl_standings.models.team import Team


class PlayoffProjector:
    """Projects a team's standing against a points threshold."""

    def __init__(self, settings: AppSettings):
        self.season_games = settings.season_games
        self.points_per_win = settings.points_per_win

    def project(self, team: Team, threshold: int) -> PlayoffProjection:
        """Calculate playoff statistics for a team.

        Args:
            team: The team to project.
            threshold: Estimated points needed to make the playoffs. Range
                checking belongs to the caller, see utils.threshold.

        Returns:
            PlayoffProjection. required_points_percentage is only set while
            the team is competing.
        """
        remaining_games = max(0, self.season_games - team.games_played)
        remaining_points = remaining_games * self.points_per_win
        max_possible_points = team.points + remaining_points
        points_gap = threshold - team.points

        required_points_percentage = None
        # Order matters: with no points left a team is always clinched or
        # eliminated before the division below is reached
        if team.points >= threshold:
            status = PlayoffStatus.CLINCHED
        elif max_possible_points < threshold:
            status = PlayoffStatus.ELIMINATED
        else:
            status = PlayoffStatus.COMPETING
            required_points_percentage = (points_gap / remaining_points) * 100

        return PlayoffProjection(
            remaining_games=remaining_games,
            remaining_points=remaining_points,
            max_possible_points=max_possible_points,
            points_gap=points_gap,
            status=status,
            required_points_percentage=required_points_percentage,
        )
