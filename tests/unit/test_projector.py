"""Unit tests for PlayoffProjector."""

import pytest

from nhl_standings.calculation.projector import PlayoffProjector
from nhl_standings.models.enums import PlayoffStatus


@pytest.fixture
def projector(settings):
    return PlayoffProjector(settings)


class TestClinched:
    def test_points_equal_threshold(self, projector, make_team):
        projection = projector.project(make_team(points=95, games_played=70), 95)

        assert projection.status == PlayoffStatus.CLINCHED
        assert projection.remaining_games == 12
        assert projection.remaining_points == 24
        assert projection.max_possible_points == 119
        assert projection.points_gap == 0
        assert projection.required_points_percentage is None

    def test_points_above_threshold_early_in_season(self, projector, make_team):
        projection = projector.project(make_team(points=100, games_played=50), 95)

        assert projection.status == PlayoffStatus.CLINCHED
        assert projection.points_gap == -5


class TestEliminated:
    def test_max_points_below_threshold(self, projector, make_team):
        projection = projector.project(make_team(points=60, games_played=75), 95)

        assert projection.status == PlayoffStatus.ELIMINATED
        assert projection.max_possible_points == 74
        assert projection.required_points_percentage is None

    def test_max_points_one_below_threshold(self, projector, make_team):
        projection = projector.project(make_team(points=80, games_played=75), 95)

        assert projection.max_possible_points == 94
        assert projection.status == PlayoffStatus.ELIMINATED


class TestCompeting:
    def test_required_percentage(self, projector, make_team):
        projection = projector.project(make_team(points=80, games_played=70), 95)

        assert projection.status == PlayoffStatus.COMPETING
        assert projection.remaining_points == 24
        assert projection.points_gap == 15
        assert projection.required_points_percentage == pytest.approx(62.5)

    def test_needs_every_remaining_point(self, projector, make_team):
        projection = projector.project(make_team(points=80, games_played=72), 100)

        assert projection.status == PlayoffStatus.COMPETING
        assert projection.max_possible_points == 100
        assert projection.required_points_percentage == pytest.approx(100.0)

    def test_one_point_below_threshold(self, projector, make_team):
        projection = projector.project(make_team(points=94, games_played=70), 95)

        assert projection.status == PlayoffStatus.COMPETING
        assert projection.required_points_percentage == pytest.approx(100 / 24)


class TestSeasonOver:
    """No games left: status is always clinched or eliminated."""

    def test_at_threshold(self, projector, make_team):
        projection = projector.project(make_team(points=95, games_played=82), 95)

        assert projection.remaining_points == 0
        assert projection.status == PlayoffStatus.CLINCHED

    def test_below_threshold(self, projector, make_team):
        projection = projector.project(make_team(points=94, games_played=82), 95)

        assert projection.status == PlayoffStatus.ELIMINATED

    def test_more_than_season_games_played(self, projector, make_team):
        projection = projector.project(make_team(points=90, games_played=84), 95)

        assert projection.remaining_games == 0
        assert projection.max_possible_points == 90
        assert projection.status == PlayoffStatus.ELIMINATED


def test_uses_configured_season_length(settings, make_team):
    short_season = settings.model_copy(update={"season_games": 48})

    projection = PlayoffProjector(short_season).project(make_team(points=50, games_played=40), 60)

    assert projection.remaining_games == 8
    assert projection.required_points_percentage == pytest.approx(62.5)
