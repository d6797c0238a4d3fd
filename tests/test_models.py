"""Tests for league input models and their validation."""

import pytest
from pydantic import ValidationError

from leaguebook.core.errors import ConfigInvariantError, StandingsError
from leaguebook.models.league import (
    FinalWinners,
    Matchup,
    Member,
    PrizeStructure,
    SeasonConfig,
    SeasonSnapshot,
    WeeklyScore,
)
from leaguebook.models.standings import Standing, TeamRecord


class TestWeeklyScore:
    def test_valid(self):
        s = WeeklyScore(member_id="a", week_number=3, points=101.4)
        assert s.played

    def test_week_must_be_positive(self):
        with pytest.raises(ValidationError):
            WeeklyScore(member_id="a", week_number=0, points=10)

    def test_points_non_negative(self):
        with pytest.raises(ValidationError):
            WeeklyScore(member_id="a", week_number=1, points=-0.5)


class TestMatchup:
    def test_self_play_rejected(self):
        with pytest.raises(ValidationError, match="cannot play itself"):
            Matchup(week_number=1, team1_member_id="a", team2_member_id="a")


class TestSeasonConfig:
    def test_regular_season_end(self):
        config = SeasonConfig(league_id="lg", season="2024")
        assert config.regular_season_end == 14
        assert config.max_week(include_postseason=False) == 14
        assert config.max_week(include_postseason=True) == 17

    def test_valid_invariants(self):
        SeasonConfig(league_id="lg", season="2024").check_playoff_invariants()

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"playoff_start_week": 0}, "playoff_start_week"),
            ({"playoff_start_week": 18}, "playoff_start_week"),
            ({"playoff_spots": 0}, "playoff_spots"),
        ],
    )
    def test_invariant_violations(self, overrides, field):
        config = SeasonConfig(league_id="lg", season="2024", **overrides)
        with pytest.raises(ConfigInvariantError) as exc_info:
            config.check_playoff_invariants()
        assert exc_info.value.field == field
        assert isinstance(exc_info.value, StandingsError)


class TestPrizeStructure:
    def test_unoffered_defaults_to_zero(self):
        prizes = PrizeStructure(first=500)
        assert prizes.amount("first") == 500
        assert prizes.amount("lowest_weekly") == 0
        assert prizes.is_offered("first")
        assert not prizes.is_offered("lowest_weekly")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            PrizeStructure(first=-1)


class TestFinalWinners:
    def test_placements_skip_empty(self):
        winners = FinalWinners(first="a", third="c", highest_points="a")
        assert winners.placements() == [("first", "a"), ("third", "c")]
        assert winners.placement_of("c") == "third"
        assert winners.placement_of("b") is None
        assert winners.has_placements()

    def test_empty(self):
        assert not FinalWinners().has_placements()


class TestSnapshot:
    def test_active_members(self):
        snapshot = SeasonSnapshot(
            league_id="lg",
            season="2024",
            members=[
                Member(id="a", league_id="lg", season="2024", manager_name="A", team_name="TA"),
                Member(
                    id="b",
                    league_id="lg",
                    season="2024",
                    manager_name="B",
                    team_name="TB",
                    is_active=False,
                ),
            ],
        )
        assert [m.id for m in snapshot.active_members()] == ["a"]


class TestDerived:
    def test_average_points(self):
        assert TeamRecord(member_id="a").average_points == 0
        assert TeamRecord(member_id="a", points_for=300, games_played=3).average_points == 100

    def test_playoff_team(self):
        assert Standing(member_id="a", playoff_seed=2).is_playoff_team
        assert not Standing(member_id="a").is_playoff_team

    def test_playoff_team_serialized(self):
        assert Standing(member_id="a", playoff_seed=1).model_dump()["is_playoff_team"] is True
        assert Standing(member_id="a").model_dump(mode="json")["is_playoff_team"] is False
