"""Tests for the full season standings pipeline."""

import pytest

from leaguebook.core.errors import ConfigInvariantError, MissingSeasonConfigError
from leaguebook.core.participation import classify_season
from leaguebook.core.standings import (
    compute_playoff_seeds,
    compute_season_standings,
    is_season_complete,
)
from leaguebook.models.league import (
    FinalWinners,
    Matchup,
    Member,
    PrizeStructure,
    SeasonConfig,
    SeasonSnapshot,
    WeeklyScore,
)

# Weeks 1-2 are the regular season; weeks 3-4 are playoffs.
POINTS = {
    "a": [120, 110, 80, 90],
    "b": [100, 130, 140, 150],
    "c": [90, 70, 100, 60],
    "d": [80, 95, 60, 100],
}
PAIRINGS = [
    (1, "a", "b"),
    (1, "c", "d"),
    (2, "a", "c"),
    (2, "b", "d"),
    (3, "a", "b"),
    (3, "c", "d"),
    (4, "b", "a"),
    (4, "c", "d"),
]


def _snapshot(
    weeks: int = 4,
    final_winners: FinalWinners | None = None,
    **config_overrides,
) -> SeasonSnapshot:
    config_fields = {
        "league_id": "lg",
        "season": "2024",
        "total_weeks": 4,
        "playoff_start_week": 3,
        "playoff_spots": 2,
        "weekly_prize_amount": 10,
        "prize_structure": PrizeStructure(first=500, second=300, third=100, highest_points=50),
    }
    config = SeasonConfig(**{**config_fields, **config_overrides})
    members = [
        Member(
            id=mid, league_id="lg", season="2024", manager_name=mid.upper(), team_name=f"T{mid}"
        )
        for mid in POINTS
    ]
    scores = [
        WeeklyScore(member_id=mid, week_number=week, points=points[week - 1])
        for mid, points in POINTS.items()
        for week in range(1, weeks + 1)
    ]
    matchups = [
        Matchup(week_number=w, team1_member_id=a, team2_member_id=b) for w, a, b in PAIRINGS
    ]
    return SeasonSnapshot(
        league_id="lg",
        season="2024",
        config=config,
        members=members,
        scores=scores,
        matchups=matchups,
        final_winners=final_winners,
    )


class TestRegularSeasonView:
    def test_ranking_and_records(self):
        result = compute_season_standings(_snapshot())
        assert result.max_week == 2
        assert [s.member_id for s in result.standings] == ["a", "b", "c", "d"]
        assert [s.rank for s in result.standings] == [1, 2, 3, 4]
        a = result.standing_for("a")
        assert (a.wins, a.losses, a.points_for) == (2, 0, 230)
        assert a.manager_name == "A"
        assert a.average_points == 115

    def test_weekly_winners_stop_at_regular_season(self):
        result = compute_season_standings(_snapshot())
        assert [(w.week, w.member_id) for w in result.weekly_winners] == [(1, "a"), (2, "b")]
        assert result.standing_for("a").weekly_prize_total == 10

    def test_playoff_seeds(self):
        result = compute_season_standings(_snapshot())
        assert [(s.member_id, s.seed) for s in result.playoff_seeds] == [("a", 1), ("b", 2)]
        assert result.standing_for("a").is_playoff_team
        assert not result.standing_for("c").is_playoff_team

    def test_completeness(self):
        assert compute_season_standings(_snapshot()).is_complete
        partial = compute_season_standings(_snapshot(weeks=3))
        assert partial.weeks_scored == 3
        assert not partial.is_complete


class TestPostseasonView:
    def test_all_weeks_counted(self):
        result = compute_season_standings(_snapshot(), include_postseason=True)
        assert result.max_week == 4
        assert [s.member_id for s in result.standings] == ["b", "a", "c", "d"]
        assert result.standing_for("b").wins == 3
        assert result.standing_for("b").weeks_won == [2, 3, 4]

    def test_seeds_frozen_at_regular_season(self):
        regular = compute_season_standings(_snapshot())
        post = compute_season_standings(_snapshot(), include_postseason=True)
        assert post.playoff_seeds == regular.playoff_seeds
        assert post.standing_for("a").playoff_seed == 1

    def test_final_placements_override_ranking(self):
        winners = FinalWinners(first="c", second="b", third="a", highest_points="b")
        result = compute_season_standings(
            _snapshot(final_winners=winners), include_postseason=True
        )
        assert [s.member_id for s in result.standings] == ["c", "b", "a", "d"]
        assert [s.rank for s in result.standings] == [1, 2, 3, 4]
        b = result.standing_for("b")
        assert b.placement == "second"
        assert b.special_prizes == {"highest_points": 50}
        assert b.total_winnings == 30 + 300 + 50

    def test_placements_not_applied_to_regular_view(self):
        winners = FinalWinners(first="d")
        result = compute_season_standings(_snapshot(final_winners=winners))
        assert result.standings[0].member_id == "a"


class TestFailureModes:
    def test_missing_config_raises(self):
        snapshot = _snapshot().model_copy(update={"config": None})
        with pytest.raises(MissingSeasonConfigError) as exc_info:
            compute_season_standings(snapshot)
        assert exc_info.value.season == "2024"

    def test_invalid_playoff_config_still_ranks(self):
        result = compute_season_standings(_snapshot(playoff_spots=0))
        assert result.playoff_seeds == []
        assert result.seeding_error is not None
        assert [s.member_id for s in result.standings] == ["a", "b", "c", "d"]

    def test_playoff_start_out_of_range(self):
        with pytest.raises(ConfigInvariantError) as exc_info:
            compute_playoff_seeds(_snapshot(playoff_start_week=9))
        assert exc_info.value.field == "playoff_start_week"


class TestMembership:
    def test_withdrawn_member_excluded(self):
        snapshot = _snapshot()
        snapshot.members[1].is_active = False  # b
        result = compute_season_standings(snapshot)
        assert [s.member_id for s in result.standings] == ["a", "c", "d"]
        # b's week-2 high score no longer counts, so a takes the week.
        assert [(w.week, w.member_id) for w in result.weekly_winners] == [(1, "a"), (2, "a")]

    def test_new_member_without_scores(self):
        snapshot = _snapshot()
        snapshot.members.append(
            Member(id="e", league_id="lg", season="2024", manager_name="E", team_name="Te")
        )
        result = compute_season_standings(snapshot)
        e = result.standing_for("e")
        assert (e.wins, e.losses, e.points_for) == (0, 0, 0)
        assert e.rank == 5


class TestSuggestions:
    def test_admin_only(self):
        assert compute_season_standings(_snapshot()).suggestions is None
        result = compute_season_standings(_snapshot(), is_admin=True)
        assert result.suggestions is not None
        assert result.suggestions.highest_points.member_id == "b"


class TestCompleteness:
    def test_withdrawn_member_rows_count_in_every_view(self):
        snapshot = _snapshot(weeks=3)
        snapshot.scores.append(WeeklyScore(member_id="d", week_number=4, points=60))
        snapshot.members[3].is_active = False  # d

        result = compute_season_standings(snapshot)
        assert result.weeks_scored == 4
        assert result.is_complete
        assert is_season_complete(snapshot)
        assert not any(r.ongoing for r in classify_season(snapshot))

    def test_later_placeholder_reopens_week(self):
        snapshot = _snapshot()
        snapshot.scores.extend(
            WeeklyScore(member_id=mid, week_number=4, points=0, played=False) for mid in POINTS
        )
        result = compute_season_standings(snapshot)
        assert result.weeks_scored == 3
        assert not result.is_complete
        assert not is_season_complete(snapshot)
