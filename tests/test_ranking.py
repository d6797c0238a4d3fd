"""Tests for ranking, placement overrides and division tables."""

from leaguebook.core.ranking import (
    apply_final_placements,
    assign_ranks,
    division_tables,
    rank_records,
)
from leaguebook.models.league import FinalWinners
from leaguebook.models.standings import Standing, TeamRecord


def _rec(member: str, wins: int, points: float) -> TeamRecord:
    return TeamRecord(member_id=member, wins=wins, points_for=points)


def _standings(*ids: str, division: str | None = None) -> list[Standing]:
    return assign_ranks([Standing(member_id=m, division=division) for m in ids])


class TestRankRecords:
    def test_wins_then_points(self):
        ranked = rank_records(
            [_rec("a", 5, 1000), _rec("b", 7, 900), _rec("c", 5, 1100), _rec("d", 2, 1500)]
        )
        assert [r.member_id for r in ranked] == ["b", "c", "a", "d"]

    def test_points_only_when_no_wins(self):
        ranked = rank_records(
            [_rec(f"m{i}", 0, p) for i, p in enumerate([190, 205, 220, 235, 250, 265], 1)]
        )
        assert ranked[0].member_id == "m6"
        assert ranked[-1].member_id == "m1"

    def test_full_ties_keep_input_order(self):
        ranked = rank_records([_rec("x", 3, 500), _rec("y", 3, 500), _rec("z", 3, 500)])
        assert [r.member_id for r in ranked] == ["x", "y", "z"]
        reversed_input = rank_records([_rec("z", 3, 500), _rec("y", 3, 500), _rec("x", 3, 500)])
        assert [r.member_id for r in reversed_input] == ["z", "y", "x"]

    def test_idempotent(self):
        records = [_rec("a", 2, 300), _rec("b", 2, 300), _rec("c", 4, 100)]
        first = [r.member_id for r in rank_records(records)]
        second = [r.member_id for r in rank_records(records)]
        assert first == second


class TestFinalPlacements:
    def test_override_moves_placed_members_first(self):
        standings = _standings("m1", "m2", "m3", "m4", "m5")
        result = apply_final_placements(standings, FinalWinners(first="m3"))
        assert [s.member_id for s in result] == ["m3", "m1", "m2", "m4", "m5"]
        assert [s.rank for s in result] == [1, 2, 3, 4, 5]

    def test_all_four_placements(self):
        standings = _standings("m1", "m2", "m3", "m4", "m5", "m6")
        winners = FinalWinners(first="m4", second="m6", third="m1", fourth="m2")
        result = apply_final_placements(standings, winners)
        assert [s.member_id for s in result] == ["m4", "m6", "m1", "m2", "m3", "m5"]

    def test_unknown_member_skipped(self):
        standings = _standings("m1", "m2", "m3")
        winners = FinalWinners(first="gone", second="m3")
        result = apply_final_placements(standings, winners)
        assert [s.member_id for s in result] == ["m3", "m1", "m2"]
        assert result[0].rank == 1

    def test_no_winners_is_noop(self):
        standings = _standings("m1", "m2")
        assert apply_final_placements(standings, None) is standings
        assert apply_final_placements(standings, FinalWinners(highest_points="m2")) is standings


class TestDivisionTables:
    def test_groups_in_league_order(self):
        standings = assign_ranks(
            [
                Standing(member_id="a", division="East"),
                Standing(member_id="b", division="West"),
                Standing(member_id="c", division="East"),
                Standing(member_id="d", division=None),
            ]
        )
        tables = division_tables(standings, ["East", "West", "North"])
        assert [(rank, s.member_id) for rank, s in tables["East"]] == [(1, "a"), (2, "c")]
        assert [(rank, s.member_id) for rank, s in tables["West"]] == [(1, "b")]
        assert tables["North"] == []
