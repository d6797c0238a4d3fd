"""Cumulative win/loss/tie records and point totals up to a week cutoff."""

from __future__ import annotations

import logging

from leaguebook.core.matchups import index_scores, resolve_matchup
from leaguebook.models.league import Matchup, WeeklyScore
from leaguebook.models.standings import MatchupOutcome, TeamRecord

logger = logging.getLogger(__name__)


def aggregate_records(
    scores: list[WeeklyScore],
    matchups: list[Matchup],
    max_week: int,
    member_ids: list[str] | None = None,
) -> dict[str, TeamRecord]:
    """Build a record for every member seen in the inputs.

    Args:
        scores: All weekly score rows for the season.
        matchups: All matchups for the season.
        max_week: Inclusive week cutoff (regular-season end or season end).
        member_ids: Members that must appear even with no data. Their
            records start at zero, and the returned dict follows this order
            first, then any other member ids in input order.

    Returns:
        Mapping of member_id to TeamRecord. Members with no matchups or no
        scores get a zero record rather than an error.
    """
    records: dict[str, TeamRecord] = {}

    def _record(member_id: str) -> TeamRecord:
        if member_id not in records:
            records[member_id] = TeamRecord(member_id=member_id)
        return records[member_id]

    for member_id in member_ids or []:
        _record(member_id)

    in_range = [s for s in scores if s.week_number <= max_week]
    # Collapse duplicates so a re-entered score counts once.
    index = index_scores(in_range)
    for (member_id, _week), score in index.items():
        rec = _record(member_id)
        rec.points_for += score.points
        rec.games_played += 1

    counted = 0
    for m in matchups:
        if m.week_number > max_week:
            continue
        outcome = resolve_matchup(m, index)
        if outcome is MatchupOutcome.PENDING:
            continue
        team1 = _record(m.team1_member_id)
        team2 = _record(m.team2_member_id)
        if outcome is MatchupOutcome.A_WINS:
            team1.wins += 1
            team2.losses += 1
        elif outcome is MatchupOutcome.B_WINS:
            team2.wins += 1
            team1.losses += 1
        else:
            team1.ties += 1
            team2.ties += 1
        counted += 1

    logger.debug(
        "records_aggregated members=%d matchups=%d max_week=%d",
        len(records),
        counted,
        max_week,
    )
    return records
