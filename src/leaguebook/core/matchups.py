"""Head-to-head outcome resolution.

A matchup never stores its result. The outcome is derived from the two
members' weekly scores every time it is needed, so scores and results
cannot drift apart.
"""

from __future__ import annotations

from leaguebook.models.league import Matchup, WeeklyScore
from leaguebook.models.standings import MatchupOutcome

ScoreIndex = dict[tuple[str, int], WeeklyScore]


def resolve_scores(score_a: float, score_b: float) -> MatchupOutcome:
    """Higher score wins; equal scores are a tie."""
    if score_a > score_b:
        return MatchupOutcome.A_WINS
    if score_b > score_a:
        return MatchupOutcome.B_WINS
    return MatchupOutcome.TIE


def index_scores(scores: list[WeeklyScore]) -> ScoreIndex:
    """Key played scores by (member_id, week).

    Later rows win, including a later placeholder over an earlier played row.
    """
    latest = {(s.member_id, s.week_number): s for s in scores}
    return {key: s for key, s in latest.items() if s.played}


def resolve_matchup(matchup: Matchup, index: ScoreIndex) -> MatchupOutcome:
    """Resolve a matchup against the week's played scores.

    When neither side has played the matchup is PENDING. When only one side
    has a played score, the other contributes 0 points.
    """
    a = index.get((matchup.team1_member_id, matchup.week_number))
    b = index.get((matchup.team2_member_id, matchup.week_number))
    if a is None and b is None:
        return MatchupOutcome.PENDING
    return resolve_scores(
        a.points if a is not None else 0.0,
        b.points if b is not None else 0.0,
    )
