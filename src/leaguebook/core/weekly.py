"""Weekly high-score credits.

Each week's top score earns one weekly win. Co-winners split it evenly,
and the cash value is paid out fractionally (never floored).
"""

from __future__ import annotations

from collections import defaultdict

from leaguebook.core.matchups import index_scores
from leaguebook.models.league import WeeklyScore
from leaguebook.models.standings import WeeklyWinner


def compute_weekly_winners(
    scores: list[WeeklyScore],
    max_week: int | None = None,
) -> list[WeeklyWinner]:
    """Return every co-winner of every decided week, ordered by week.

    Weeks with no played scores, or whose played scores are all zero, are
    treated as unplayed and produce no winner.
    """
    index = index_scores(scores)
    by_week: dict[int, list[WeeklyScore]] = defaultdict(list)
    for (_member_id, week), score in index.items():
        if max_week is None or week <= max_week:
            by_week[week].append(score)

    winners: list[WeeklyWinner] = []
    for week in sorted(by_week):
        week_scores = by_week[week]
        top = max(s.points for s in week_scores)
        if top <= 0:
            continue
        leaders = [s for s in week_scores if s.points == top]
        share = 1 / len(leaders)
        winners.extend(
            WeeklyWinner(week=week, member_id=s.member_id, points=top, share=share)
            for s in leaders
        )
    return winners


def tally_weekly_credits(
    winners: list[WeeklyWinner],
) -> dict[str, tuple[float, list[int]]]:
    """Sum fractional weekly wins and collect won weeks per member."""
    credits: dict[str, tuple[float, list[int]]] = {}
    for w in winners:
        total, weeks = credits.get(w.member_id, (0.0, []))
        credits[w.member_id] = (total + w.share, [*weeks, w.week])
    return credits


def weekly_prize_total(weekly_wins: float, weekly_prize_amount: float) -> float:
    return weekly_wins * weekly_prize_amount
