"""Prize settlement: placements, special prizes and weekly credits.

Only explicit admin overrides (FinalWinners) award placement and special
prizes. The suggestions computed here are advisory and never assign a
winner on their own.
"""

from __future__ import annotations

import logging

from leaguebook.core.matchups import index_scores
from leaguebook.core.weekly import weekly_prize_total
from leaguebook.models.league import (
    SPECIAL_CATEGORIES,
    FinalWinners,
    PrizeStructure,
    WeeklyScore,
)
from leaguebook.models.standings import (
    SpecialPrizeSuggestion,
    SpecialPrizeSuggestions,
    Standing,
)

logger = logging.getLogger(__name__)


def settle_prizes(
    standings: list[Standing],
    final_winners: FinalWinners | None,
    prize_structure: PrizeStructure,
    weekly_prize_amount: float,
) -> list[Standing]:
    """Fill in every prize column on *standings* (in place).

    ``total_winnings`` is the weekly prize total plus the placement prize
    plus every special prize the member holds. Special prizes a season did
    not offer (amount 0) are never paid, even if an override names a member.
    """
    winners = final_winners or FinalWinners()
    known = {s.member_id for s in standings}

    for slot, member_id in winners.placements():
        if member_id not in known:
            logger.warning(
                "final_winner_skipped slot=%s member=%s reason=not_in_standings",
                slot,
                member_id,
            )
    for category in SPECIAL_CATEGORIES:
        member_id = getattr(winners, category)
        if member_id is None:
            continue
        if member_id not in known:
            logger.warning(
                "final_winner_skipped slot=%s member=%s reason=not_in_standings",
                category,
                member_id,
            )
        elif not prize_structure.is_offered(category):
            logger.info("special_prize_not_offered category=%s member=%s", category, member_id)

    for standing in standings:
        standing.weekly_prize_total = weekly_prize_total(
            standing.weekly_wins, weekly_prize_amount
        )

        standing.placement = winners.placement_of(standing.member_id)
        standing.placement_prize = (
            prize_structure.amount(standing.placement) if standing.placement else 0
        )

        standing.special_prizes = {
            category: prize_structure.amount(category)
            for category in SPECIAL_CATEGORIES
            if getattr(winners, category) == standing.member_id
            and prize_structure.is_offered(category)
        }

        standing.total_winnings = (
            standing.weekly_prize_total
            + standing.placement_prize
            + sum(standing.special_prizes.values())
        )

    return standings


def suggest_special_prizes(scores: list[WeeklyScore]) -> SpecialPrizeSuggestions:
    """Surface the statistical leaders an admin may want to award.

    Only played scores count. On equal values the first row seen wins.
    """
    played = list(index_scores(scores).values())
    if not played:
        return SpecialPrizeSuggestions()

    totals: dict[str, float] = {}
    for s in played:
        totals[s.member_id] = totals.get(s.member_id, 0) + s.points
    ordered = sorted(totals.items(), key=lambda item: -item[1])

    highest = played[0]
    lowest = played[0]
    for s in played[1:]:
        if s.points > highest.points:
            highest = s
        if s.points < lowest.points:
            lowest = s

    fourth = None
    if len(ordered) >= 4:
        fourth = SpecialPrizeSuggestion(member_id=ordered[3][0], value=ordered[3][1])

    return SpecialPrizeSuggestions(
        highest_points=SpecialPrizeSuggestion(member_id=ordered[0][0], value=ordered[0][1]),
        highest_weekly=SpecialPrizeSuggestion(
            member_id=highest.member_id, value=highest.points, week=highest.week_number
        ),
        lowest_weekly=SpecialPrizeSuggestion(
            member_id=lowest.member_id, value=lowest.points, week=lowest.week_number
        ),
        fourth_by_points=fourth,
    )
