"""Playoff qualification and seeding.

Seeding always runs on regular-season records: the playoff field is frozen
at the regular-season boundary even when a caller is viewing full-season
totals.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from leaguebook.core.errors import ConfigInvariantError
from leaguebook.core.ranking import ranking_key
from leaguebook.models.league import Member, SeasonConfig
from leaguebook.models.standings import PlayoffSeed, TeamRecord

logger = logging.getLogger(__name__)


def effective_divisions(config: SeasonConfig, members: Sequence[Member]) -> list[str]:
    """Division names that apply to a season.

    Configured divisions win. Otherwise labels are taken from the members,
    in first-seen order, and only count when there are at least two.
    """
    if config.divisions:
        return list(config.divisions)
    labels: list[str] = []
    for member in members:
        if member.division and member.division not in labels:
            labels.append(member.division)
    return labels if len(labels) > 1 else []


def seed_playoffs(
    ranked: Sequence[TeamRecord],
    playoff_spots: int,
    divisions: Sequence[str] = (),
    member_divisions: dict[str, str | None] | None = None,
) -> list[PlayoffSeed]:
    """Compute the playoff field.

    Args:
        ranked: Regular-season records already in ranked order.
        playoff_spots: Number of playoff teams. Must be positive.
        divisions: Division names. Empty means straight top-N seeding.
        member_divisions: member_id to division label.

    Returns:
        Seeds 1..N. With divisions, each division's best record is seeded
        first (ordered among themselves by record), then wildcards fill the
        remaining spots from everyone else league-wide. A division winner
        is never also a wildcard.

    Raises:
        ConfigInvariantError: If ``playoff_spots`` is not positive.
    """
    if playoff_spots <= 0:
        raise ConfigInvariantError(
            f"playoff_spots={playoff_spots} must be positive", field="playoff_spots"
        )

    member_divisions = member_divisions or {}

    if not divisions:
        return [
            PlayoffSeed(
                member_id=r.member_id,
                seed=i + 1,
                division=member_divisions.get(r.member_id),
            )
            for i, r in enumerate(ranked[:playoff_spots])
        ]

    winners: list[TeamRecord] = []
    for division in divisions:
        in_division = [r for r in ranked if member_divisions.get(r.member_id) == division]
        if in_division:
            winners.append(sorted(in_division, key=ranking_key)[0])
        else:
            logger.debug("division_without_members division=%s", division)
    winners.sort(key=ranking_key)

    seeds = [
        PlayoffSeed(
            member_id=w.member_id,
            seed=i + 1,
            is_division_winner=True,
            division=member_divisions.get(w.member_id),
        )
        for i, w in enumerate(winners)
    ]

    wildcard_spots = playoff_spots - len(winners)
    if wildcard_spots > 0:
        winner_ids = {w.member_id for w in winners}
        pool = sorted((r for r in ranked if r.member_id not in winner_ids), key=ranking_key)
        for i, r in enumerate(pool[:wildcard_spots]):
            seeds.append(
                PlayoffSeed(
                    member_id=r.member_id,
                    seed=len(winners) + i + 1,
                    division=member_divisions.get(r.member_id),
                )
            )

    return seeds
