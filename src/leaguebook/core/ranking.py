"""Ordering members by record, with admin placement overrides."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from leaguebook.models.league import FinalWinners
from leaguebook.models.standings import Standing, TeamRecord

logger = logging.getLogger(__name__)


class Ranked(Protocol):
    member_id: str
    wins: int
    points_for: float


def ranking_key(entry: Ranked) -> tuple[int, float]:
    """Sort key: wins desc, then points_for desc."""
    return (-entry.wins, -entry.points_for)


def rank_records(records: Iterable[TeamRecord]) -> list[TeamRecord]:
    """Return records in ranked order.

    ``sorted`` is stable, so members with identical wins and points_for
    keep their input order. No further tie-break is applied.
    """
    return sorted(records, key=ranking_key)


def assign_ranks(standings: list[Standing]) -> list[Standing]:
    """Set rank to the 1-based position in *standings* (in place)."""
    for position, standing in enumerate(standings, start=1):
        standing.rank = position
    return standings


def apply_final_placements(
    standings: list[Standing],
    final_winners: FinalWinners | None,
) -> list[Standing]:
    """Move admin-confirmed placements to the front and re-rank.

    Placed members appear first in first..fourth order; everyone else keeps
    their algorithmic order behind them. A placement naming a member that is
    not in *standings* is skipped.
    """
    if final_winners is None or not final_winners.has_placements():
        return standings

    by_id = {s.member_id: s for s in standings}
    placed: list[Standing] = []
    placed_ids: set[str] = set()
    for slot, member_id in final_winners.placements():
        standing = by_id.get(member_id)
        if standing is None:
            logger.debug(
                "placement_override_skipped slot=%s member=%s",
                slot,
                member_id,
            )
            continue
        if member_id in placed_ids:
            continue
        placed.append(standing)
        placed_ids.add(member_id)

    others = [s for s in standings if s.member_id not in placed_ids]
    return assign_ranks(placed + others)


def division_tables(
    standings: list[Standing],
    divisions: list[str],
) -> dict[str, list[tuple[int, Standing]]]:
    """Group ranked standings by division, keeping league order.

    Returns a mapping of division name to ``(division_rank, standing)``
    pairs. Divisions with no members map to an empty list.
    """
    tables: dict[str, list[tuple[int, Standing]]] = {d: [] for d in divisions}
    for standing in standings:
        table = tables.get(standing.division or "")
        if table is not None:
            table.append((len(table) + 1, standing))
    return tables
