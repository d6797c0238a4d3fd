"""Season admin endpoints: confirming final winners."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from leaguebook.api.deps import AdminDep, RepoDep
from leaguebook.core.errors import MissingSeasonConfigError
from leaguebook.models.league import FinalWinners

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leagues", tags=["seasons"])


@router.get("/{league_id}/seasons/{season}/final-winners")
async def get_final_winners(league_id: str, season: str, repo: RepoDep) -> dict:
    winners = await repo.get_final_winners(league_id, season)
    return {"data": winners.model_dump() if winners else None}


@router.put("/{league_id}/seasons/{season}/final-winners")
async def put_final_winners(
    league_id: str,
    season: str,
    body: FinalWinners,
    repo: RepoDep,
    _: AdminDep,
) -> dict:
    """Replace the season's confirmed placements and special-prize winners.

    Member ids are stored as given. Ids that do not match a current member
    are ignored when standings are computed.
    """
    try:
        saved = await repo.set_final_winners(league_id, season, body)
    except MissingSeasonConfigError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    known = {m.id for m in await repo.list_members(league_id, season)}
    unknown = sorted(
        {mid for mid in saved.model_dump().values() if mid is not None} - known
    )
    if unknown:
        logger.warning(
            "final_winners_unknown_members league=%s season=%s members=%s",
            league_id,
            season,
            unknown,
        )
    return {"data": saved.model_dump(), "unknown_member_ids": unknown}
