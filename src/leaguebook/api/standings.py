"""Standings, weekly-winner and playoff-seed API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from leaguebook.api.deps import IsAdminDep, RepoDep
from leaguebook.core.errors import MissingSeasonConfigError
from leaguebook.core.ranking import division_tables
from leaguebook.core.standings import (
    SeasonStandings,
    compute_playoff_seeds,
    get_season_standings,
    load_snapshot,
)
from leaguebook.db.repository import Repository

router = APIRouter(prefix="/api/leagues", tags=["standings"])


async def _load(
    repo: Repository,
    league_id: str,
    season: str,
    postseason: bool,
    is_admin: bool,
) -> SeasonStandings:
    if await repo.get_league(league_id) is None:
        raise HTTPException(status_code=404, detail=f"League {league_id} not found")
    try:
        return await get_season_standings(
            repo, league_id, season, include_postseason=postseason, is_admin=is_admin
        )
    except MissingSeasonConfigError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/{league_id}/seasons/{season}/standings")
async def get_standings(
    league_id: str,
    season: str,
    repo: RepoDep,
    is_admin: IsAdminDep,
    postseason: bool = False,
) -> dict:
    """Ranked standings with playoff seeds and winnings.

    ``postseason=true`` counts every week and applies confirmed final
    placements; playoff seeds always come from the regular season.
    """
    result = await _load(repo, league_id, season, postseason, is_admin)
    data = result.model_dump(mode="json")
    if result.divisions:
        data["division_tables"] = {
            division: [
                {"division_rank": rank, "member_id": s.member_id}
                for rank, s in rows
            ]
            for division, rows in division_tables(result.standings, result.divisions).items()
        }
    return {"data": data}


@router.get("/{league_id}/seasons/{season}/weekly-winners")
async def get_weekly_winners(
    league_id: str,
    season: str,
    repo: RepoDep,
    postseason: bool = True,
) -> dict:
    """Every week's high scorer(s), with their share of the weekly prize."""
    result = await _load(repo, league_id, season, postseason, is_admin=False)
    return {"data": [w.model_dump() for w in result.weekly_winners]}


@router.get("/{league_id}/seasons/{season}/playoff-seeds")
async def get_playoff_seeds(league_id: str, season: str, repo: RepoDep) -> dict:
    """The regular-season playoff field.

    Unlike the standings view this does not degrade: invalid playoff settings
    surface as a 422 naming the offending field.
    """
    if await repo.get_league(league_id) is None:
        raise HTTPException(status_code=404, detail=f"League {league_id} not found")
    snapshot = await load_snapshot(repo, league_id, season)
    try:
        seeds = compute_playoff_seeds(snapshot)
    except MissingSeasonConfigError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"data": [s.model_dump() for s in seeds]}
