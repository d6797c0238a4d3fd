"""League history API endpoint."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from leaguebook.api.deps import RepoDep, SettingsDep
from leaguebook.core.participation import build_history
from leaguebook.core.standings import load_snapshot

router = APIRouter(prefix="/api/leagues", tags=["history"])


@router.get("/{league_id}/history")
async def get_history(league_id: str, repo: RepoDep, settings: SettingsDep) -> dict:
    """Per-manager results across every season the league has run.

    Loads one snapshot per season; seasons are few, so this stays a
    handful of queries per season rather than one per member.
    """
    if await repo.get_league(league_id) is None:
        raise HTTPException(status_code=404, detail=f"League {league_id} not found")
    snapshots = [
        await load_snapshot(repo, league_id, season)
        for season in await repo.list_seasons(league_id)
    ]
    history = build_history(
        league_id, snapshots, default_weeks=settings.leaguebook_completed_season_weeks
    )
    return {"data": history.model_dump(mode="json")}
