"""Season import/export and demo league generation.

Supports two flows:
1. Load a season snapshot from YAML (hand-authored or exported history)
2. Generate a deterministic demo season (no external data needed)
"""

from __future__ import annotations

import logging
import random
import uuid
from pathlib import Path

import yaml

from leaguebook.db.repository import Repository
from leaguebook.models.league import (
    Matchup,
    Member,
    PrizeStructure,
    SeasonConfig,
    SeasonSnapshot,
    WeeklyScore,
)

logger = logging.getLogger(__name__)

DEMO_MANAGERS = [
    ("Alex Rivera", "Gridiron Ghosts"),
    ("Sam Chen", "Blitz Brigade"),
    ("Jordan Lee", "Red Zone Rebels"),
    ("Taylor Brooks", "Hail Mary Heroes"),
    ("Morgan Diaz", "Fourth and Long"),
    ("Casey Patel", "Pocket Passers"),
    ("Riley Kim", "End Zone Elite"),
    ("Jamie Fox", "Sack Masters"),
    ("Drew Walsh", "Two Minute Drill"),
    ("Quinn Ortiz", "Play Action"),
]


def round_robin_weeks(member_ids: list[str], weeks: int) -> list[Matchup]:
    """Pair members week by week with the circle method, repeating as needed."""
    ids = list(member_ids)
    if len(ids) < 2:
        return []
    if len(ids) % 2:
        ids.append("")
    n = len(ids)
    rotating = ids[1:]
    matchups: list[Matchup] = []
    for week in range(1, weeks + 1):
        lineup = [ids[0], *rotating]
        for i in range(n // 2):
            a, b = lineup[i], lineup[n - 1 - i]
            if a and b:
                matchups.append(Matchup(week_number=week, team1_member_id=a, team2_member_id=b))
        rotating = [rotating[-1], *rotating[:-1]]
    return matchups


def generate_demo_season(
    league_id: str,
    season: str = "2024",
    num_members: int = 10,
    weeks_played: int = 17,
    divisions: list[str] | None = None,
    seed: int = 42,
) -> SeasonSnapshot:
    """Build a complete, deterministic season snapshot for demos and tests."""
    rng = random.Random(seed)
    divisions = divisions or []
    members: list[Member] = []
    for idx in range(min(num_members, len(DEMO_MANAGERS))):
        manager, team = DEMO_MANAGERS[idx]
        members.append(
            Member(
                id=str(uuid.uuid5(uuid.NAMESPACE_DNS, f"member-{league_id}-{season}-{idx}")),
                league_id=league_id,
                season=season,
                manager_name=manager,
                team_name=team,
                division=divisions[idx % len(divisions)] if divisions else None,
            )
        )

    config = SeasonConfig(
        league_id=league_id,
        season=season,
        weekly_prize_amount=20,
        fee_amount=150,
        prize_structure=PrizeStructure(first=500, second=350, third=200, highest_points=160),
        divisions=divisions,
    )
    member_ids = [m.id for m in members]
    scores = [
        WeeklyScore(
            member_id=mid,
            week_number=week,
            points=round(rng.uniform(70, 160), 2),
        )
        for week in range(1, weeks_played + 1)
        for mid in member_ids
    ]
    return SeasonSnapshot(
        league_id=league_id,
        season=season,
        config=config,
        members=members,
        scores=scores,
        matchups=round_robin_weeks(member_ids, config.total_weeks),
    )


def save_season_yaml(snapshot: SeasonSnapshot, path: Path) -> None:
    """Save a season snapshot to YAML."""
    data = snapshot.model_dump(mode="json")
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_season_yaml(path: Path) -> SeasonSnapshot:
    """Load a season snapshot from YAML."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return SeasonSnapshot.model_validate(data)


async def import_snapshot(repo: Repository, snapshot: SeasonSnapshot) -> None:
    """Write a snapshot's rows into the database, keeping member ids."""
    if snapshot.config is not None:
        await repo.upsert_season_config(snapshot.config)
    for m in snapshot.members:
        await repo.add_member(
            snapshot.league_id,
            snapshot.season,
            m.manager_name,
            m.team_name,
            division=m.division,
            member_id=m.id,
        )
        if not m.is_active:
            await repo.withdraw_member(m.id)
    for s in snapshot.scores:
        await repo.upsert_weekly_score(
            snapshot.league_id,
            snapshot.season,
            s.member_id,
            s.week_number,
            s.points,
            played=s.played,
        )
    for mu in snapshot.matchups:
        await repo.add_matchup(
            snapshot.league_id,
            snapshot.season,
            mu.week_number,
            mu.team1_member_id,
            mu.team2_member_id,
        )
    if snapshot.final_winners is not None:
        await repo.set_final_winners(
            snapshot.league_id, snapshot.season, snapshot.final_winners
        )



async def import_missing_seasons(
    repo: Repository, snapshots: list[SeasonSnapshot]
) -> list[str]:
    """Import only the seasons the league does not have yet.

    Returns the seasons that were imported. Re-running an import over a
    populated database is a no-op instead of a duplicate-key failure.
    """
    imported: list[str] = []
    for snapshot in snapshots:
        existing = await repo.list_seasons(snapshot.league_id)
        if snapshot.season in existing:
            logger.info(
                "season_import_skipped league=%s season=%s reason=exists",
                snapshot.league_id,
                snapshot.season,
            )
            continue
        await import_snapshot(repo, snapshot)
        imported.append(snapshot.season)
    return imported
