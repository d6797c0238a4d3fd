"""Seed a Leaguebook demo league and print its standings.

Usage:
    python scripts/demo_seed.py seed                 # Create league + two demo seasons
    python scripts/demo_seed.py import PATH.yaml     # Import a season snapshot from YAML
    python scripts/demo_seed.py standings SEASON [--postseason]
    python scripts/demo_seed.py history              # Print participation history

Uses a local SQLite database (demo_leaguebook.db).
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

from leaguebook.core.participation import build_history
from leaguebook.core.seeding import (
    generate_demo_season,
    import_missing_seasons,
    load_season_yaml,
)
from leaguebook.core.standings import get_season_standings, load_snapshot
from leaguebook.db.engine import create_engine, create_tables, get_session
from leaguebook.db.repository import Repository
from leaguebook.models.league import FinalWinners

DEMO_DB = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///demo_leaguebook.db")
DEMO_LEAGUE = "Sunday Funday League"


async def _league_id(repo: Repository) -> str:
    from sqlalchemy import select

    from leaguebook.db.models import LeagueRow

    result = await repo.session.execute(select(LeagueRow).where(LeagueRow.name == DEMO_LEAGUE))
    row = result.scalars().first()
    if row is None:
        row = await repo.create_league(DEMO_LEAGUE, current_season="2024")
    return row.id


async def seed() -> None:
    engine = create_engine(DEMO_DB)
    await create_tables(engine)
    async with get_session(engine) as session:
        repo = Repository(session)
        league_id = await _league_id(repo)

        past = generate_demo_season(league_id, season="2023", seed=7)
        past_order = [m.id for m in past.members]
        past.final_winners = FinalWinners(
            first=past_order[2], second=past_order[0], third=past_order[5]
        )
        current = generate_demo_season(
            league_id, season="2024", weeks_played=12, divisions=["East", "West"], seed=42
        )
        imported = await import_missing_seasons(repo, [past, current])
        if imported:
            print(f"Seeded league {league_id} with seasons {', '.join(imported)}")
        else:
            print(f"League {league_id} already has the demo seasons; nothing to do")
    await engine.dispose()


async def import_yaml(path: str) -> None:
    engine = create_engine(DEMO_DB)
    await create_tables(engine)
    snapshot = load_season_yaml(Path(path))
    async with get_session(engine) as session:
        repo = Repository(session)
        if await repo.get_league(snapshot.league_id) is None:
            await repo.create_league(DEMO_LEAGUE, league_id=snapshot.league_id)
        if await import_missing_seasons(repo, [snapshot]):
            print(f"Imported season {snapshot.season}: {len(snapshot.members)} members")
        else:
            print(f"Season {snapshot.season} already exists; nothing imported")
    await engine.dispose()


async def standings(season: str, postseason: bool) -> None:
    engine = create_engine(DEMO_DB)
    async with get_session(engine) as session:
        repo = Repository(session)
        league_id = await _league_id(repo)
        result = await get_season_standings(
            repo, league_id, season, include_postseason=postseason, is_admin=True
        )
    await engine.dispose()

    print(f"Season {season}: weeks 1-{result.max_week} ({result.weeks_scored} scored)")
    for s in result.standings:
        seed = f"#{s.playoff_seed}" if s.playoff_seed else ""
        print(
            f"  {s.rank:>2}. {s.team_name:<20} {s.wins}-{s.losses}-{s.ties}  "
            f"PF {s.points_for:8.2f}  WW {s.weekly_wins:4.2f}  "
            f"${s.total_winnings:7.2f} {seed}"
        )
    if result.seeding_error:
        print(f"  playoff seeding unavailable: {result.seeding_error}")


async def history() -> None:
    engine = create_engine(DEMO_DB)
    async with get_session(engine) as session:
        repo = Repository(session)
        league_id = await _league_id(repo)
        snapshots = [
            await load_snapshot(repo, league_id, s) for s in await repo.list_seasons(league_id)
        ]
    await engine.dispose()

    result = build_history(league_id, snapshots)
    print(f"Completed: {result.completed_seasons}  Ongoing: {result.ongoing_seasons}")
    for manager in result.managers:
        marks = " ".join(f"{r.season}:{r.status.value}" for r in manager.seasons)
        print(f"  {manager.manager_name:<15} titles={manager.championships} {marks}")


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    cmd = sys.argv[1]
    if cmd == "seed":
        asyncio.run(seed())
    elif cmd == "import" and len(sys.argv) > 2:
        asyncio.run(import_yaml(sys.argv[2]))
    elif cmd == "standings" and len(sys.argv) > 2:
        asyncio.run(standings(sys.argv[2], "--postseason" in sys.argv))
    elif cmd == "history":
        asyncio.run(history())
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
