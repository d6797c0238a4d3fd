"""Repository pattern for database access.

Wraps SQLAlchemy async sessions and doubles as the standings engine's
score store: every read returns engine models, never ORM rows. Weekly
scores and final winners are last-write-wins upserts.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leaguebook.core.errors import MissingSeasonConfigError
from leaguebook.db.models import (
    LeagueRow,
    MatchupRow,
    MemberRow,
    SeasonConfigRow,
    WeeklyScoreRow,
)
from leaguebook.models.league import (
    DEFAULT_SEASON_CONFIG,
    FinalWinners,
    Matchup,
    Member,
    SeasonConfig,
    WeeklyScore,
)

logger = logging.getLogger(__name__)


class Repository:
    """Async repository for all database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Leagues ---

    async def create_league(
        self,
        name: str,
        current_season: str | None = None,
        league_id: str | None = None,
    ) -> LeagueRow:
        row = LeagueRow(name=name, current_season=current_season)
        if league_id is not None:
            row.id = league_id
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_league(self, league_id: str) -> LeagueRow | None:
        return await self.session.get(LeagueRow, league_id)

    async def list_seasons(self, league_id: str) -> list[str]:
        """All seasons a league has members or config for, sorted."""
        member_seasons = await self.session.execute(
            select(MemberRow.season).where(MemberRow.league_id == league_id).distinct()
        )
        config_seasons = await self.session.execute(
            select(SeasonConfigRow.season).where(SeasonConfigRow.league_id == league_id)
        )
        return sorted(set(member_seasons.scalars()) | set(config_seasons.scalars()))

    # --- Season config ---

    async def _get_season_row(self, league_id: str, season: str) -> SeasonConfigRow | None:
        stmt = select(SeasonConfigRow).where(
            SeasonConfigRow.league_id == league_id,
            SeasonConfigRow.season == season,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_season_config(self, league_id: str, season: str) -> SeasonConfig | None:
        row = await self._get_season_row(league_id, season)
        return row.to_model() if row is not None else None

    async def upsert_season_config(self, config: SeasonConfig) -> SeasonConfig:
        """Create or replace a season's settings. Final winners are untouched."""
        row = await self._get_season_row(config.league_id, config.season)
        if row is None:
            row = SeasonConfigRow(league_id=config.league_id, season=config.season)
            self.session.add(row)
        row.total_weeks = config.total_weeks
        row.playoff_start_week = config.playoff_start_week
        row.playoff_spots = config.playoff_spots
        row.weekly_prize_amount = config.weekly_prize_amount
        row.fee_amount = config.fee_amount
        row.draft_food_cost = config.draft_food_cost
        row.prize_structure = config.prize_structure.model_dump()
        row.divisions = list(config.divisions)
        await self.session.flush()
        return row.to_model()

    async def create_default_season(self, league_id: str, season: str) -> SeasonConfig:
        """Create a season with the stock settings new leagues start from."""
        config = SeasonConfig(league_id=league_id, season=season, **DEFAULT_SEASON_CONFIG)
        logger.info("season_created_with_defaults league=%s season=%s", league_id, season)
        return await self.upsert_season_config(config)

    # --- Final winners ---

    async def get_final_winners(self, league_id: str, season: str) -> FinalWinners | None:
        row = await self._get_season_row(league_id, season)
        return row.final_winners_model() if row is not None else None

    async def set_final_winners(
        self, league_id: str, season: str, winners: FinalWinners
    ) -> FinalWinners:
        """Persist admin-confirmed winners. The season must be configured."""
        row = await self._get_season_row(league_id, season)
        if row is None:
            raise MissingSeasonConfigError(league_id, season)
        row.final_winners = winners.model_dump()
        await self.session.flush()
        logger.info(
            "final_winners_saved league=%s season=%s placements=%d",
            league_id,
            season,
            len(winners.placements()),
        )
        return winners

    # --- Members ---

    async def add_member(
        self,
        league_id: str,
        season: str,
        manager_name: str,
        team_name: str,
        division: str | None = None,
        member_id: str | None = None,
    ) -> Member:
        count = await self.session.execute(
            select(func.count())
            .select_from(MemberRow)
            .where(MemberRow.league_id == league_id, MemberRow.season == season)
        )
        row = MemberRow(
            league_id=league_id,
            season=season,
            sort_order=count.scalar_one(),
            manager_name=manager_name,
            team_name=team_name,
            division=division,
        )
        if member_id is not None:
            row.id = member_id
        self.session.add(row)
        await self.session.flush()
        return row.to_model()

    async def withdraw_member(self, member_id: str) -> None:
        """Logically remove a member; their rows stay for history."""
        row = await self.session.get(MemberRow, member_id)
        if row is not None:
            row.is_active = False
            await self.session.flush()

    async def list_members(
        self, league_id: str, season: str, include_inactive: bool = False
    ) -> list[Member]:
        stmt = (
            select(MemberRow)
            .where(MemberRow.league_id == league_id, MemberRow.season == season)
            .order_by(MemberRow.sort_order)
        )
        if not include_inactive:
            stmt = stmt.where(MemberRow.is_active.is_(True))
        result = await self.session.execute(stmt)
        return [row.to_model() for row in result.scalars().all()]

    # --- Weekly scores ---

    async def upsert_weekly_score(
        self,
        league_id: str,
        season: str,
        member_id: str,
        week_number: int,
        points: float,
        played: bool = True,
    ) -> WeeklyScore:
        """Insert or overwrite one member's score for a week."""
        score = WeeklyScore(
            member_id=member_id, week_number=week_number, points=points, played=played
        )
        stmt = select(WeeklyScoreRow).where(
            WeeklyScoreRow.league_id == league_id,
            WeeklyScoreRow.season == season,
            WeeklyScoreRow.member_id == member_id,
            WeeklyScoreRow.week_number == week_number,
        )
        row = (await self.session.execute(stmt)).scalar_one_or_none()
        if row is None:
            row = WeeklyScoreRow(
                league_id=league_id,
                season=season,
                member_id=member_id,
                week_number=week_number,
            )
            self.session.add(row)
        row.points = score.points
        row.played = score.played
        await self.session.flush()
        return row.to_model()

    async def list_weekly_scores(self, league_id: str, season: str) -> list[WeeklyScore]:
        stmt = (
            select(WeeklyScoreRow)
            .where(WeeklyScoreRow.league_id == league_id, WeeklyScoreRow.season == season)
            .order_by(WeeklyScoreRow.week_number, WeeklyScoreRow.updated_at)
        )
        result = await self.session.execute(stmt)
        return [row.to_model() for row in result.scalars().all()]

    # --- Matchups ---

    async def add_matchup(
        self,
        league_id: str,
        season: str,
        week_number: int,
        team1_member_id: str,
        team2_member_id: str,
    ) -> Matchup:
        """Schedule a pairing. Raises ValueError if a member plays itself."""
        matchup = Matchup(
            week_number=week_number,
            team1_member_id=team1_member_id,
            team2_member_id=team2_member_id,
        )
        row = MatchupRow(
            league_id=league_id,
            season=season,
            week_number=matchup.week_number,
            team1_member_id=matchup.team1_member_id,
            team2_member_id=matchup.team2_member_id,
        )
        self.session.add(row)
        await self.session.flush()
        return matchup

    async def list_matchups(self, league_id: str, season: str) -> list[Matchup]:
        stmt = (
            select(MatchupRow)
            .where(MatchupRow.league_id == league_id, MatchupRow.season == season)
            .order_by(MatchupRow.week_number, MatchupRow.created_at)
        )
        result = await self.session.execute(stmt)
        return [row.to_model() for row in result.scalars().all()]
