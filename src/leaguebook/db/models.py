"""SQLAlchemy ORM models for the league database.

Tables: leagues, league_seasons, league_members, weekly_scores, matchups.
Matchups deliberately carry no outcome columns: results are derived from
weekly_scores at read time.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.sqlite import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from leaguebook.models.league import (
    FinalWinners,
    Matchup,
    Member,
    PrizeStructure,
    SeasonConfig,
    WeeklyScore,
)


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class LeagueRow(Base):
    __tablename__ = "leagues"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    current_season: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)

    seasons: Mapped[list[SeasonConfigRow]] = relationship(back_populates="league")


class SeasonConfigRow(Base):
    __tablename__ = "league_seasons"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id"), nullable=False)
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    total_weeks: Mapped[int] = mapped_column(Integer, default=17)
    playoff_start_week: Mapped[int] = mapped_column(Integer, default=15)
    playoff_spots: Mapped[int] = mapped_column(Integer, default=6)
    weekly_prize_amount: Mapped[float] = mapped_column(Float, default=0)
    fee_amount: Mapped[float] = mapped_column(Float, default=0)
    draft_food_cost: Mapped[float] = mapped_column(Float, default=0)
    prize_structure: Mapped[dict] = mapped_column(JSON, default=dict)
    divisions: Mapped[list] = mapped_column(JSON, default=list)
    final_winners: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_now, onupdate=_now)

    league: Mapped[LeagueRow] = relationship(back_populates="seasons")

    __table_args__ = (UniqueConstraint("league_id", "season", name="uq_league_season"),)

    def to_model(self) -> SeasonConfig:
        return SeasonConfig(
            league_id=self.league_id,
            season=self.season,
            total_weeks=self.total_weeks,
            playoff_start_week=self.playoff_start_week,
            playoff_spots=self.playoff_spots,
            weekly_prize_amount=self.weekly_prize_amount or 0,
            fee_amount=self.fee_amount or 0,
            draft_food_cost=self.draft_food_cost or 0,
            prize_structure=PrizeStructure.model_validate(self.prize_structure or {}),
            divisions=list(self.divisions or []),
        )

    def final_winners_model(self) -> FinalWinners | None:
        if self.final_winners is None:
            return None
        return FinalWinners.model_validate(self.final_winners)


class MemberRow(Base):
    __tablename__ = "league_members"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id"), nullable=False)
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    manager_name: Mapped[str] = mapped_column(String(100), nullable=False)
    team_name: Mapped[str] = mapped_column(String(100), nullable=False)
    division: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # Join order within the season; ranking ties keep this order.
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)

    __table_args__ = (Index("ix_members_league_season", "league_id", "season"),)

    def to_model(self) -> Member:
        return Member(
            id=self.id,
            league_id=self.league_id,
            season=self.season,
            manager_name=self.manager_name,
            team_name=self.team_name,
            division=self.division,
            is_active=self.is_active,
        )


class WeeklyScoreRow(Base):
    __tablename__ = "weekly_scores"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id"), nullable=False)
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    member_id: Mapped[str] = mapped_column(ForeignKey("league_members.id"), nullable=False)
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    points: Mapped[float] = mapped_column(Float, default=0)
    played: Mapped[bool] = mapped_column(Boolean, default=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_now, onupdate=_now)

    __table_args__ = (
        UniqueConstraint(
            "league_id", "season", "member_id", "week_number", name="uq_weekly_score"
        ),
        Index("ix_weekly_scores_league_season", "league_id", "season"),
    )

    def to_model(self) -> WeeklyScore:
        return WeeklyScore(
            member_id=self.member_id,
            week_number=self.week_number,
            points=self.points,
            played=self.played,
        )


class MatchupRow(Base):
    __tablename__ = "matchups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id"), nullable=False)
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    team1_member_id: Mapped[str] = mapped_column(
        ForeignKey("league_members.id"), nullable=False
    )
    team2_member_id: Mapped[str] = mapped_column(
        ForeignKey("league_members.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_now)

    __table_args__ = (Index("ix_matchups_league_season", "league_id", "season"),)

    def to_model(self) -> Matchup:
        return Matchup(
            week_number=self.week_number,
            team1_member_id=self.team1_member_id,
            team2_member_id=self.team2_member_id,
        )
