"""Season standings pipeline.

Turns one season's raw rows into the full standings view:

    scores + matchups -> records -> ranking -> playoff seeds
                      -> weekly credits -> prize settlement

Every call recomputes from a fresh snapshot; nothing derived is cached or
written back.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from leaguebook.core.errors import ConfigInvariantError, MissingSeasonConfigError
from leaguebook.core.matchups import index_scores
from leaguebook.core.playoffs import effective_divisions, seed_playoffs
from leaguebook.core.prizes import settle_prizes, suggest_special_prizes
from leaguebook.core.ranking import apply_final_placements, assign_ranks, rank_records
from leaguebook.core.records import aggregate_records
from leaguebook.core.weekly import compute_weekly_winners, tally_weekly_credits
from leaguebook.models.league import SeasonSnapshot, WeeklyScore
from leaguebook.models.standings import (
    PlayoffSeed,
    SpecialPrizeSuggestions,
    Standing,
    TeamRecord,
    WeeklyWinner,
)

if TYPE_CHECKING:
    from leaguebook.db.repository import Repository

logger = logging.getLogger(__name__)

# Seasons with no config fall back to this many weeks for completeness.
DEFAULT_COMPLETED_SEASON_WEEKS = 17


class SeasonStandings(BaseModel):
    """Everything the display layer needs for one season view."""

    league_id: str
    season: str
    include_postseason: bool = False
    max_week: int
    standings: list[Standing] = Field(default_factory=list)
    playoff_seeds: list[PlayoffSeed] = Field(default_factory=list)
    weekly_winners: list[WeeklyWinner] = Field(default_factory=list)
    divisions: list[str] = Field(default_factory=list)
    playoff_spots: int = 0
    weeks_scored: int = 0
    is_complete: bool = False
    seeding_error: str | None = None
    suggestions: SpecialPrizeSuggestions | None = None

    def standing_for(self, member_id: str) -> Standing | None:
        return next((s for s in self.standings if s.member_id == member_id), None)


def weeks_scored(scores: list[WeeklyScore]) -> int:
    """Number of distinct weeks with at least one played score."""
    return len({week for _member_id, week in index_scores(scores)})


def is_season_complete(
    snapshot: SeasonSnapshot,
    default_weeks: int = DEFAULT_COMPLETED_SEASON_WEEKS,
) -> bool:
    """A season is complete once every scheduled week has played scores.

    Every member's rows count, withdrawn members included. Seasons with no
    config fall back to *default_weeks*.
    """
    total_weeks = snapshot.config.total_weeks if snapshot.config else default_weeks
    return weeks_scored(snapshot.scores) >= total_weeks


def regular_season_order(snapshot: SeasonSnapshot) -> list[TeamRecord]:
    """Active members' regular-season records in ranked order."""
    if snapshot.config is None:
        raise MissingSeasonConfigError(snapshot.league_id, snapshot.season)
    member_ids = [m.id for m in snapshot.active_members()]
    records = aggregate_records(
        snapshot.scores,
        snapshot.matchups,
        snapshot.config.regular_season_end,
        member_ids=member_ids,
    )
    return rank_records(records[mid] for mid in member_ids)


def compute_playoff_seeds(snapshot: SeasonSnapshot) -> list[PlayoffSeed]:
    """Seed the playoff field from regular-season records.

    Raises:
        MissingSeasonConfigError: If the season has no config.
        ConfigInvariantError: If playoff settings are invalid.
    """
    config = snapshot.config
    if config is None:
        raise MissingSeasonConfigError(snapshot.league_id, snapshot.season)
    config.check_playoff_invariants()
    members = snapshot.active_members()
    return seed_playoffs(
        regular_season_order(snapshot),
        config.playoff_spots,
        divisions=effective_divisions(config, members),
        member_divisions={m.id: m.division for m in members},
    )


def compute_season_standings(
    snapshot: SeasonSnapshot,
    include_postseason: bool = False,
    is_admin: bool = False,
) -> SeasonStandings:
    """Run the full pipeline for one season.

    Args:
        snapshot: Immutable season inputs.
        include_postseason: Count weeks through ``total_weeks`` instead of
            stopping at the regular-season end, and apply admin placements
            to the ranking.
        is_admin: Include advisory special-prize suggestions.

    Raises:
        MissingSeasonConfigError: If the season has no config.
    """
    config = snapshot.config
    if config is None:
        logger.warning(
            "season_not_configured league=%s season=%s", snapshot.league_id, snapshot.season
        )
        raise MissingSeasonConfigError(snapshot.league_id, snapshot.season)

    members = snapshot.active_members()
    member_by_id = {m.id: m for m in members}
    max_week = config.max_week(include_postseason)

    records = aggregate_records(
        snapshot.scores, snapshot.matchups, max_week, member_ids=list(member_by_id)
    )
    ranked = rank_records(records[mid] for mid in member_by_id)

    member_scores = [s for s in snapshot.scores if s.member_id in member_by_id]
    weekly_winners = compute_weekly_winners(member_scores, max_week=max_week)
    credits = tally_weekly_credits(weekly_winners)

    standings: list[Standing] = []
    for record in ranked:
        member = member_by_id[record.member_id]
        weekly_wins, weeks_won = credits.get(record.member_id, (0.0, []))
        standings.append(
            Standing(
                member_id=record.member_id,
                manager_name=member.manager_name,
                team_name=member.team_name,
                division=member.division,
                wins=record.wins,
                losses=record.losses,
                ties=record.ties,
                points_for=record.points_for,
                games_played=record.games_played,
                average_points=record.average_points,
                weekly_wins=weekly_wins,
                weeks_won=sorted(weeks_won),
            )
        )
    assign_ranks(standings)

    divisions = effective_divisions(config, members)
    seeds: list[PlayoffSeed] = []
    seeding_error = None
    try:
        seeds = compute_playoff_seeds(snapshot)
    except ConfigInvariantError as exc:
        seeding_error = str(exc)
        logger.warning(
            "playoff_seeding_skipped league=%s season=%s field=%s reason=%s",
            snapshot.league_id,
            snapshot.season,
            exc.field,
            exc,
        )

    seed_by_id = {s.member_id: s for s in seeds}
    for standing in standings:
        seed = seed_by_id.get(standing.member_id)
        if seed is not None:
            standing.playoff_seed = seed.seed
            standing.is_division_winner = seed.is_division_winner

    if include_postseason:
        standings = apply_final_placements(standings, snapshot.final_winners)

    settle_prizes(
        standings,
        snapshot.final_winners,
        config.prize_structure,
        config.weekly_prize_amount,
    )

    scored = weeks_scored(snapshot.scores)
    result = SeasonStandings(
        league_id=snapshot.league_id,
        season=snapshot.season,
        include_postseason=include_postseason,
        max_week=max_week,
        standings=standings,
        playoff_seeds=seeds,
        weekly_winners=weekly_winners,
        divisions=divisions,
        playoff_spots=config.playoff_spots,
        weeks_scored=scored,
        is_complete=is_season_complete(snapshot),
        seeding_error=seeding_error,
        suggestions=suggest_special_prizes(member_scores) if is_admin else None,
    )
    logger.debug(
        "standings_computed league=%s season=%s members=%d seeds=%d postseason=%s",
        snapshot.league_id,
        snapshot.season,
        len(standings),
        len(seeds),
        include_postseason,
    )
    return result


async def load_snapshot(repo: Repository, league_id: str, season: str) -> SeasonSnapshot:
    """Read every input row for a season once."""
    return SeasonSnapshot(
        league_id=league_id,
        season=season,
        config=await repo.get_season_config(league_id, season),
        members=await repo.list_members(league_id, season),
        scores=await repo.list_weekly_scores(league_id, season),
        matchups=await repo.list_matchups(league_id, season),
        final_winners=await repo.get_final_winners(league_id, season),
    )


async def get_season_standings(
    repo: Repository,
    league_id: str,
    season: str,
    include_postseason: bool = False,
    is_admin: bool = False,
) -> SeasonStandings:
    """Load a season snapshot and compute its standings."""
    snapshot = await load_snapshot(repo, league_id, season)
    return compute_season_standings(
        snapshot, include_postseason=include_postseason, is_admin=is_admin
    )
