"""Derived standings models. Recomputed on every query, never persisted."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field

from leaguebook.models.league import PlacementSlot, SpecialCategory


class MatchupOutcome(StrEnum):
    """Result of a head-to-head pairing, derived from the two scores."""

    A_WINS = "a_wins"
    B_WINS = "b_wins"
    TIE = "tie"
    PENDING = "pending"


class TeamRecord(BaseModel):
    """Cumulative record for one member up to a week cutoff."""

    member_id: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0
    games_played: int = 0

    @property
    def average_points(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.points_for / self.games_played


class PlayoffSeed(BaseModel):
    member_id: str
    seed: int = Field(ge=1)
    is_division_winner: bool = False
    division: str | None = None


class WeeklyWinner(BaseModel):
    """One co-winner of a week's high score."""

    week: int
    member_id: str
    points: float
    share: float


class Standing(BaseModel):
    """A member's full row in the standings table."""

    member_id: str
    manager_name: str = ""
    team_name: str = ""
    division: str | None = None
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0
    games_played: int = 0
    average_points: float = 0
    rank: int = 0
    weekly_wins: float = 0
    weeks_won: list[int] = Field(default_factory=list)
    playoff_seed: int | None = None
    is_division_winner: bool = False
    placement: PlacementSlot | None = None
    placement_prize: float = 0
    special_prizes: dict[SpecialCategory, float] = Field(default_factory=dict)
    weekly_prize_total: float = 0
    total_winnings: float = 0

    @computed_field
    @property
    def is_playoff_team(self) -> bool:
        return self.playoff_seed is not None


class SpecialPrizeSuggestion(BaseModel):
    member_id: str
    value: float
    week: int | None = None


class SpecialPrizeSuggestions(BaseModel):
    """Advisory picks for admins. Never written to FinalWinners automatically."""

    highest_points: SpecialPrizeSuggestion | None = None
    highest_weekly: SpecialPrizeSuggestion | None = None
    lowest_weekly: SpecialPrizeSuggestion | None = None
    fourth_by_points: SpecialPrizeSuggestion | None = None


class ParticipationStatus(StrEnum):
    WINNER = "winner"
    PLAYOFFS = "playoffs"
    PARTICIPATED = "participated"
    NONE = "none"


class ParticipationRecord(BaseModel):
    """A member's outcome in one season, for history views."""

    season: str
    manager_name: str
    member_id: str | None = None
    team_name: str | None = None
    status: ParticipationStatus
    place: int | None = None
    position: int | None = None
    playoff_spots: int | None = None
    ongoing: bool = False


class ManagerHistory(BaseModel):
    manager_name: str
    team_names: list[str] = Field(default_factory=list)
    seasons: list[ParticipationRecord] = Field(default_factory=list)
    championships: int = 0
    runner_ups: int = 0
    third_places: int = 0
    playoff_appearances: int = 0
    completed_seasons: int = 0


class LeagueHistory(BaseModel):
    league_id: str
    seasons: list[str] = Field(default_factory=list)
    completed_seasons: list[str] = Field(default_factory=list)
    ongoing_seasons: list[str] = Field(default_factory=list)
    managers: list[ManagerHistory] = Field(default_factory=list)
