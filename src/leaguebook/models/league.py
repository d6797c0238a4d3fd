"""League input models: members, weekly scores, matchups, season config.

These are the raw rows the standings engine consumes. Nothing derived
(records, winners, ranks) is ever stored on them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from leaguebook.core.errors import ConfigInvariantError

PlacementSlot = Literal["first", "second", "third", "fourth"]
SpecialCategory = Literal["highest_points", "highest_weekly", "lowest_weekly"]

PLACEMENT_SLOTS: tuple[PlacementSlot, ...] = ("first", "second", "third", "fourth")
SPECIAL_CATEGORIES: tuple[SpecialCategory, ...] = (
    "highest_points",
    "highest_weekly",
    "lowest_weekly",
)


class Member(BaseModel):
    """One participant-team within a single league season."""

    id: str
    league_id: str
    season: str
    manager_name: str
    team_name: str
    division: str | None = None
    is_active: bool = True


class WeeklyScore(BaseModel):
    """A member's point total for one week.

    ``played=False`` marks a placeholder row for a week that has not been
    played yet, so a zero is never mistaken for a real score.
    """

    member_id: str
    week_number: int = Field(ge=1)
    points: float = Field(ge=0)
    played: bool = True


class Matchup(BaseModel):
    """Who plays whom in a given week. The outcome is always derived."""

    week_number: int = Field(ge=1)
    team1_member_id: str
    team2_member_id: str

    @model_validator(mode="after")
    def _distinct_teams(self) -> Matchup:
        if self.team1_member_id == self.team2_member_id:
            msg = f"A member cannot play itself (week {self.week_number})"
            raise ValueError(msg)
        return self


class PrizeStructure(BaseModel):
    """Named cash amounts for a season.

    Categories a season never offered stay at 0.
    """

    first: float = Field(default=0, ge=0)
    second: float = Field(default=0, ge=0)
    third: float = Field(default=0, ge=0)
    fourth: float = Field(default=0, ge=0)
    highest_points: float = Field(default=0, ge=0)
    highest_weekly: float = Field(default=0, ge=0)
    lowest_weekly: float = Field(default=0, ge=0)

    def amount(self, category: PlacementSlot | SpecialCategory) -> float:
        return float(getattr(self, category))

    def is_offered(self, category: PlacementSlot | SpecialCategory) -> bool:
        """A zero amount means the prize did not exist that season."""
        return self.amount(category) > 0


class SeasonConfig(BaseModel):
    """Per league-season settings.

    Playoff invariants are not enforced here so that records and ranking
    can still be computed for a misconfigured season; the seeder checks
    them via :meth:`check_playoff_invariants`.
    """

    league_id: str
    season: str
    total_weeks: int = 17
    playoff_start_week: int = 15
    playoff_spots: int = 6
    weekly_prize_amount: float = Field(default=0, ge=0)
    fee_amount: float = Field(default=0, ge=0)
    draft_food_cost: float = Field(default=0, ge=0)
    prize_structure: PrizeStructure = Field(default_factory=PrizeStructure)
    divisions: list[str] = Field(default_factory=list)

    @property
    def regular_season_end(self) -> int:
        """Last regular-season week (weeks before ``playoff_start_week``)."""
        return self.playoff_start_week - 1

    def max_week(self, include_postseason: bool) -> int:
        return self.total_weeks if include_postseason else self.regular_season_end

    def check_playoff_invariants(self) -> None:
        """Raise ConfigInvariantError when playoff math would be meaningless."""
        if not 1 <= self.playoff_start_week <= self.total_weeks:
            msg = (
                f"playoff_start_week={self.playoff_start_week} must be within "
                f"[1, {self.total_weeks}]"
            )
            raise ConfigInvariantError(msg, field="playoff_start_week")
        if self.playoff_spots <= 0:
            msg = f"playoff_spots={self.playoff_spots} must be positive"
            raise ConfigInvariantError(msg, field="playoff_spots")


# Values a brand-new season is created with. Only the CRUD path uses these;
# the engine never substitutes them for a missing config.
DEFAULT_SEASON_CONFIG: dict = {
    "total_weeks": 17,
    "playoff_start_week": 15,
    "playoff_spots": 6,
    "weekly_prize_amount": 0,
    "fee_amount": 150,
    "draft_food_cost": 250,
    "prize_structure": {
        "first": 500,
        "second": 350,
        "third": 200,
        "highest_points": 160,
    },
    "divisions": [],
}


class FinalWinners(BaseModel):
    """Admin-confirmed placements and special-prize winners for a season."""

    first: str | None = None
    second: str | None = None
    third: str | None = None
    fourth: str | None = None
    highest_points: str | None = None
    highest_weekly: str | None = None
    lowest_weekly: str | None = None

    def placements(self) -> list[tuple[PlacementSlot, str]]:
        """Assigned placement slots in order, skipping empty ones."""
        return [
            (slot, member_id)
            for slot in PLACEMENT_SLOTS
            if (member_id := getattr(self, slot)) is not None
        ]

    def placement_of(self, member_id: str) -> PlacementSlot | None:
        for slot, assigned in self.placements():
            if assigned == member_id:
                return slot
        return None

    def has_placements(self) -> bool:
        return bool(self.placements())


class SeasonSnapshot(BaseModel):
    """Everything the engine needs for one season, read once per query."""

    league_id: str
    season: str
    config: SeasonConfig | None = None
    members: list[Member] = Field(default_factory=list)
    scores: list[WeeklyScore] = Field(default_factory=list)
    matchups: list[Matchup] = Field(default_factory=list)
    final_winners: FinalWinners | None = None

    def active_members(self) -> list[Member]:
        return [m for m in self.members if m.is_active]
