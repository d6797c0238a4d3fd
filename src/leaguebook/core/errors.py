"""Error taxonomy for the standings engine.

Only conditions that make an answer meaningless are raised. Incomplete
score data and final-winner overrides that point at unknown members are
handled in place (zero contribution / skipped slot) and never surface
as exceptions.
"""

from __future__ import annotations


class StandingsError(ValueError):
    """Base class for engine errors."""


class MissingSeasonConfigError(StandingsError):
    """No SeasonConfig exists for the requested league season."""

    def __init__(self, league_id: str, season: str) -> None:
        self.league_id = league_id
        self.season = season
        super().__init__(f"Season {season} of league {league_id} is not configured")


class ConfigInvariantError(StandingsError):
    """A SeasonConfig value makes playoff or prize math impossible."""

    def __init__(self, message: str, field: str) -> None:
        self.field = field
        super().__init__(message)
