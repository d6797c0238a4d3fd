"""Cross-season participation history.

Each member's season is classified as a top-three finish, a playoff
appearance, or plain participation. Only seasons whose every week has
been scored count toward the historical totals; unfinished seasons are
still listed and flagged as ongoing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from leaguebook.core.errors import ConfigInvariantError
from leaguebook.core.standings import (
    DEFAULT_COMPLETED_SEASON_WEEKS,
    compute_playoff_seeds,
    is_season_complete,
    regular_season_order,
)
from leaguebook.models.league import SeasonSnapshot
from leaguebook.models.standings import (
    LeagueHistory,
    ManagerHistory,
    ParticipationRecord,
    ParticipationStatus,
)

logger = logging.getLogger(__name__)

_WINNING_PLACES = {"first": 1, "second": 2, "third": 3}


def classify_season(
    snapshot: SeasonSnapshot,
    default_weeks: int = DEFAULT_COMPLETED_SEASON_WEEKS,
) -> list[ParticipationRecord]:
    """Classify every active member of one season.

    Precedence: a confirmed 1st/2nd/3rd place, then playoff qualification
    on regular-season records, then participation.
    """
    members = snapshot.active_members()
    config = snapshot.config
    playoff_spots = config.playoff_spots if config else None

    if not is_season_complete(snapshot, default_weeks):
        return [
            ParticipationRecord(
                season=snapshot.season,
                manager_name=m.manager_name,
                member_id=m.id,
                team_name=m.team_name,
                status=ParticipationStatus.PARTICIPATED,
                playoff_spots=playoff_spots,
                ongoing=True,
            )
            for m in members
        ]

    positions: dict[str, int] = {}
    playoff_ids: set[str] = set()
    if config is None:
        logger.warning(
            "history_season_not_configured league=%s season=%s",
            snapshot.league_id,
            snapshot.season,
        )
    else:
        positions = {
            r.member_id: i + 1 for i, r in enumerate(regular_season_order(snapshot))
        }
        try:
            playoff_ids = {s.member_id for s in compute_playoff_seeds(snapshot)}
        except ConfigInvariantError as exc:
            logger.warning(
                "history_seeding_skipped league=%s season=%s reason=%s",
                snapshot.league_id,
                snapshot.season,
                exc,
            )

    final_winners = snapshot.final_winners
    records: list[ParticipationRecord] = []
    for m in members:
        status = ParticipationStatus.PARTICIPATED
        place = None
        slot = final_winners.placement_of(m.id) if final_winners else None
        if slot in _WINNING_PLACES:
            status = ParticipationStatus.WINNER
            place = _WINNING_PLACES[slot]
        elif m.id in playoff_ids:
            status = ParticipationStatus.PLAYOFFS
        records.append(
            ParticipationRecord(
                season=snapshot.season,
                manager_name=m.manager_name,
                member_id=m.id,
                team_name=m.team_name,
                status=status,
                place=place,
                position=positions.get(m.id),
                playoff_spots=playoff_spots,
            )
        )
    return records


def build_history(
    league_id: str,
    snapshots: Sequence[SeasonSnapshot],
    default_weeks: int = DEFAULT_COMPLETED_SEASON_WEEKS,
) -> LeagueHistory:
    """Roll every season of a league up into per-manager histories.

    Managers are matched across seasons by manager name. A manager absent
    from a season gets a ``none`` record for it.
    """
    ordered = sorted(snapshots, key=lambda s: s.season)
    seasons = [s.season for s in ordered]
    completed: list[str] = []
    ongoing: list[str] = []
    by_season: dict[str, dict[str, ParticipationRecord]] = {}
    managers: dict[str, ManagerHistory] = {}

    for snapshot in ordered:
        if is_season_complete(snapshot, default_weeks):
            completed.append(snapshot.season)
        else:
            ongoing.append(snapshot.season)
        season_records: dict[str, ParticipationRecord] = {}
        for record in classify_season(snapshot, default_weeks):
            season_records.setdefault(record.manager_name, record)
            history = managers.setdefault(
                record.manager_name, ManagerHistory(manager_name=record.manager_name)
            )
            if record.team_name and record.team_name not in history.team_names:
                history.team_names.append(record.team_name)
        by_season[snapshot.season] = season_records

    for name, history in managers.items():
        for season in seasons:
            record = by_season[season].get(name)
            if record is None:
                record = ParticipationRecord(
                    season=season,
                    manager_name=name,
                    status=ParticipationStatus.NONE,
                    ongoing=season in ongoing,
                )
            history.seasons.append(record)
            if record.ongoing or record.status is ParticipationStatus.NONE:
                continue
            history.completed_seasons += 1
            if record.status is ParticipationStatus.WINNER:
                if record.place == 1:
                    history.championships += 1
                elif record.place == 2:
                    history.runner_ups += 1
                elif record.place == 3:
                    history.third_places += 1
            if record.status in (ParticipationStatus.WINNER, ParticipationStatus.PLAYOFFS):
                history.playoff_appearances += 1

    logger.debug(
        "history_built league=%s seasons=%d completed=%d managers=%d",
        league_id,
        len(seasons),
        len(completed),
        len(managers),
    )
    return LeagueHistory(
        league_id=league_id,
        seasons=seasons,
        completed_seasons=completed,
        ongoing_seasons=ongoing,
        managers=sorted(managers.values(), key=lambda h: h.manager_name),
    )
