"""In-memory application data store for the school sports dashboard."""

import logging
from datetime import date
from typing import Iterable, Optional

from .models import AttendanceRecord, Player, ScheduleEvent, Team, to_date

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for strict-mode store rejections."""


class NotFoundError(StoreError):
    """No record with the given id exists."""


class InvalidForeignKeyError(StoreError):
    """A record references a team or player that does not exist."""


class ValidationError(StoreError):
    """A record is malformed or would break a uniqueness rule."""


class DataStore:
    """Sole owner of the teams, players, schedule and attendance collections.

    By default every operation is total: unknown ids are no-ops and records are
    stored as given. With ``strict=True`` mutations validate first and raise a
    ``StoreError`` subclass, leaving the collections untouched.

    Each mutation builds a new list and swaps it in, so snapshots handed out
    earlier never change underneath their readers.
    """

    def __init__(
        self,
        teams: Optional[Iterable[Team]] = None,
        players: Optional[Iterable[Player]] = None,
        schedule: Optional[Iterable[ScheduleEvent]] = None,
        attendance: Optional[Iterable[AttendanceRecord]] = None,
        strict: bool = False,
    ):
        self.strict = strict
        self._teams: list[Team] = list(teams or [])
        self._players: list[Player] = list(players or [])
        self._schedule: list[ScheduleEvent] = list(schedule or [])
        self._attendance: list[AttendanceRecord] = list(attendance or [])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_teams(self) -> list[Team]:
        return list(self._teams)

    def list_players(self) -> list[Player]:
        return list(self._players)

    def list_schedule(self) -> list[ScheduleEvent]:
        return list(self._schedule)

    def list_attendance(self) -> list[AttendanceRecord]:
        return list(self._attendance)

    def players_by_team(self, team_id: str) -> list[Player]:
        """Players whose ``team_id`` matches, in insertion order."""
        return [p for p in self._players if p.team_id == team_id]

    def events_by_team(self, team_id: str) -> list[ScheduleEvent]:
        """Schedule events whose ``team_id`` matches, in insertion order."""
        return [e for e in self._schedule if e.team_id == team_id]

    def get_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self._teams if t.id == team_id), None)

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self._players if p.id == player_id), None)

    def attendance_for_player(self, player_id: str) -> list[AttendanceRecord]:
        return [a for a in self._attendance if a.player_id == player_id]

    def attendance_on(self, player_id: str, day: date) -> Optional[AttendanceRecord]:
        """Current record for a player on a day.

        When several records share the key, the last one in collection order
        wins.
        """
        key = (player_id, to_date(day))
        current = None
        for record in self._attendance:
            if record.key == key:
                current = record
        return current

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_team(self, team: Team) -> None:
        """Append a team. Used when seeding; the dashboard never creates teams."""
        if self.strict and self.get_team(team.id) is not None:
            raise ValidationError(f"Team id '{team.id}' already exists")
        self._teams = [*self._teams, team]
        logger.debug("Added team %s", team.id)

    def add_player(self, player: Player) -> None:
        """Append a player. The caller supplies the id."""
        if self.strict:
            if self.get_player(player.id) is not None:
                raise ValidationError(f"Player id '{player.id}' already exists")
            self._require_team(player.team_id)
            self._check_attendance_rate(player)
        self._players = [*self._players, player]
        logger.debug("Added player %s to team %s", player.id, player.team_id)

    def update_player(self, player: Player) -> None:
        """Replace the player with the same id."""
        if self.strict:
            if self.get_player(player.id) is None:
                raise NotFoundError(f"Player '{player.id}' not found")
            self._require_team(player.team_id)
            self._check_attendance_rate(player)
        self._players = [player if p.id == player.id else p for p in self._players]
        logger.debug("Updated player %s", player.id)

    def delete_player(self, player_id: str) -> None:
        """Remove the player. Attendance history is kept."""
        if self.strict and self.get_player(player_id) is None:
            raise NotFoundError(f"Player '{player_id}' not found")
        self._players = [p for p in self._players if p.id != player_id]
        logger.debug("Deleted player %s", player_id)

    def update_team(self, team: Team) -> None:
        """Replace the team with the same id."""
        if self.strict and self.get_team(team.id) is None:
            raise NotFoundError(f"Team '{team.id}' not found")
        self._teams = [team if t.id == team.id else t for t in self._teams]
        logger.debug("Updated team %s", team.id)

    def mark_attendance(self, records: Iterable[AttendanceRecord]) -> None:
        """Batch upsert attendance keyed by ``(player_id, date)``.

        Existing records sharing a key with any incoming record are dropped,
        then the whole batch is appended in order.
        """
        records = list(records)
        if self.strict:
            self._check_attendance_batch(records)
        incoming = {r.key for r in records}
        kept = [a for a in self._attendance if a.key not in incoming]
        replaced = len(self._attendance) - len(kept)
        self._attendance = [*kept, *records]
        logger.debug("Marked %d attendance record(s), replaced %d", len(records), replaced)

    def add_event(self, event: ScheduleEvent) -> None:
        """Append a schedule event. The caller supplies the id."""
        if self.strict:
            if any(e.id == event.id for e in self._schedule):
                raise ValidationError(f"Event id '{event.id}' already exists")
            self._require_team(event.team_id)
        self._schedule = [*self._schedule, event]
        logger.debug("Added event %s for team %s", event.id, event.team_id)

    # ------------------------------------------------------------------
    # Strict-mode checks
    # ------------------------------------------------------------------

    def _require_team(self, team_id: str) -> None:
        if self.get_team(team_id) is None:
            raise InvalidForeignKeyError(f"Team '{team_id}' does not exist")

    @staticmethod
    def _check_attendance_rate(player: Player) -> None:
        if not 0 <= player.attendance_rate <= 100:
            raise ValidationError(
                f"attendance_rate must be between 0 and 100, got {player.attendance_rate}"
            )

    def _check_attendance_batch(self, records: list[AttendanceRecord]) -> None:
        seen: set[tuple[str, date]] = set()
        for record in records:
            if record.key in seen:
                raise ValidationError(
                    f"Duplicate attendance for player '{record.player_id}' on {record.date}"
                )
            seen.add(record.key)
            self._require_team(record.team_id)
            if self.get_player(record.player_id) is None:
                raise InvalidForeignKeyError(f"Player '{record.player_id}' does not exist")
