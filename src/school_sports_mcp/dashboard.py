"""Derived, read-only dashboard views over the data store."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .models import (
    AttendanceRecord,
    AttendanceStatus,
    DashboardStats,
    Player,
    PlayerStatus,
    ScheduleEvent,
    Team,
    User,
    to_date,
)
from .store import DataStore

RECENT_ATTENDANCE_LIMIT = 5


@dataclass
class ParentView:
    child: Player
    team: Optional[Team]
    recent_attendance: list[AttendanceRecord] = field(default_factory=list)
    next_event: Optional[ScheduleEvent] = None


def compute_stats(store: DataStore, today: Optional[date] = None) -> DashboardStats:
    """Headline numbers for the management dashboard."""
    today = today or date.today()
    return DashboardStats(
        total_players=len(store.list_players()),
        active_teams=len(store.list_teams()),
        attendance_today=sum(
            1
            for a in store.list_attendance()
            if a.date == today and a.status == AttendanceStatus.PRESENT
        ),
        upcoming_events=sum(1 for e in store.list_schedule() if e.date >= today),
    )


def team_attendance(store: DataStore, limit: int = 5) -> list[tuple[str, int]]:
    """Mean stored attendance rate per team, highest first."""
    rows = []
    for team in store.list_teams():
        players = store.players_by_team(team.id)
        total = sum(p.attendance_rate for p in players)
        rows.append((team.name, round(total / (len(players) or 1))))
    rows.sort(key=lambda row: row[1], reverse=True)
    return rows[:limit]


def status_distribution(store: DataStore) -> dict[PlayerStatus, int]:
    counts = {status: 0 for status in PlayerStatus}
    for player in store.list_players():
        counts[player.status] += 1
    return counts


def derived_attendance_rate(store: DataStore, player_id: str) -> Optional[int]:
    """Attendance rate computed from history, or None without records.

    Present and Late both count as attended. The stored
    ``Player.attendance_rate`` is left alone.
    """
    records = store.attendance_for_player(player_id)
    if not records:
        return None
    attended = sum(
        1 for r in records if r.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)
    )
    return round(attended * 100 / len(records))


def sorted_schedule(store: DataStore, team_id: Optional[str] = None) -> list[ScheduleEvent]:
    events = store.events_by_team(team_id) if team_id else store.list_schedule()
    return sorted(events, key=lambda e: e.date)


def parent_view(store: DataStore, user: User, today: Optional[date] = None) -> Optional[ParentView]:
    """Summary of a parent's linked child, or None if no child is linked."""
    if not user.linked_player_id:
        return None
    child = store.get_player(user.linked_player_id)
    if child is None:
        return None
    today = today or date.today()

    history = sorted(
        store.attendance_for_player(child.id), key=lambda a: a.date, reverse=True
    )
    upcoming = [e for e in sorted_schedule(store, child.team_id) if e.date >= today]

    return ParentView(
        child=child,
        team=store.get_team(child.team_id),
        recent_attendance=history[:RECENT_ATTENDANCE_LIMIT],
        next_event=upcoming[0] if upcoming else None,
    )


def default_attendance_sheet(
    store: DataStore, team_id: str, day: Optional[date] = None
) -> list[AttendanceRecord]:
    """One Present record per team player, ready for ``mark_attendance``."""
    day = to_date(day) if day else date.today()
    return [
        AttendanceRecord(
            id=f"{player.id}-{day.isoformat()}",
            player_id=player.id,
            team_id=team_id,
            date=day,
            status=AttendanceStatus.PRESENT,
        )
        for player in store.players_by_team(team_id)
    ]
