"""Sample fixtures for seeding the school sports data store."""

import random
from datetime import date, timedelta
from typing import Any, Optional

from .models import (
    AttendanceRecord,
    AttendanceStatus,
    EventType,
    Player,
    PlayerStatus,
    ScheduleEvent,
    Team,
    TeamCategory,
    User,
    UserRole,
)
from .store import DataStore

DEFAULT_SEED = 2023
PLAYERS_PER_TEAM = 12


def _sample_teams() -> list[Team]:
    return [
        Team("t1", "Rugby", TeamCategory.SPORTS, "Mr. Silva", "🏉", date(2020, 1, 15)),
        Team("t2", "Cricket", TeamCategory.SPORTS, "Mr. Perera", "🏏", date(2019, 5, 20)),
        Team("t3", "Football", TeamCategory.SPORTS, "Mr. Fernando", "⚽", date(2021, 3, 10)),
        Team("t4", "Kung Fu", TeamCategory.SPORTS, "Master Lee", "🥋", date(2018, 11, 1)),
        Team("t5", "Badminton", TeamCategory.SPORTS, "Ms. Jayasinghe", "🏸", date(2022, 2, 14)),
        Team("t6", "Swimming", TeamCategory.SPORTS, "Mr. Dias", "🏊", date(2020, 8, 30)),
        Team("t7", "Chess", TeamCategory.ACTIVITY, "Mr. Karunaratne", "♟️", date(2015, 6, 1)),
        Team("t8", "Band", TeamCategory.ACTIVITY, "Mr. Mendis", "🎺", date(2017, 9, 15)),
        Team("t9", "Scouts", TeamCategory.ACTIVITY, "Mr. Alwis", "⚜️", date(2016, 4, 22)),
    ]


def _sample_players(teams: list[Team], rng: random.Random) -> list[Player]:
    players = []
    for team in teams:
        for i in range(1, PLAYERS_PER_TEAM + 1):
            captain = i == 1
            players.append(
                Player(
                    id=f"p-{team.id}-{i}",
                    team_id=team.id,
                    name=f"Student {team.id.upper()}-{i}",
                    grade=str(10 + i % 3),
                    position="Captain" if captain else "Member",
                    contact_parent=f"077-{rng.randint(1000000, 9999999)}",
                    dob=date(2008, 5, 15),
                    joined_date=date(2023, 1, 10),
                    emergency_contact_name="Parent Name",
                    emergency_contact_phone=f"071-{rng.randint(1000000, 9999999)}",
                    performance_notes=(
                        "Excellent leadership skills. Consistently improves time."
                        if captain
                        else ""
                    ),
                    attendance_rate=rng.randint(70, 99),
                    status=PlayerStatus.INJURED if rng.random() > 0.9 else PlayerStatus.ACTIVE,
                )
            )
    return players


def get_sample_data(today: Optional[date] = None, seed: int = DEFAULT_SEED) -> dict[str, Any]:
    """Get sample school sports data for demo purposes.

    Schedule and attendance dates are relative to ``today``; random fields
    come from a seeded generator so repeated calls give identical fixtures.
    """
    today = today or date.today()
    rng = random.Random(seed)

    teams = _sample_teams()
    players = _sample_players(teams, rng)

    # The parent account follows the first player of the first team
    sample_player_id = players[0].id

    users = [
        User("u1", "Principal Mrs. Wickramasinghe", UserRole.PRINCIPAL,
             avatar_url="https://picsum.photos/100/100?random=1"),
        User("u2", "Master In-Charge Mr. Gamage", UserRole.MASTER_IN_CHARGE,
             avatar_url="https://picsum.photos/100/100?random=2"),
        User("u3", "Coach Silva (Rugby)", UserRole.COACH, assigned_team_id="t1",
             avatar_url="https://picsum.photos/100/100?random=3"),
        User("u4", "Coach Perera (Cricket)", UserRole.COACH, assigned_team_id="t2",
             avatar_url="https://picsum.photos/100/100?random=4"),
        User("u5", "Mr. & Mrs. Perera (Parents)", UserRole.PARENT, linked_player_id=sample_player_id,
             avatar_url="https://picsum.photos/100/100?random=6"),
        User("u6", "System Admin", UserRole.ADMIN,
             avatar_url="https://picsum.photos/100/100?random=5"),
    ]

    schedule = [
        ScheduleEvent("e1", "t1", "Morning Practice", today,
                      "06:00", "08:00", "School Ground", EventType.PRACTICE),
        ScheduleEvent("e2", "t2", "Net Practice", today + timedelta(days=1),
                      "15:00", "17:30", "Main Pitch", EventType.PRACTICE),
        ScheduleEvent("e3", "t3", "Friendly Match", today + timedelta(days=2),
                      "16:00", "18:00", "City Stadium", EventType.MATCH),
    ]

    attendance = [
        AttendanceRecord("a1", sample_player_id, "t1", today - timedelta(days=2), AttendanceStatus.PRESENT),
        AttendanceRecord("a2", sample_player_id, "t1", today - timedelta(days=5), AttendanceStatus.PRESENT),
        AttendanceRecord("a3", sample_player_id, "t1", today - timedelta(days=7), AttendanceStatus.ABSENT),
    ]

    return {
        "teams": teams,
        "players": players,
        "users": users,
        "schedule": schedule,
        "attendance": attendance,
    }


def load_sample_data(store: DataStore, data: Optional[dict[str, Any]] = None) -> dict[str, int]:
    """Load sample data into the store and return per-collection counts."""
    data = data or get_sample_data()

    # Load in order respecting dependencies
    for team in data["teams"]:
        store.add_team(team)

    for player in data["players"]:
        store.add_player(player)

    for event in data["schedule"]:
        store.add_event(event)

    store.mark_attendance(data["attendance"])

    return {
        "teams": len(data["teams"]),
        "players": len(data["players"]),
        "schedule": len(data["schedule"]),
        "attendance": len(data["attendance"]),
    }


def build_sample_store(strict: bool = False, today: Optional[date] = None) -> DataStore:
    """Return a fresh store seeded with the sample fixtures."""
    store = DataStore(strict=strict)
    load_sample_data(store, get_sample_data(today=today))
    return store
