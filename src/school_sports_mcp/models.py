"""Data models for the school sports and activity dashboard."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


class TeamCategory(str, Enum):
    SPORTS = "Sports"
    ACTIVITY = "Activity"


class PlayerStatus(str, Enum):
    ACTIVE = "Active"
    INJURED = "Injured"
    INACTIVE = "Inactive"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    EXCUSED = "Excused"


class EventType(str, Enum):
    PRACTICE = "Practice"
    MATCH = "Match"
    MEETING = "Meeting"


class UserRole(str, Enum):
    PRINCIPAL = "Principal"
    MASTER_IN_CHARGE = "Master In-Charge"
    COACH = "Coach"
    ADMIN = "Admin"
    PARENT = "Parent"


DateLike = Union[date, str]


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO ``YYYY-MM-DD`` string to a ``date``."""
    # datetime subclasses date, so check it first to drop the time
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


@dataclass
class Team:
    id: str
    name: str
    category: TeamCategory
    coach_name: str
    icon: str = ""
    coach_joined_date: Optional[date] = None
    next_practice: Optional[str] = None

    def __post_init__(self) -> None:
        self.category = TeamCategory(self.category)
        if self.coach_joined_date:
            self.coach_joined_date = to_date(self.coach_joined_date)
        else:
            self.coach_joined_date = None


@dataclass
class Player:
    id: str
    team_id: str
    name: str
    grade: str
    position: str
    contact_parent: str
    dob: date
    joined_date: date
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    attendance_rate: int = 100  # 0-100, display only
    status: PlayerStatus = PlayerStatus.ACTIVE
    performance_notes: Optional[str] = None
    medical_notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.dob = to_date(self.dob)
        self.joined_date = to_date(self.joined_date)
        self.status = PlayerStatus(self.status)


@dataclass
class AttendanceRecord:
    id: str
    player_id: str
    team_id: str
    date: date
    status: AttendanceStatus

    def __post_init__(self) -> None:
        self.date = to_date(self.date)
        self.status = AttendanceStatus(self.status)

    @property
    def key(self) -> tuple[str, date]:
        """Upsert key: one current record per player per day."""
        return (self.player_id, self.date)


@dataclass
class ScheduleEvent:
    id: str
    team_id: str
    title: str
    date: date
    start_time: str  # "HH:MM"
    end_time: str
    location: str
    type: EventType = EventType.PRACTICE

    def __post_init__(self) -> None:
        self.date = to_date(self.date)
        self.type = EventType(self.type)


@dataclass
class User:
    id: str
    name: str
    role: UserRole
    assigned_team_id: Optional[str] = None  # coaches
    linked_player_id: Optional[str] = None  # parents
    avatar_url: Optional[str] = None

    def __post_init__(self) -> None:
        self.role = UserRole(self.role)


@dataclass
class DashboardStats:
    total_players: int
    active_teams: int
    attendance_today: int
    upcoming_events: int
