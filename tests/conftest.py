"""Pytest configuration and fixtures for school sports MCP tests."""

from datetime import date

import pytest
from pytest_bdd import given, parsers, when

from school_sports_mcp import server
from school_sports_mcp.config import Settings
from school_sports_mcp.models import (
    AttendanceRecord,
    Player,
    ScheduleEvent,
    Team,
    TeamCategory,
)
from school_sports_mcp.sample_data import get_sample_data, load_sample_data
from school_sports_mcp.store import DataStore

# Fixed "today" so relative fixture dates are predictable
TODAY = date(2024, 3, 1)


def make_team(team_id: str, name: str = "", coach_name: str = "Coach") -> Team:
    return Team(team_id, name or f"Team {team_id}", TeamCategory.SPORTS, coach_name, "🏅")


def make_player(player_id: str, team_id: str, **overrides) -> Player:
    fields = dict(
        id=player_id,
        team_id=team_id,
        name=f"Student {player_id}",
        grade="11",
        position="Member",
        contact_parent="077-1234567",
        dob=date(2008, 5, 15),
        joined_date=date(2023, 1, 10),
        attendance_rate=90,
    )
    fields.update(overrides)
    return Player(**fields)


def make_record(player_id: str, day, status: str, team_id: str = "t1") -> AttendanceRecord:
    day = date.fromisoformat(day) if isinstance(day, str) else day
    return AttendanceRecord(f"{player_id}-{day.isoformat()}", player_id, team_id, day, status)


def make_event(event_id: str, team_id: str, day=TODAY, **overrides) -> ScheduleEvent:
    fields = dict(
        id=event_id,
        team_id=team_id,
        title="Practice",
        date=day,
        start_time="15:00",
        end_time="17:00",
        location="School Ground",
    )
    fields.update(overrides)
    return ScheduleEvent(**fields)


@pytest.fixture
def team_factory():
    return make_team


@pytest.fixture
def player_factory():
    return make_player


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def empty_store():
    """Provide a store with no data."""
    return DataStore()


@pytest.fixture
def two_team_store():
    """Provide a store holding teams t1 and t2 and nothing else."""
    return DataStore(teams=[make_team("t1"), make_team("t2")])


@pytest.fixture
def strict_store():
    """Provide a strict store with teams t1, t2 and one player on t1."""
    return DataStore(
        teams=[make_team("t1"), make_team("t2")],
        players=[make_player("p1", "t1")],
        strict=True,
    )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sample_data():
    return get_sample_data(today=TODAY)


@pytest.fixture
def store_with_sample_data(sample_data):
    """Provide a store pre-populated with sample data."""
    store = DataStore()
    load_sample_data(store, sample_data)
    return store


@pytest.fixture
def mcp_store(monkeypatch):
    """Point the MCP server at an isolated sample store without an API key.

    The server works against the real current date, so fixtures are built
    relative to it rather than to TODAY.
    """
    data = get_sample_data()
    store = DataStore()
    load_sample_data(store, data)
    monkeypatch.setattr(server, "_store", store)
    monkeypatch.setattr(server, "_users", data["users"])
    monkeypatch.setattr(server, "_settings", Settings())
    monkeypatch.setattr(server, "_insight_in_flight", False)
    return store


# ---------------------------------------------------------------------------
# Shared BDD steps
# ---------------------------------------------------------------------------


@pytest.fixture
def context():
    """Shared context for test steps."""
    return {}


@given(parsers.parse('a store with teams "{first}" and "{second}"'))
def store_with_two_teams(context, first, second):
    """Start from a store holding two empty teams."""
    context["store"] = DataStore(teams=[make_team(first), make_team(second)])


@given(parsers.parse('player "{player_id}" is on team "{team_id}"'))
def player_on_team(context, player_id, team_id):
    """Seed a player on a team."""
    context["store"].add_player(make_player(player_id, team_id))


@given("the store is populated with sample data")
def store_populated(store_with_sample_data, sample_data, context):
    """Ensure the store is populated."""
    context["store"] = store_with_sample_data
    context["users"] = {u.id: u for u in sample_data["users"]}


@when(parsers.parse('I delete player "{player_id}"'))
def delete_player(context, player_id):
    """Delete a player, remembering the collection beforehand."""
    context["players_before"] = context["store"].list_players()
    context["store"].delete_player(player_id)
