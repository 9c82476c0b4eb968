"""MCP Server for the school sports and activity dashboard."""

import asyncio
import dataclasses
import logging
import sys
import uuid
from datetime import date
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from . import access, dashboard
from .config import Settings
from .insights import summarize
from .models import Player, ScheduleEvent, User, UserRole, to_date
from .roster_io import acknowledge_import, export_filename, export_roster_csv
from .sample_data import get_sample_data, load_sample_data
from .store import DataStore, StoreError

logger = logging.getLogger(__name__)

# Initialize the server
mcp = FastMCP("school-sports")

# Store and demo users (lazy initialization)
_store: Optional[DataStore] = None
_users: list[User] = []
_settings: Optional[Settings] = None
_insight_in_flight = False


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_store() -> DataStore:
    """Get or create the seeded data store."""
    global _store, _users
    if _store is None:
        data = get_sample_data()
        _store = DataStore(strict=get_settings().strict_store)
        load_sample_data(_store, data)
        _users = data["users"]
    return _store


def set_store(store: DataStore, users: Optional[list[User]] = None) -> None:
    """Swap in a store (and its users), e.g. an isolated one for tests."""
    global _store, _users
    _store = store
    _users = list(users or [])


def set_settings(settings: Optional[Settings]) -> None:
    global _settings
    _settings = settings


def _text(output: str) -> list[TextContent]:
    return [TextContent(type="text", text=output)]


def _find_user(user_id: str) -> Optional[User]:
    get_store()
    return next((u for u in _users if u.id == user_id), None)


def _format_player(player: Player) -> str:
    line = f"- **{player.name}** ({player.id}) Grade {player.grade}, {player.position}"
    line += f", {player.status.value}, Attendance {player.attendance_rate}%\n"
    return line


def _format_event(event: ScheduleEvent, team_name: Optional[str] = None) -> str:
    line = f"- **{event.date.isoformat()}** {event.start_time}-{event.end_time}: {event.title}"
    line += f" ({event.type.value}) @ {event.location}"
    if team_name:
        line += f" [{team_name}]"
    return line + "\n"


# ============================================================================
# User & Team Tools
# ============================================================================


@mcp.tool()
async def list_users() -> list[TextContent]:
    """List the demo accounts that can act on the dashboard."""
    get_store()
    output = f"Found {len(_users)} user(s):\n\n"
    for user in _users:
        output += f"- **{user.name}** ({user.id}) {user.role.value}\n"
    return _text(output)


@mcp.tool()
async def list_teams(user_id: str) -> list[TextContent]:
    """List the teams visible to a user.

    Args:
        user_id: The acting user's identifier
    """
    user = _find_user(user_id)
    if user is None:
        return _text(f"User with ID '{user_id}' not found")

    teams = access.visible_teams(user, get_store().list_teams())
    if not teams:
        return _text("No teams available for this account")

    output = f"Found {len(teams)} team(s):\n\n"
    for team in teams:
        output += f"- {team.icon} **{team.name}** ({team.id})\n"
        output += f"  Category: {team.category.value}, Coach: {team.coach_name}\n"
    output += f"\nNavigation: {', '.join(access.navigation_for(user))}\n"
    return _text(output)


@mcp.tool()
async def get_team_roster(team_id: str, user_id: str) -> list[TextContent]:
    """Get the roster of a team.

    Args:
        team_id: The unique team identifier
        user_id: The acting user's identifier
    """
    store = get_store()
    team = store.get_team(team_id)
    if team is None:
        return _text(f"Team with ID '{team_id}' not found")
    if not access.can_view_roster(_find_user(user_id), team_id):
        return _text("You do not have permission to view this roster")

    players = store.players_by_team(team_id)
    output = f"**{team.name}** Roster\n\n"
    if team.coach_joined_date:
        output += f"Coach: {team.coach_name} (since {team.coach_joined_date.isoformat()})\n\n"
    else:
        output += f"Coach: {team.coach_name}\n\n"

    if not players:
        output += "No players found in roster."
    for player in players:
        output += _format_player(player)
    return _text(output)


@mcp.tool()
async def update_team(
    team_id: str,
    user_id: str,
    coach_name: Optional[str] = None,
    coach_joined_date: Optional[str] = None,
) -> list[TextContent]:
    """Edit a team's coach details (Admin and Master In-Charge only).

    Args:
        team_id: The unique team identifier
        user_id: The acting user's identifier
        coach_name: New coach name
        coach_joined_date: New coach joining date (YYYY-MM-DD)
    """
    store = get_store()
    team = store.get_team(team_id)
    if team is None:
        return _text(f"Team with ID '{team_id}' not found")
    if not access.can_edit_team_details(_find_user(user_id)):
        return _text("You do not have permission to edit team details")

    try:
        changes = {}
        if coach_name is not None:
            changes["coach_name"] = coach_name
        if coach_joined_date is not None:
            changes["coach_joined_date"] = coach_joined_date or None
        store.update_team(dataclasses.replace(team, **changes))
    except (StoreError, ValueError) as e:
        logger.warning("update_team rejected for %s: %s", team_id, e)
        return _text(f"Could not update team: {e}")

    return _text(f"Updated **{team.name}** details")


# ============================================================================
# Player Tools
# ============================================================================


@mcp.tool()
async def add_player(
    team_id: str,
    user_id: str,
    name: str,
    grade: str,
    dob: str,
    position: str = "Member",
    contact_parent: str = "",
    joined_date: Optional[str] = None,
    emergency_contact_name: str = "",
    emergency_contact_phone: str = "",
    performance_notes: str = "",
    medical_notes: str = "",
    attendance_rate: int = 100,
    status: str = "Active",
) -> list[TextContent]:
    """Add a player to a team's roster.

    Args:
        team_id: The team the player joins
        user_id: The acting user's identifier
        name: Player name
        grade: School grade
        dob: Date of birth (YYYY-MM-DD)
        position: Role or position, e.g. Captain or Member
        contact_parent: Parent contact number
        joined_date: Joining date (YYYY-MM-DD), defaults to today
        attendance_rate: Attendance rate percentage (0-100)
        status: Active, Injured or Inactive
    """
    if not access.can_edit_roster(_find_user(user_id), team_id):
        return _text("You do not have permission to edit this roster")

    try:
        player = Player(
            id=f"new-{uuid.uuid4().hex[:12]}",
            team_id=team_id,
            name=name,
            grade=grade,
            position=position,
            contact_parent=contact_parent,
            dob=dob,
            joined_date=joined_date or date.today(),
            emergency_contact_name=emergency_contact_name,
            emergency_contact_phone=emergency_contact_phone,
            performance_notes=performance_notes,
            medical_notes=medical_notes,
            attendance_rate=attendance_rate,
            status=status,
        )
        get_store().add_player(player)
    except (StoreError, ValueError) as e:
        logger.warning("add_player rejected for team %s: %s", team_id, e)
        return _text(f"Could not add player: {e}")

    return _text(f"Added **{player.name}** ({player.id}) to team {team_id}")


@mcp.tool()
async def update_player(
    player_id: str,
    user_id: str,
    name: Optional[str] = None,
    grade: Optional[str] = None,
    position: Optional[str] = None,
    contact_parent: Optional[str] = None,
    dob: Optional[str] = None,
    joined_date: Optional[str] = None,
    emergency_contact_name: Optional[str] = None,
    emergency_contact_phone: Optional[str] = None,
    performance_notes: Optional[str] = None,
    medical_notes: Optional[str] = None,
    attendance_rate: Optional[int] = None,
    status: Optional[str] = None,
) -> list[TextContent]:
    """Edit a player's details. Only the given fields change.

    Args:
        player_id: The unique player identifier
        user_id: The acting user's identifier
        dob: Date of birth (YYYY-MM-DD)
        joined_date: Joining date (YYYY-MM-DD)
    """
    store = get_store()
    player = store.get_player(player_id)
    if player is None:
        return _text(f"Player with ID '{player_id}' not found")
    if not access.can_edit_roster(_find_user(user_id), player.team_id):
        return _text("You do not have permission to edit this roster")

    fields = {
        "name": name,
        "grade": grade,
        "position": position,
        "contact_parent": contact_parent,
        "dob": dob,
        "joined_date": joined_date,
        "emergency_contact_name": emergency_contact_name,
        "emergency_contact_phone": emergency_contact_phone,
        "performance_notes": performance_notes,
        "medical_notes": medical_notes,
        "attendance_rate": attendance_rate,
        "status": status,
    }
    try:
        updated = dataclasses.replace(
            player, **{k: v for k, v in fields.items() if v is not None}
        )
        store.update_player(updated)
    except (StoreError, ValueError) as e:
        logger.warning("update_player rejected for %s: %s", player_id, e)
        return _text(f"Could not update player: {e}")

    return _text(f"Updated **{updated.name}** ({player_id})")


@mcp.tool()
async def delete_player(player_id: str, user_id: str) -> list[TextContent]:
    """Remove a player from their roster.

    Args:
        player_id: The unique player identifier
        user_id: The acting user's identifier
    """
    store = get_store()
    player = store.get_player(player_id)
    if player is None:
        return _text(f"Player with ID '{player_id}' not found")
    if not access.can_edit_roster(_find_user(user_id), player.team_id):
        return _text("You do not have permission to edit this roster")

    store.delete_player(player_id)
    return _text(f"Removed **{player.name}** ({player_id})")


# ============================================================================
# Attendance & Schedule Tools
# ============================================================================


@mcp.tool()
async def mark_attendance(
    team_id: str,
    user_id: str,
    statuses: Optional[dict[str, str]] = None,
    day: Optional[str] = None,
) -> list[TextContent]:
    """Take attendance for a team session.

    Every player starts as Present; ``statuses`` overrides individual players.

    Args:
        team_id: The unique team identifier
        user_id: The acting user's identifier
        statuses: Mapping of player_id to Present, Absent, Late or Excused
        day: Session date (YYYY-MM-DD), defaults to today
    """
    store = get_store()
    if store.get_team(team_id) is None:
        return _text(f"Team with ID '{team_id}' not found")
    if not access.can_take_attendance(_find_user(user_id), team_id):
        return _text("You do not have permission to take attendance for this team")

    try:
        session_day = to_date(day) if day else date.today()
        sheet = dashboard.default_attendance_sheet(store, team_id, session_day)
        overrides = statuses or {}
        records = [
            dataclasses.replace(r, status=overrides[r.player_id]) if r.player_id in overrides else r
            for r in sheet
        ]
        store.mark_attendance(records)
    except (StoreError, ValueError) as e:
        logger.warning("mark_attendance rejected for team %s: %s", team_id, e)
        return _text(f"Could not save attendance: {e}")

    counts: dict[str, int] = {}
    for record in records:
        counts[record.status.value] = counts.get(record.status.value, 0) + 1
    output = f"Saved attendance for {len(records)} player(s) on {session_day.isoformat()}\n\n"
    output += ", ".join(f"{status}: {n}" for status, n in counts.items()) + "\n"

    roster_ids = {r.player_id for r in sheet}
    unmatched = [pid for pid in overrides if pid not in roster_ids]
    if unmatched:
        logger.warning("mark_attendance ignored unknown players for team %s: %s", team_id, unmatched)
        output += f"\nIgnored (not on this team): {', '.join(unmatched)}\n"
    return _text(output)


@mcp.tool()
async def get_team_schedule(team_id: Optional[str] = None) -> list[TextContent]:
    """Get upcoming and past events, for one team or the whole school.

    Args:
        team_id: Optional team identifier; omit for the school calendar
    """
    store = get_store()
    if team_id and store.get_team(team_id) is None:
        return _text(f"Team with ID '{team_id}' not found")

    events = dashboard.sorted_schedule(store, team_id)
    if not events:
        return _text("No events scheduled")

    names = {t.id: t.name for t in store.list_teams()}
    output = f"Found {len(events)} event(s):\n\n"
    for event in events:
        team_name = None if team_id else names.get(event.team_id, "Unknown Team")
        output += _format_event(event, team_name)
    return _text(output)


@mcp.tool()
async def add_event(
    team_id: str,
    user_id: str,
    title: str,
    day: str,
    start_time: str,
    location: str,
    end_time: str = "00:00",
    event_type: str = "Practice",
) -> list[TextContent]:
    """Schedule a practice, match or meeting for a team.

    Args:
        team_id: The unique team identifier
        user_id: The acting user's identifier
        title: Event title
        day: Event date (YYYY-MM-DD)
        start_time: Start time (HH:MM)
        location: Venue
        end_time: End time (HH:MM)
        event_type: Practice, Match or Meeting
    """
    if not access.can_edit_schedule(_find_user(user_id), team_id):
        return _text("You do not have permission to edit this schedule")

    try:
        event = ScheduleEvent(
            id=f"evt-{uuid.uuid4().hex[:12]}",
            team_id=team_id,
            title=title,
            date=day,
            start_time=start_time,
            end_time=end_time,
            location=location,
            type=event_type,
        )
        get_store().add_event(event)
    except (StoreError, ValueError) as e:
        logger.warning("add_event rejected for team %s: %s", team_id, e)
        return _text(f"Could not add event: {e}")

    return _text(f"Scheduled **{event.title}** on {event.date.isoformat()} ({event.id})")


# ============================================================================
# Dashboard Tools
# ============================================================================


def _parent_dashboard(store: DataStore, user: User) -> str:
    view = dashboard.parent_view(store, user)
    if view is None:
        return "No student linked to this parent account."

    output = f"**Hello, {user.name}**\n\n"
    output += f"Activity summary for **{view.child.name}**"
    if view.team:
        output += f" ({view.team.icon} {view.team.name})"
    output += "\n\n"
    output += f"- Overall Attendance Rate: {view.child.attendance_rate}%\n\n"

    output += "**Recent Activity:**\n"
    if not view.recent_attendance:
        output += "No records yet.\n"
    for record in view.recent_attendance:
        output += f"- {record.date.isoformat()}: {record.status.value}\n"

    output += "\n**Next Practice:**\n"
    if view.next_event:
        output += _format_event(view.next_event)
    else:
        output += "No upcoming practices scheduled.\n"
    return output


@mcp.tool()
async def get_dashboard(user_id: str) -> list[TextContent]:
    """Get the dashboard for a user: a child summary for parents, school stats otherwise.

    Args:
        user_id: The acting user's identifier
    """
    user = _find_user(user_id)
    if user is None:
        return _text(f"User with ID '{user_id}' not found")

    store = get_store()
    if user.role == UserRole.PARENT:
        return _text(_parent_dashboard(store, user))

    stats = dashboard.compute_stats(store)
    output = "**School Dashboard**\n\n"
    output += f"- Total Players: {stats.total_players}\n"
    output += f"- Active Teams: {stats.active_teams}\n"
    output += f"- Today's Check-ins: {stats.attendance_today}\n"
    output += f"- Upcoming Events: {stats.upcoming_events}\n"

    output += "\n**Attendance by Team:**\n"
    for name, rate in dashboard.team_attendance(store):
        output += f"- {name}: {rate}%\n"

    output += "\n**Player Status:**\n"
    for status, count in dashboard.status_distribution(store).items():
        output += f"- {status.value}: {count}\n"
    return _text(output)


@mcp.tool()
async def get_ai_insights(user_id: str) -> list[TextContent]:
    """Generate an AI executive summary of participation trends.

    Args:
        user_id: The acting user's identifier
    """
    global _insight_in_flight
    user = _find_user(user_id)
    if user is None:
        return _text(f"User with ID '{user_id}' not found")
    if _insight_in_flight:
        return _text("Insights are already being generated, please wait")

    store = get_store()
    settings = get_settings()
    stats = dashboard.compute_stats(store)
    top_teams = store.list_teams()[:3]

    _insight_in_flight = True
    try:
        insight = await asyncio.to_thread(
            summarize,
            stats,
            top_teams,
            settings.gemini_api_key,
            settings.gemini_model,
            settings.school_name,
        )
    finally:
        _insight_in_flight = False

    return _text(f"**AI Insights**\n\n{insight}\n")


# ============================================================================
# Import / Export Tools
# ============================================================================


@mcp.tool()
async def export_roster(team_id: str, user_id: str) -> list[TextContent]:
    """Export a team roster as CSV text (Admin and Master In-Charge only).

    Args:
        team_id: The unique team identifier
        user_id: The acting user's identifier
    """
    store = get_store()
    team = store.get_team(team_id)
    if team is None:
        return _text(f"Team with ID '{team_id}' not found")
    if not access.can_edit_team_details(_find_user(user_id)):
        return _text("You do not have permission to export this roster")

    csv_text = export_roster_csv(store.players_by_team(team_id))
    return _text(f"**{export_filename(team)}**\n\n```csv\n{csv_text}```\n")


@mcp.tool()
async def import_roster(team_id: str, user_id: str, filename: str) -> list[TextContent]:
    """Accept a roster file for a team (Admin and Master In-Charge only).

    The file is acknowledged, not parsed.

    Args:
        team_id: The unique team identifier
        user_id: The acting user's identifier
        filename: Name of the uploaded file (.csv, .xlsx, .xls)
    """
    if get_store().get_team(team_id) is None:
        return _text(f"Team with ID '{team_id}' not found")
    if not access.can_edit_team_details(_find_user(user_id)):
        return _text("You do not have permission to import into this roster")
    return _text(acknowledge_import(filename))


async def main():
    """Run the MCP server."""
    await mcp.run_stdio_async()


def run() -> None:
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=get_settings().log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
