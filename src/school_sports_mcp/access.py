"""Role-based view hiding for dashboard users.

These helpers decide what a user is shown. Nothing here is enforced by the
data store itself.
"""

from typing import Optional

from .models import Team, User, UserRole

MANAGEMENT_ROLES = {UserRole.PRINCIPAL, UserRole.MASTER_IN_CHARGE, UserRole.ADMIN}


def _is_assigned_coach(user: Optional[User], team_id: Optional[str]) -> bool:
    return (
        user is not None
        and user.role == UserRole.COACH
        and team_id is not None
        and user.assigned_team_id == team_id
    )


def visible_teams(user: Optional[User], teams: list[Team]) -> list[Team]:
    """Teams listed for a user: coaches see their own team, parents none."""
    if user is None:
        return []
    if user.role == UserRole.COACH:
        return [t for t in teams if t.id == user.assigned_team_id]
    if user.role == UserRole.PARENT:
        return []
    return list(teams)


def can_view_roster(user: Optional[User], team_id: str) -> bool:
    """A roster is readable by whoever sees its team in the team list."""
    if user is None:
        return False
    if user.role == UserRole.COACH:
        return _is_assigned_coach(user, team_id)
    return user.role != UserRole.PARENT


def navigation_for(user: Optional[User]) -> list[str]:
    """Navigation entries shown to a user, in display order."""
    items = ["Dashboard"]
    if user is None or user.role != UserRole.PARENT:
        items.append("Teams")
    items.append("Schedule")
    if user is not None and user.role == UserRole.ADMIN:
        items.append("Admin")
    return items


def can_edit_roster(user: Optional[User], team_id: str) -> bool:
    if user is None:
        return False
    if user.role in (UserRole.PRINCIPAL, UserRole.MASTER_IN_CHARGE):
        return True
    return _is_assigned_coach(user, team_id)


def can_edit_schedule(user: Optional[User], team_id: Optional[str]) -> bool:
    # The global calendar (no team) is read-only for everyone
    if not team_id:
        return False
    return can_edit_roster(user, team_id)


def can_edit_team_details(user: Optional[User]) -> bool:
    return user is not None and user.role in (UserRole.ADMIN, UserRole.MASTER_IN_CHARGE)


def can_take_attendance(user: Optional[User], team_id: str) -> bool:
    if user is None:
        return False
    return user.role in MANAGEMENT_ROLES or _is_assigned_coach(user, team_id)
