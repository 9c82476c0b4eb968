"""BDD tests for role-based views."""

from pytest_bdd import scenarios, when, then, parsers

from school_sports_mcp import access

# Load scenarios from feature file
scenarios("role_access.feature")


@when(parsers.parse('user "{user_id}" lists teams'))
def list_teams(context, user_id):
    """List the teams a user may see."""
    user = context["users"][user_id]
    context["teams"] = access.visible_teams(user, context["store"].list_teams())
    context["navigation"] = access.navigation_for(user)


@then(parsers.parse("they should see {count:d} team"))
@then(parsers.parse("they should see {count:d} teams"))
def check_team_count(context, count):
    """Check the number of visible teams."""
    assert len(context["teams"]) == count, \
        f"Expected {count} teams, found {[t.name for t in context['teams']]}"


@then(parsers.parse('they should see team "{name}"'))
def check_team_visible(context, name):
    """Check a team is visible."""
    assert name in [t.name for t in context["teams"]]


@then(parsers.parse('their navigation should include "{item}"'))
def check_navigation_includes(context, item):
    assert item in context["navigation"]


@then(parsers.parse('their navigation should not include "{item}"'))
def check_navigation_excludes(context, item):
    assert item not in context["navigation"]


@then(parsers.parse('user "{user_id}" may edit the roster of team "{team_id}"'))
def check_may_edit_roster(context, user_id, team_id):
    assert access.can_edit_roster(context["users"][user_id], team_id)


@then(parsers.parse('user "{user_id}" may not edit the roster of team "{team_id}"'))
def check_may_not_edit_roster(context, user_id, team_id):
    assert not access.can_edit_roster(context["users"][user_id], team_id)


@then(parsers.parse('user "{user_id}" may edit team details'))
def check_may_edit_team(context, user_id):
    assert access.can_edit_team_details(context["users"][user_id])


@then(parsers.parse('user "{user_id}" may not edit team details'))
def check_may_not_edit_team(context, user_id):
    assert not access.can_edit_team_details(context["users"][user_id])


@then(parsers.parse('user "{user_id}" may view the roster of team "{team_id}"'))
def check_may_view_roster(context, user_id, team_id):
    assert access.can_view_roster(context["users"][user_id], team_id)


@then(parsers.parse('user "{user_id}" may not view the roster of team "{team_id}"'))
def check_may_not_view_roster(context, user_id, team_id):
    assert not access.can_view_roster(context["users"][user_id], team_id)
