"""AI-generated attendance insights via Google Gemini.

``summarize`` never raises: a missing key or a failed request produces a
fixed, human-readable sentence instead.
"""

import logging
from typing import Any, Optional, Sequence

import google.generativeai as genai

from .config import DEFAULT_MODEL, DEFAULT_SCHOOL_NAME
from .models import DashboardStats, Team

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "Gemini API Key is missing. Please configure the environment variable "
    "to receive AI insights."
)
NO_INSIGHT_MESSAGE = "No insights available at this time."
FAILURE_MESSAGE = "Unable to generate insights due to a network or configuration error."


def build_prompt(
    stats: DashboardStats, top_teams: Sequence[Team], school_name: str = DEFAULT_SCHOOL_NAME
) -> str:
    team_names = ", ".join(t.name for t in top_teams)
    return (
        f"Analyze the following school sports statistics for {school_name} Teams:\n"
        f"- Total Players: {stats.total_players}\n"
        f"- Active Teams: {stats.active_teams}\n"
        f"- Today's Attendance Check-ins: {stats.attendance_today}\n"
        f"- Upcoming Events: {stats.upcoming_events}\n"
        f"- Top Performing Teams (Activity): {team_names}\n"
        "\n"
        "Provide a 3-sentence executive summary for the Principal highlighting "
        "participation trends and one suggestion for improvement. Keep it "
        "professional and encouraging."
    )


def _response_text(resp: Any) -> str:
    # resp.text raises ValueError when the candidate has no text parts
    try:
        text = resp.text
    except ValueError:
        return ""
    return text.strip() if isinstance(text, str) else ""


def summarize(
    stats: DashboardStats,
    top_teams: Sequence[Team],
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
    school_name: str = DEFAULT_SCHOOL_NAME,
) -> str:
    """Return a short executive summary of the dashboard numbers."""
    if not api_key or not api_key.strip():
        return MISSING_KEY_MESSAGE

    prompt = build_prompt(stats, top_teams, school_name)
    try:
        genai.configure(api_key=api_key.strip())
        model = genai.GenerativeModel(model_name or DEFAULT_MODEL)
        text = _response_text(model.generate_content(prompt))
    except Exception:
        logger.exception("Gemini insight request failed")
        return FAILURE_MESSAGE

    return text or NO_INSIGHT_MESSAGE
