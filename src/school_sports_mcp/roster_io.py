"""Roster export to CSV and the roster import placeholder."""

from datetime import date
from typing import Iterable, Optional

import pandas as pd

from .models import Player, Team

EXPORT_COLUMNS = [
    "Player Name",
    "Grade",
    "Position",
    "Joined Date",
    "Parent Contact",
    "Attendance Rate %",
    "Status",
]


def roster_frame(players: Iterable[Player]) -> pd.DataFrame:
    """Build the export table, one row per player in roster order."""
    rows = [
        {
            "Player Name": p.name,
            "Grade": p.grade,
            "Position": p.position,
            "Joined Date": p.joined_date.isoformat(),
            "Parent Contact": p.contact_parent,
            "Attendance Rate %": str(p.attendance_rate),
            "Status": p.status.value,
        }
        for p in players
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_roster_csv(players: Iterable[Player]) -> str:
    """Render a roster as CSV text. Fields containing commas or quotes are quoted."""
    return roster_frame(players).to_csv(index=False, lineterminator="\n")


def export_filename(team: Team, day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"{team.name}_Roster_{day.isoformat()}.csv"


def acknowledge_import(filename: str) -> str:
    """Acknowledge an uploaded roster file. Its contents are not read."""
    return f"Successfully uploaded: {filename}. (Simulation: Data merged)"
