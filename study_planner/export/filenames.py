"""Download filename helpers for exported plans."""

from datetime import date, datetime
from typing import Union


def format_plan_date(created_at: Union[date, datetime]) -> str:
    """
    Format a plan date the way it is shown to users.

    Example: date(2024, 12, 19) -> 'Thursday, December 19, 2024'
    """
    return f"{created_at:%A}, {created_at:%B} {created_at.day}, {created_at.year}"


def build_export_basename(
    created_at: Union[date, datetime],
    prefix: str = "StudyPlan"
) -> str:
    """
    Build the base download filename (no extension) for a saved plan.

    Spaces in the formatted date are replaced with underscores.
    Example: 'StudyPlan_Thursday,_December_19,_2024'
    """
    return f"{prefix}_{format_plan_date(created_at)}".replace(" ", "_")


def parse_created_at(value: str) -> datetime:
    """
    Parse an ISO 8601 plan creation date or timestamp.

    Accepts '2024-12-19', '2024-12-19T08:30:00' and a trailing 'Z'.

    Raises:
        ValueError: If value is not an ISO 8601 date
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
