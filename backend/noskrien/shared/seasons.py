"""
Season labels.

A Noskrien Ziemu season runs November through March, so it spans two
calendar years and is labelled "YYYY-YYYY".
"""

from datetime import date, datetime

# First month of a new season
SEASON_START_MONTH = 11


def derive_season(value: str | date) -> str:
    """
    Season label for a race date.

    Stored season fields are known to be stale, so the label is always
    computed from the date itself.

    Args:
        value: ISO date string ("2023-11-26") or a date

    Returns:
        "2023-2024" for Nov/Dec 2023, "2023-2024" for Jan-Oct 2024

    Raises:
        ValueError: If the string is not an ISO date
    """
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        day = date.fromisoformat(value.strip()[:10])

    if day.month >= SEASON_START_MONTH:
        return f"{day.year}-{day.year + 1}"
    return f"{day.year - 1}-{day.year}"

