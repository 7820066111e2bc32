"""
Formatting utilities for display.

Used by the CLI head-to-head table.
"""


def format_pace(pace_s_km: float | None) -> str:
    """
    Format pace as 'M:SS /km'.

    Args:
        pace_s_km: Pace in seconds per km

    Returns:
        Formatted string (e.g., '5:13 /km')
    """
    if pace_s_km is None or pace_s_km <= 0:
        return "—"

    total = int(round(pace_s_km))
    return f"{total // 60}:{total % 60:02d} /km"


def format_diff(diff_s_km: float) -> str:
    """Signed pace difference, e.g. '+66.7 s/km'."""
    return f"{diff_s_km:+.1f} s/km"
