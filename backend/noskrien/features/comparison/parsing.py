"""Parsing of scraped result and distance text."""

from __future__ import annotations

from noskrien.shared.constants import NO_TIME_MARKERS


def parse_time(text: str | None) -> int | None:
    """Finish time text to seconds.

    Accepts "M:SS" and "H:MM:SS". Blank, "0", "x", "-" and anything
    unparseable mean no time.

    "52:09"    -> 3129
    "1:01:59"  -> 3719
    "x"        -> None
    """
    if text is None:
        return None
    clean = text.strip()
    if clean in NO_TIME_MARKERS:
        return None

    parts = clean.split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return None
    if any(n < 0 for n in numbers):
        return None

    if len(numbers) == 2:
        minutes, seconds = numbers
        return minutes * 60 + seconds
    hours, minutes, seconds = numbers
    return hours * 3600 + minutes * 60 + seconds


def parse_distance(text: str | float | None) -> float | None:
    """Distance text to km, accepting ',' or '.' as decimal separator.

    "10,0" -> 10.0
    "9.70" -> 9.7
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return float(text)
    try:
        return float(text.strip().replace(",", "."))
    except ValueError:
        return None


def calculate_pace(time_seconds: int, km: float) -> float | None:
    """Seconds per km, None for a non-positive distance."""
    if not km or km <= 0:
        return None
    return time_seconds / km
