"""
Head-to-head comparison module.

Usage:
    from noskrien.features.comparison import compare_races, arrange_for_display

    rows = compare_races(history_a, history_b, "Tautas")
    head_to_head = arrange_for_display(rows, "Dāvis Pazars", "Jānis Bērziņš")
"""

from .models import RaceComparisonRow, HeadToHead, ComparisonSummary
from .parsing import parse_time, parse_distance, calculate_pace
from .comparator import (
    compare_races,
    arrange_for_display,
    summarize,
    count_wins,
    effective_category,
)
from .schemas import ComparisonRowResponse, ComparisonSummaryResponse, CompareResponse

__all__ = [
    # Models
    "RaceComparisonRow",
    "HeadToHead",
    "ComparisonSummary",
    # Parsing
    "parse_time",
    "parse_distance",
    "calculate_pace",
    # Comparator
    "compare_races",
    "arrange_for_display",
    "summarize",
    "count_wins",
    "effective_category",
    # Schemas
    "ComparisonRowResponse",
    "ComparisonSummaryResponse",
    "CompareResponse",
]
