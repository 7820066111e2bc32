"""
Comparison schemas.

Pydantic models for head-to-head API responses.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class ComparisonRowResponse(BaseModel):
    """One common race, paces in s/km."""

    date: str
    race: str
    season: str
    pace1: float
    pace2: float
    diff: float
    p1_time: str
    p2_time: str
    distance: float

    model_config = ConfigDict(from_attributes=True)


class ComparisonSummaryResponse(BaseModel):
    """Win counts and diff statistics, from the displayed order."""

    races: int
    first_wins: int
    second_wins: int
    ties: int
    avg_diff: Optional[float] = None
    best_diff: Optional[float] = None
    worst_diff: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class CompareResponse(BaseModel):
    """Head-to-head of two names, already arranged for display."""

    name1: str
    name2: str
    category: str
    swapped: bool
    rows: list[ComparisonRowResponse] = []
    summary: ComparisonSummaryResponse
