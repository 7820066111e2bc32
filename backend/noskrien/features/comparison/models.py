"""Data models for head-to-head comparison (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class RaceComparisonRow:
    """One race both participants ran."""

    date: str  # "2023-11-26"
    race: str  # venue: "Smiltene"
    season: str  # derived from date, never from storage
    pace1: float  # s/km
    pace2: float  # s/km
    diff: float  # pace1 - pace2, negative = first is faster
    p1_time: str  # "52:09"
    p2_time: str  # "41:02"
    distance: float  # km, first participant's

    def swapped(self) -> RaceComparisonRow:
        """Same race seen from the other participant's side."""
        return replace(
            self,
            pace1=self.pace2,
            pace2=self.pace1,
            diff=-self.diff,
            p1_time=self.p2_time,
            p2_time=self.p1_time,
        )


@dataclass
class HeadToHead:
    """Comparison arranged for display."""

    first_name: str
    second_name: str
    rows: list[RaceComparisonRow] = field(default_factory=list)
    swapped: bool = False
    first_wins: int = 0  # rows with diff < 0
    second_wins: int = 0  # rows with diff > 0


@dataclass
class ComparisonSummary:
    """Aggregate numbers over the common races."""

    races: int
    first_wins: int
    second_wins: int
    ties: int
    avg_diff: float | None  # s/km
    best_diff: float | None  # most negative
    worst_diff: float | None  # most positive
