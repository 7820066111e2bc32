"""Data models for the normalization pipeline (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple


@dataclass(frozen=True)
class RaceEntry:
    """Single race result as recorded for one participant."""

    date: str  # "2023-11-26"
    result: str  # "52:09" / "1:01:59", free-form
    km: str  # "10,0" or "10.0"
    location: str  # "Smiltene"
    season: str | None = None  # "2023-2024", may be stale upstream
    category: str | None = None  # "Tautas" / "Sporta"

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Same date and same venue means the same race."""
        return (self.date, self.location.strip())


@dataclass
class ParticipantRecord:
    """One name occurrence in one results file (or one DB row)."""

    name: str  # raw spelling: "Davis Pazars"
    link: str | None
    season: str  # "2023-2024"
    distance: str  # "Tautas"
    gender: str  # "V" / "S"
    races: list[RaceEntry] = field(default_factory=list)
    id: int | None = None  # storage identity, when loaded from the DB
    normalized_name: str | None = None  # stored match key, NULL on legacy rows
    original_gender: str | None = None  # set when gender repair moved the record

    @property
    def relocated(self) -> bool:
        return self.original_gender is not None and self.original_gender != self.gender


class IdentityKey(NamedTuple):
    """Who a record denotes: match key plus the distinguishing attributes."""

    normalized_name: str
    distance: str
    gender: str


@dataclass
class CanonicalParticipant:
    """Merged identity with the preferred spelling and all races."""

    id: int | None
    name: str  # "Dāvis Pazars"
    normalized_name: str  # "davis pazars"
    distance: str
    gender: str
    link: str | None = None
    races: list[RaceEntry] = field(default_factory=list)
    seasons: list[str] = field(default_factory=list)  # season dirs its records came from
    # (source season, race) for races whose date does not parse; kept on disk only
    undated_races: list[tuple[str, RaceEntry]] = field(default_factory=list)

    @property
    def key(self) -> IdentityKey:
        return IdentityKey(self.normalized_name, self.distance, self.gender)


@dataclass(frozen=True)
class MergeAction:
    """Fold one record into the keeper of its group."""

    old_id: int | None
    old_name: str
    new_id: int | None
    new_name: str
    season: str


@dataclass
class MergePlan:
    """All merges needed to reach one record per identity."""

    actions: list[MergeAction] = field(default_factory=list)
    cross_gender_moves: int = 0
    # keeper id -> identity it ends up with (name key, distance, gender)
    keeper_keys: dict[int | None, IdentityKey] = field(default_factory=dict)
    # lone rows whose stored match key is missing or stale
    backfill_keys: dict[int, IdentityKey] = field(default_factory=dict)

    @property
    def total_merges(self) -> int:
        return len(self.actions)

    @property
    def unique_keepers(self) -> int:
        return len({(a.new_id, a.new_name) for a in self.actions})


@dataclass
class NormalizationResult:
    """Outcome of one batch normalization run."""

    participants: list[CanonicalParticipant] = field(default_factory=list)
    actions: list[MergeAction] = field(default_factory=list)
    records_scanned: int = 0
    merged_duplicates: int = 0
    cross_gender_moves: int = 0
    skipped_races: int = 0

    @property
    def unique_participants(self) -> int:
        return len(self.participants)
