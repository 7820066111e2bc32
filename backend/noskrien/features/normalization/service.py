"""Data directory workflows: normalize in place and report duplicates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .gender_repair import GenderRepairPolicy, repair_cross_gender
from .grouping import bucket_records, is_duplicate_group
from .loader import load_data_dir, write_data_dir
from .models import IdentityKey, NormalizationResult, ParticipantRecord
from .pipeline import normalize_records

logger = logging.getLogger(__name__)


@dataclass
class DuplicateGroup:
    """Spelling variants found for one identity."""

    key: IdentityKey
    names: list[str]
    seasons: list[str]
    cross_gender: bool = False  # some records are filed under the other gender


@dataclass
class DuplicateReport:
    """Result of a duplicate check over a data directory."""

    records_scanned: int
    groups: list[DuplicateGroup] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.groups


def normalize_data_dir(
    data_dir: Path,
    policy: GenderRepairPolicy | None = None,
    dry_run: bool = False,
) -> NormalizationResult:
    """Merge duplicate spellings in a data directory and write it back.

    Args:
        data_dir: Root of the season/distance layout
        policy: Gender repair direction
        dry_run: Compute everything, write nothing

    Raises:
        DataDirectoryError: If the directory is missing or holds invalid JSON
    """
    logger.info("Normalizing data in %s", data_dir)
    result = normalize_records(load_data_dir(data_dir), policy)

    if dry_run:
        logger.info("Dry run, %s left untouched", data_dir)
    else:
        write_data_dir(data_dir, result.participants)
    return result


def find_duplicates(
    records: list[ParticipantRecord],
    policy: GenderRepairPolicy | None = None,
) -> DuplicateReport:
    """Identity groups that normalization would still merge.

    That is groups with more than one spelling, and groups holding records
    the gender repair moves from the other gender's file.
    """
    buckets, _ = repair_cross_gender(bucket_records(records), policy)

    report = DuplicateReport(records_scanned=len(records))
    for key, group in buckets.items():
        if not is_duplicate_group(group):
            continue
        report.groups.append(
            DuplicateGroup(
                key=key,
                names=list(dict.fromkeys(r.name for r in group)),
                seasons=sorted({r.season for r in group}),
                cross_gender=any(r.relocated for r in group),
            )
        )
    return report


def check_data_dir(data_dir: Path, policy: GenderRepairPolicy | None = None) -> DuplicateReport:
    """Duplicate report for a data directory (read-only)."""
    return find_duplicates(load_data_dir(data_dir), policy)
