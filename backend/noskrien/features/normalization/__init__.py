"""Normalization feature. Merges Latvian spelling variants of participant names."""

from .models import (
    RaceEntry,
    ParticipantRecord,
    IdentityKey,
    CanonicalParticipant,
    MergeAction,
    MergePlan,
    NormalizationResult,
)
from .canonical import select_canonical, canonical_sort_key
from .gender_repair import GenderRepairPolicy, repair_cross_gender
from .grouping import bucket_records, identity_key, plan_merges
from .pipeline import normalize_records, merge_races
from .loader import load_data_dir, write_data_dir
from .sql import generate_sql, escape_sql_string, SqlScript
from .service import normalize_data_dir, check_data_dir, find_duplicates, DuplicateReport
from .merge_service import MergeService, MergeExecution

__all__ = [
    "RaceEntry",
    "ParticipantRecord",
    "IdentityKey",
    "CanonicalParticipant",
    "MergeAction",
    "MergePlan",
    "NormalizationResult",
    "select_canonical",
    "canonical_sort_key",
    "GenderRepairPolicy",
    "repair_cross_gender",
    "bucket_records",
    "identity_key",
    "plan_merges",
    "normalize_records",
    "merge_races",
    "load_data_dir",
    "write_data_dir",
    "generate_sql",
    "escape_sql_string",
    "SqlScript",
    "normalize_data_dir",
    "check_data_dir",
    "find_duplicates",
    "DuplicateReport",
    "MergeService",
    "MergeExecution",
]
