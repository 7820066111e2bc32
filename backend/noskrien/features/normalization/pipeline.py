"""Batch normalization: merge spelling variants into canonical participants.

Every run recomputes from the full dataset; nothing is carried between runs.

Steps:
    1. Bucket records by (match key, distance, gender) across seasons
    2. Repair cross-gender duplicates
    3. Per bucket: pick the keeper, emit merges, merge races
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from noskrien.shared.seasons import derive_season

from .gender_repair import GenderRepairPolicy, repair_cross_gender
from .grouping import bucket_records, is_duplicate_group, merge_actions_for, rank_members
from .models import (
    CanonicalParticipant,
    IdentityKey,
    NormalizationResult,
    ParticipantRecord,
    RaceEntry,
)

logger = logging.getLogger(__name__)


def merge_races(
    records: Iterable[ParticipantRecord],
) -> tuple[list[RaceEntry], list[tuple[str, RaceEntry]]]:
    """Collect races of all records into one date-ordered list.

    Season is re-derived from the date. Races with an unparseable date are
    left out of the list and returned unchanged with the season directory
    of their record. A race already present (same date, same venue) is
    kept once.

    Returns:
        (races, undated races as (record season, race))
    """
    merged: dict[tuple[str, str], RaceEntry] = {}
    undated: list[tuple[str, RaceEntry]] = []
    for record in records:
        for race in record.races:
            try:
                season = derive_season(race.date)
            except (ValueError, AttributeError):
                logger.debug("Race of '%s' has bad date %r, left as is", record.name, race.date)
                undated.append((record.season, race))
                continue
            if race.dedup_key in merged:
                continue
            merged[race.dedup_key] = replace(
                race,
                season=season,
                category=race.category or record.distance,
            )

    races = sorted(merged.values(), key=lambda r: r.date)
    return races, undated


def _canonicalize_group(
    key: IdentityKey,
    group: list[ParticipantRecord],
    fallback_id: int,
    result: NormalizationResult,
) -> CanonicalParticipant:
    ranked = rank_members(group)
    keeper = ranked[0]
    participant_id = keeper.id if keeper.id is not None else fallback_id

    if is_duplicate_group(group):
        actions = merge_actions_for(ranked, keeper_id=participant_id)
        result.actions.extend(actions)
        if len({r.name for r in group}) > 1:
            result.merged_duplicates += len(group) - 1

    races, undated = merge_races(ranked)
    result.skipped_races += len(undated)

    return CanonicalParticipant(
        id=participant_id,
        name=keeper.name,
        normalized_name=key.normalized_name,
        distance=key.distance,
        gender=key.gender,
        link=next((r.link for r in group if r.link), None),
        races=races,
        seasons=list(dict.fromkeys(r.season for r in group)),
        undated_races=undated,
    )


def normalize_records(
    records: Iterable[ParticipantRecord],
    policy: GenderRepairPolicy | None = None,
) -> NormalizationResult:
    """Merge duplicate spellings into one canonical participant per identity.

    Args:
        records: All participant records of the dataset, any season
        policy: Gender repair direction (default V -> S)

    Returns:
        NormalizationResult with canonical participants, merge actions
        and counters.
    """
    records = list(records)
    result = NormalizationResult(records_scanned=len(records))

    buckets = bucket_records(records)
    buckets, result.cross_gender_moves = repair_cross_gender(buckets, policy)

    for index, (key, group) in enumerate(buckets.items(), start=1):
        result.participants.append(_canonicalize_group(key, group, index, result))

    logger.info(
        "Normalized %d records into %d participants (%d merged, %d cross-gender)",
        result.records_scanned,
        result.unique_participants,
        result.merged_duplicates,
        result.cross_gender_moves,
    )
    return result
