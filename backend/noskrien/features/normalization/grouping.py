"""Duplicate grouping: bucket records by identity and plan merges."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable

from noskrien.shared.latvian import match_key

from .canonical import canonical_sort_key
from .gender_repair import GenderRepairPolicy, repair_cross_gender
from .models import IdentityKey, MergeAction, MergePlan, ParticipantRecord

logger = logging.getLogger(__name__)


def identity_key(record: ParticipantRecord) -> IdentityKey:
    """Identity of a record: folded name, distance category and gender."""
    return IdentityKey(match_key(record.name), record.distance, record.gender)


def bucket_records(
    records: Iterable[ParticipantRecord],
) -> dict[IdentityKey, list[ParticipantRecord]]:
    """Group records by identity key across all seasons.

    Buckets keep first-seen order, and members keep input order.
    """
    buckets: dict[IdentityKey, list[ParticipantRecord]] = defaultdict(list)
    for record in records:
        buckets[identity_key(record)].append(record)
    return dict(buckets)


def rank_members(group: list[ParticipantRecord]) -> list[ParticipantRecord]:
    """Order group members so the keeper comes first.

    Canonical name order first, then the lowest existing id (the earliest
    known record), then input position.
    """
    positioned = list(enumerate(group))
    positioned.sort(
        key=lambda item: (
            canonical_sort_key(item[1].name),
            item[1].id is None,
            item[1].id if item[1].id is not None else 0,
            item[0],
        )
    )
    return [record for _, record in positioned]


def is_duplicate_group(group: list[ParticipantRecord], merge_identical: bool = False) -> bool:
    """True when the group needs merging.

    Members that are already spelled identically need nothing, unless one of
    them was moved by the gender repair and must be folded in. With
    merge_identical every group of two or more records is merged: database
    rows share a bucket only when they are separate rows for one identity.
    """
    if len(group) < 2:
        return False
    if merge_identical:
        return True
    if len({record.name for record in group}) > 1:
        return True
    return any(record.relocated for record in group)


def merge_actions_for(
    ranked: list[ParticipantRecord],
    keeper_id: int | None = None,
) -> list[MergeAction]:
    """One action per non-keeper member of an already ranked group."""
    keeper = ranked[0]
    new_id = keeper.id if keeper.id is not None else keeper_id
    return [
        MergeAction(
            old_id=record.id,
            old_name=record.name,
            new_id=new_id,
            new_name=keeper.name,
            season=keeper.season,
        )
        for record in ranked[1:]
    ]


def plan_merges(
    records: Iterable[ParticipantRecord],
    policy: GenderRepairPolicy | None = None,
    merge_identical: bool = False,
) -> MergePlan:
    """Compute the merges needed so each identity maps to one record.

    Re-running on merged data yields an empty plan: every bucket then
    holds a single spelling (a single row with merge_identical).
    """
    buckets = bucket_records(records)
    buckets, moved = repair_cross_gender(buckets, policy)

    plan = MergePlan(cross_gender_moves=moved)
    for key, group in buckets.items():
        if not is_duplicate_group(group, merge_identical):
            lone = group[0]
            if len(group) == 1 and lone.id is not None and lone.normalized_name != key.normalized_name:
                plan.backfill_keys[lone.id] = key
            continue
        ranked = rank_members(group)
        actions = merge_actions_for(ranked)
        plan.actions.extend(actions)
        plan.keeper_keys[ranked[0].id] = key
        logger.debug("Group %s: %d record(s) fold into '%s'", key, len(actions), actions[0].new_name)

    logger.info(
        "Planned %d merges into %d keepers", plan.total_merges, plan.unique_keepers
    )
    return plan
