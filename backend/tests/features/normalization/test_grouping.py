"""
Tests for duplicate grouping, gender repair and merge planning.
"""

import pytest

from noskrien.features.normalization import (
    GenderRepairPolicy,
    IdentityKey,
    ParticipantRecord,
    RaceEntry,
    bucket_records,
    identity_key,
    plan_merges,
    repair_cross_gender,
)
from noskrien.features.normalization.grouping import is_duplicate_group, rank_members


# =============================================================================
# Helpers
# =============================================================================

def make_record(name, distance="Tautas", gender="V", season="2023-2024", id=None, races=None):
    """Participant record with sensible defaults."""
    return ParticipantRecord(
        name=name,
        link=None,
        season=season,
        distance=distance,
        gender=gender,
        races=races or [],
        id=id,
    )


def race(date, location="Smiltene", result="40:00", km="10,0"):
    return RaceEntry(date=date, result=result, km=km, location=location)


# =============================================================================
# Test bucketing
# =============================================================================

class TestBucketRecords:
    """Tests for identity_key and bucket_records."""

    def test_identity_key_folds_name(self):
        key = identity_key(make_record("BĒRZIŅŠ"))
        assert key == IdentityKey("berzins", "Tautas", "V")

    def test_variants_share_bucket_across_seasons(self):
        records = [
            make_record("Davis Pazars", season="2022-2023"),
            make_record("Dāvis Pazars", season="2023-2024"),
        ]
        buckets = bucket_records(records)
        assert list(buckets) == [IdentityKey("davis pazars", "Tautas", "V")]
        assert len(buckets[IdentityKey("davis pazars", "Tautas", "V")]) == 2

    def test_distance_never_crosses(self):
        records = [make_record("Dāvis Pazars"), make_record("Davis Pazars", distance="Sporta")]
        assert len(bucket_records(records)) == 2

    def test_gender_never_crosses_without_repair(self):
        records = [make_record("Ilze", gender="S"), make_record("ILZE", gender="U")]
        assert len(bucket_records(records)) == 2

    def test_buckets_are_fresh_per_call(self):
        """No state carries over between runs."""
        bucket_records([make_record("Anna")])
        assert len(bucket_records([make_record("Juris")])) == 1


# =============================================================================
# Test gender repair
# =============================================================================

class TestRepairCrossGender:
    """Tests for repair_cross_gender function."""

    def test_moves_male_records_to_female_bucket(self):
        male = make_record("Ilze Kronberga", gender="V", races=[race("2023-11-26")])
        female = make_record("Ilze Kronberga", gender="S", races=[race("2023-12-17")])
        buckets = bucket_records([male, female])

        repaired, moved = repair_cross_gender(buckets)

        assert moved == 1
        assert IdentityKey("ilze kronberga", "Tautas", "V") not in repaired
        group = repaired[IdentityKey("ilze kronberga", "Tautas", "S")]
        assert len(group) == 2
        assert all(r.gender == "S" for r in group)
        assert {r.races[0].date for r in group} == {"2023-11-26", "2023-12-17"}

    def test_input_not_mutated(self):
        male = make_record("Ilze", gender="V")
        female = make_record("Ilze", gender="S")
        buckets = bucket_records([male, female])

        repair_cross_gender(buckets)

        assert IdentityKey("ilze", "Tautas", "V") in buckets
        assert male.gender == "V"

    def test_no_counterpart_no_move(self):
        buckets = bucket_records([make_record("Juris", gender="V")])
        repaired, moved = repair_cross_gender(buckets)
        assert moved == 0
        assert repaired == buckets

    def test_different_distance_not_repaired(self):
        buckets = bucket_records([
            make_record("Ilze", gender="V", distance="Sporta"),
            make_record("Ilze", gender="S", distance="Tautas"),
        ])
        _, moved = repair_cross_gender(buckets)
        assert moved == 0

    def test_disabled_policy(self):
        buckets = bucket_records([make_record("Ilze", gender="V"), make_record("Ilze", gender="S")])
        repaired, moved = repair_cross_gender(buckets, GenderRepairPolicy(enabled=False))
        assert moved == 0
        assert len(repaired) == 2

    def test_reverse_direction(self):
        """Direction is configurable."""
        buckets = bucket_records([make_record("Ilze", gender="V"), make_record("Ilze", gender="S")])
        repaired, moved = repair_cross_gender(buckets, GenderRepairPolicy(source="S", target="V"))
        assert moved == 1
        assert list(repaired) == [IdentityKey("ilze", "Tautas", "V")]


# =============================================================================
# Test ranking and planning
# =============================================================================

class TestRankMembers:
    """Tests for rank_members and is_duplicate_group."""

    def test_canonical_first_then_lowest_id(self):
        group = [
            make_record("Davis Pazars", id=1),
            make_record("Dāvis Pazars", id=9),
            make_record("Dāvis Pazars", id=4),
        ]
        ranked = rank_members(group)
        assert [r.id for r in ranked] == [4, 9, 1]

    def test_single_spelling_is_not_duplicate(self):
        group = [make_record("Anna", season="2022-2023"), make_record("Anna")]
        assert is_duplicate_group(group) is False

    def test_two_spellings_are_duplicate(self):
        assert is_duplicate_group([make_record("Anna"), make_record("ANNA")]) is True

    def test_identical_rows_merge_when_asked(self):
        group = [make_record("Anna", id=1), make_record("Anna", id=2)]
        assert is_duplicate_group(group, merge_identical=True) is True
        assert is_duplicate_group(group[:1], merge_identical=True) is False


class TestPlanMerges:
    """Tests for plan_merges function."""

    def test_plans_merge_into_canonical(self):
        plan = plan_merges([
            make_record("Davis Pazars", id=1, season="2022-2023"),
            make_record("Dāvis Pazars", id=2),
        ])
        assert plan.total_merges == 1
        action = plan.actions[0]
        assert (action.old_id, action.old_name) == (1, "Davis Pazars")
        assert (action.new_id, action.new_name) == (2, "Dāvis Pazars")
        assert plan.keeper_keys == {2: IdentityKey("davis pazars", "Tautas", "V")}

    def test_idempotent_after_merge(self):
        """Second run on the merged result plans nothing."""
        records = [make_record("Davis Pazars", id=1), make_record("Dāvis Pazars", id=2)]
        plan = plan_merges(records)
        merged_away = {a.old_id for a in plan.actions}

        survivors = [r for r in records if r.id not in merged_away]
        assert plan_merges(survivors).total_merges == 0

    def test_never_merges_across_distance(self):
        plan = plan_merges([
            make_record("Dāvis Pazars", id=1, distance="Tautas"),
            make_record("Davis Pazars", id=2, distance="Sporta"),
        ])
        assert plan.total_merges == 0

    def test_cross_gender_same_spelling_merges(self):
        """A relocated record is folded in even when spelled identically."""
        plan = plan_merges([
            make_record("Ilze Kronberga", id=1, gender="V"),
            make_record("Ilze Kronberga", id=2, gender="S"),
        ])
        assert plan.cross_gender_moves == 1
        assert plan.total_merges == 1
        # Lowest id keeps the row; it ends up under the target gender
        assert plan.actions[0].old_id == 2
        assert plan.actions[0].new_id == 1
        assert plan.keeper_keys[1].gender == "S"

    def test_unique_keepers(self):
        plan = plan_merges([
            make_record("Anna", id=1), make_record("ANNA", id=2), make_record("anna", id=3),
            make_record("Juris", id=4), make_record("JURIS", id=5),
        ])
        assert plan.total_merges == 3
        assert plan.unique_keepers == 2

    def test_merge_identical_folds_same_spelling_rows(self):
        """Database rows: one spelling stored twice is still one identity."""
        records = [make_record("Dāvis Pazars", id=3), make_record("Dāvis Pazars", id=1)]
        assert plan_merges(records).total_merges == 0

        plan = plan_merges(records, merge_identical=True)
        assert [(a.old_id, a.new_id) for a in plan.actions] == [(3, 1)]
        assert plan.keeper_keys == {1: IdentityKey("davis pazars", "Tautas", "V")}

    def test_lone_row_without_key_is_backfilled(self):
        stored = make_record("Juris", id=2)
        stored.normalized_name = "juris"
        plan = plan_merges([make_record("Kristaps Bērziņš", id=1), stored, make_record("Anna")])
        assert plan.total_merges == 0
        assert plan.backfill_keys == {1: IdentityKey("kristaps berzins", "Tautas", "V")}
