"""Gender-consistency repair.

The results site sometimes lists the same person in both the men's and the
women's file of a distance. Observed data says the women's file is right, so
the default policy moves men's records into the women's bucket. Direction is
a policy parameter, not a law.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from noskrien.shared.constants import Gender

from .models import IdentityKey, ParticipantRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenderRepairPolicy:
    """Which bucket wins when a name appears under both genders."""

    source: str = Gender.MALE.value  # records are moved out of this bucket
    target: str = Gender.FEMALE.value  # ...into this one
    enabled: bool = True

    @classmethod
    def from_settings(cls, settings) -> "GenderRepairPolicy":
        return cls(
            source=settings.gender_repair_source,
            target=settings.gender_repair_target,
            enabled=settings.gender_repair_enabled,
        )


def repair_cross_gender(
    buckets: dict[IdentityKey, list[ParticipantRecord]],
    policy: GenderRepairPolicy | None = None,
) -> tuple[dict[IdentityKey, list[ParticipantRecord]], int]:
    """Move records filed under the wrong gender.

    For every (normalized_name, distance) present under both policy.source
    and policy.target, source records join the target bucket with their
    gender overwritten and the source key is dropped.

    Args:
        buckets: Identity key -> records. Not mutated.
        policy: Direction of the repair; default moves V -> S.

    Returns:
        (new buckets, number of moved records)
    """
    policy = policy or GenderRepairPolicy()
    repaired = {key: list(group) for key, group in buckets.items()}
    if not policy.enabled or policy.source == policy.target:
        return repaired, 0

    moved = 0
    for key, group in buckets.items():
        if key.gender != policy.source:
            continue
        target_key = IdentityKey(key.normalized_name, key.distance, policy.target)
        if target_key not in repaired:
            continue

        repaired[target_key].extend(
            replace(
                record,
                gender=policy.target,
                original_gender=record.original_gender or record.gender,
            )
            for record in group
        )
        del repaired[key]
        moved += len(group)
        logger.debug(
            "Moved %d record(s) of '%s' (%s) from %s to %s",
            len(group), key.normalized_name, key.distance, policy.source, policy.target,
        )

    if moved:
        logger.info("Fixed %d cross-gender duplicates (%s -> %s)", moved, policy.source, policy.target)
    return repaired, moved
