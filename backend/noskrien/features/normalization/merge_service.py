"""
Database merge of duplicate participants.

Finds participants whose names differ only by Latvian characters (or
casing), within the same distance and gender, and folds them into one
keeper row.

Merge Flow:
1. Load every participant (no races)
2. Plan merges with the same grouping as the file pipeline; any two rows
   in one bucket are merged, even when spelled identically
3. Preview: return the plan, touch nothing
4. Execute, per action in its own savepoint:
   - reassign races old -> keeper
   - delete the old participant
5. Give each keeper its canonical match key and gender, drop repeated races
6. Fill in the match key of lone legacy rows (NULL normalized_name)
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from noskrien.features.participants.repository import ParticipantRepository, RaceRepository
from noskrien.shared.exceptions import MergeExecutionError

from .gender_repair import GenderRepairPolicy
from .grouping import plan_merges
from .models import MergeAction, MergePlan, ParticipantRecord

logger = logging.getLogger(__name__)


@dataclass
class MergeExecution:
    """Outcome of an executed merge."""

    plan: MergePlan
    updated_races: int = 0
    deleted_participants: int = 0
    removed_duplicate_races: int = 0
    backfilled_keys: int = 0
    applied: list[MergeAction] = field(default_factory=list)


class MergeService:
    """
    Plans and applies participant merges against storage.

    Usage:
        service = MergeService(db)
        plan = await service.preview()
        execution = await service.execute()
        await db.commit()
    """

    def __init__(self, db: AsyncSession, policy: GenderRepairPolicy | None = None):
        self.db = db
        self.policy = policy
        self.participants = ParticipantRepository(db)
        self.races = RaceRepository(db)

    async def _load_records(self) -> list[ParticipantRecord]:
        rows = await self.participants.list_all()
        logger.info("Found %d participants", len(rows))
        return [
            ParticipantRecord(
                id=row.id,
                name=row.name,
                link=row.link,
                season=row.season or "",
                distance=row.distance,
                gender=row.gender,
                normalized_name=row.normalized_name,
            )
            for row in rows
        ]

    async def preview(self) -> MergePlan:
        """Compute the merge plan without writing anything."""
        return plan_merges(await self._load_records(), self.policy, merge_identical=True)

    async def _apply(self, action: MergeAction) -> tuple[int, int]:
        """Reassign then delete, atomically for this one action."""
        async with self.db.begin_nested():
            moved = await self.races.reassign(action.old_id, action.new_id)
            deleted = await self.participants.delete_by_id(action.old_id)
        return moved, deleted

    async def _finalize_keepers(self, plan: MergePlan, execution: MergeExecution) -> None:
        for keeper_id, key in plan.keeper_keys.items():
            keeper = await self.participants.get_by_id(keeper_id)
            if keeper is None:
                continue
            async with self.db.begin_nested():
                await self.participants.update(
                    keeper,
                    normalized_name=key.normalized_name,
                    gender=key.gender,
                )
                execution.removed_duplicate_races += await self.races.delete_duplicates_for(keeper_id)

        for participant_id, key in plan.backfill_keys.items():
            participant = await self.participants.get_by_id(participant_id)
            if participant is None:
                continue
            await self.participants.update(participant, normalized_name=key.normalized_name)
            execution.backfilled_keys += 1

    async def execute(self) -> MergeExecution:
        """
        Apply the merge plan.

        Actions run sequentially. Races move before their participant is
        deleted, so a failure never orphans races.

        Raises:
            MergeExecutionError: On the first failing action. Earlier actions
                stay applied; running again plans only what is left.
        """
        plan = await self.preview()
        execution = MergeExecution(plan=plan)

        for action in plan.actions:
            try:
                moved, deleted = await self._apply(action)
            except Exception as e:
                logger.error(
                    "Merge '%s' (id:%s) -> '%s' (id:%s) failed: %s",
                    action.old_name, action.old_id, action.new_name, action.new_id, e,
                )
                raise MergeExecutionError(action, len(execution.applied), e) from e

            execution.updated_races += moved
            execution.deleted_participants += deleted
            execution.applied.append(action)
            logger.debug(
                '"%s" (id:%s) -> "%s" (id:%s): %d races',
                action.old_name, action.old_id, action.new_name, action.new_id, moved,
            )

        await self._finalize_keepers(plan, execution)
        # Bulk statements bypass the identity map
        self.db.expire_all()

        logger.info(
            "Merged %d duplicate records: %d races moved, %d participants deleted, %d keys filled in",
            len(execution.applied), execution.updated_races, execution.deleted_participants,
            execution.backfilled_keys,
        )
        return execution
