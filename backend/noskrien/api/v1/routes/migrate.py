"""
Maintenance endpoints.

Endpoints:
- POST /migrate/latvian-duplicates?preview=true   - Show merge plan only
- POST /migrate/latvian-duplicates?preview=false  - Merge and commit
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from noskrien.config import settings
from noskrien.db.session import get_async_db
from noskrien.features.normalization import GenderRepairPolicy, MergeService
from noskrien.shared.exceptions import MergeExecutionError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/migrate", tags=["Migrate"])

PREVIEW_SAMPLE_SIZE = 50


# =============================================================================
# Schemas
# =============================================================================

class MergeActionSchema(BaseModel):
    old_id: Optional[int] = None
    old_name: str
    new_id: Optional[int] = None
    new_name: str
    season: str


class MergePreviewResponse(BaseModel):
    preview: bool = True
    total_merges: int
    unique_keepers: int
    cross_gender_moves: int
    merges: list[MergeActionSchema] = []


class MergeExecuteResponse(BaseModel):
    preview: bool = False
    total_merges: int
    updated_races: int
    deleted_participants: int
    removed_duplicate_races: int
    backfilled_keys: int
    cross_gender_moves: int


def _action_schema(action) -> MergeActionSchema:
    return MergeActionSchema(
        old_id=action.old_id,
        old_name=action.old_name,
        new_id=action.new_id,
        new_name=action.new_name,
        season=action.season,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/latvian-duplicates")
async def merge_latvian_duplicates(
    preview: bool = Query(True, description="Only return the plan"),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Merge participants whose names differ only in Latvian letters.

    Preview lists the first merges of the plan. Execution moves races to the
    keeper before deleting each duplicate and commits at the end.
    """
    service = MergeService(db, GenderRepairPolicy.from_settings(settings))

    if preview:
        plan = await service.preview()
        return MergePreviewResponse(
            total_merges=plan.total_merges,
            unique_keepers=plan.unique_keepers,
            cross_gender_moves=plan.cross_gender_moves,
            merges=[_action_schema(a) for a in plan.actions[:PREVIEW_SAMPLE_SIZE]],
        )

    try:
        execution = await service.execute()
        await db.commit()
    except MergeExecutionError as e:
        # Actions before the failing one are kept
        await db.commit()
        raise HTTPException(
            status_code=500,
            detail={
                "error": str(e),
                "failed_action": _action_schema(e.action).model_dump(),
                "applied": e.applied,
            },
        )

    logger.info(
        "Merged %d participants, moved %d races",
        execution.deleted_participants, execution.updated_races,
    )
    return MergeExecuteResponse(
        total_merges=execution.plan.total_merges,
        updated_races=execution.updated_races,
        deleted_participants=execution.deleted_participants,
        removed_duplicate_races=execution.removed_duplicate_races,
        backfilled_keys=execution.backfilled_keys,
        cross_gender_moves=execution.plan.cross_gender_moves,
    )
