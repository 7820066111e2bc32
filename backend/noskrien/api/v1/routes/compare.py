"""
Head-to-head comparison endpoint.

Both histories are read one after the other on the same session, then
compared in memory.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from noskrien.config import settings
from noskrien.db.session import get_async_db
from noskrien.features.comparison import (
    CompareResponse,
    ComparisonRowResponse,
    ComparisonSummaryResponse,
    arrange_for_display,
    compare_races,
    summarize,
)
from noskrien.features.participants import ParticipantService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Compare"])


@router.get("/compare", response_model=CompareResponse)
async def compare(
    name1: str = Query(..., min_length=1),
    name2: str = Query(..., min_length=1),
    category: Optional[str] = Query(None, description="Tautas or Sporta"),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Compare two participants on the races they both ran.

    The participant with more wins is shown second, so positive diffs
    read as "the first one was slower".
    """
    category = category or settings.default_category
    service = ParticipantService(db)
    history1 = await service.get_race_history(name1)
    history2 = await service.get_race_history(name2)

    rows = compare_races(history1, history2, category, settings.distance_tolerance_km)
    head_to_head = arrange_for_display(rows, name1, name2)
    summary = summarize(head_to_head.rows)
    logger.debug(
        "Compared '%s' and '%s' (%s): %d common races, swapped=%s",
        name1, name2, category, len(rows), head_to_head.swapped,
    )

    return CompareResponse(
        name1=head_to_head.first_name,
        name2=head_to_head.second_name,
        category=category,
        swapped=head_to_head.swapped,
        rows=[ComparisonRowResponse.model_validate(row) for row in head_to_head.rows],
        summary=ComparisonSummaryResponse.model_validate(summary),
    )
