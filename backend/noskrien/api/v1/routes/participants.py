"""
Participant endpoints.

Endpoints:
- GET /participants/search?name=&distance=  - Distinct names, diacritic-insensitive
- GET /participants/history?name=           - All races of a name with category
- GET /participants/{participant_id}        - Participant with races, newest first
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from noskrien.config import settings
from noskrien.db.session import get_async_db
from noskrien.features.participants import (
    HistoryRaceResponse,
    HistoryResponse,
    ParticipantRepository,
    ParticipantResponse,
    ParticipantService,
    RaceRepository,
    RaceResponse,
    SearchResultResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/participants", tags=["Participants"])

MIN_QUERY_LENGTH = 2


@router.get("/search", response_model=list[SearchResultResponse])
async def search_participants(
    name: str = Query(..., description="Name fragment, with or without Latvian letters"),
    distance: Optional[str] = Query(None, description="Tautas or Sporta"),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Search names.

    "Berzins" finds "Bērziņš". Queries shorter than two characters
    return an empty list.
    """
    query = name.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    repo = ParticipantRepository(db)
    rows = await repo.search(query, distance=distance, limit=settings.search_limit)
    return [
        SearchResultResponse(id=participant_id, name=found, gender=gender)
        for participant_id, found, gender in rows
    ]


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_db),
):
    """Race history for an exact name, oldest first."""
    races = await ParticipantService(db).get_race_history(name)
    return HistoryResponse(
        name=name,
        races=[
            HistoryRaceResponse(
                date=race.date,
                result=race.result,
                km=race.km,
                location=race.location,
                season=race.season,
                category=race.category,
            )
            for race in races
        ],
    )


@router.get("/{participant_id}", response_model=ParticipantResponse)
async def get_participant(participant_id: int, db: AsyncSession = Depends(get_async_db)):
    """Participant detail with races, newest first."""
    participant = await ParticipantRepository(db).get_by_id(participant_id)
    if not participant:
        raise HTTPException(status_code=404, detail="Participant not found")

    races = await RaceRepository(db).get_for_participant(participant_id)
    return ParticipantResponse(
        id=participant.id,
        name=participant.name,
        normalized_name=participant.normalized_name,
        distance=participant.distance,
        gender=participant.gender,
        season=participant.season,
        link=participant.link,
        races=[RaceResponse.model_validate(race) for race in races],
    )
