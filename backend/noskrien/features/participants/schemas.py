"""
Participant schemas.

Pydantic models for participant API responses.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class RaceResponse(BaseModel):
    """Race row as stored."""

    date: str
    result: str
    km: str
    location: str
    season: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class HistoryRaceResponse(RaceResponse):
    """Race row with the owning participant's distance as category."""

    category: Optional[str] = None


class HistoryResponse(BaseModel):
    """Full race history for a name."""

    name: str
    races: list[HistoryRaceResponse] = []


class SearchResultResponse(BaseModel):
    """Distinct name found by search."""

    id: int
    name: str
    gender: str


class ParticipantResponse(BaseModel):
    """Participant with races (newest first)."""

    id: int
    name: str
    normalized_name: Optional[str] = None
    distance: str
    gender: str
    season: Optional[str] = None
    link: Optional[str] = None
    races: list[RaceResponse] = []

    model_config = ConfigDict(from_attributes=True)
