"""
Participant storage module.

Usage:
    from noskrien.features.participants import Participant, ParticipantRepository

Models:
- Participant: One identity per (normalized_name, distance, gender)
- Race: Race result owned by a participant

Repositories:
- ParticipantRepository: Data access for participants
- RaceRepository: Data access for races
"""

from .models import Participant, Race
from .schemas import (
    RaceResponse,
    HistoryRaceResponse,
    HistoryResponse,
    SearchResultResponse,
    ParticipantResponse,
)
from .repository import ParticipantRepository, RaceRepository
from .service import ParticipantService, ImportStats

__all__ = [
    # Models
    "Participant",
    "Race",
    # Schemas
    "RaceResponse",
    "HistoryRaceResponse",
    "HistoryResponse",
    "SearchResultResponse",
    "ParticipantResponse",
    # Repositories
    "ParticipantRepository",
    "RaceRepository",
    # Services
    "ParticipantService",
    "ImportStats",
]
