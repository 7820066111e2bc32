"""
Participant service.

Materializes a normalized dataset into storage and reads race histories
back out for the comparator.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from noskrien.features.normalization.models import CanonicalParticipant, RaceEntry
from .repository import ParticipantRepository, RaceRepository

logger = logging.getLogger(__name__)


@dataclass
class ImportStats:
    """Counters of one import run."""

    participants_created: int = 0
    participants_updated: int = 0
    races_inserted: int = 0
    races_skipped: int = 0


class ParticipantService:
    """
    Storage-facing operations on participants.

    Usage:
        service = ParticipantService(db)
        stats = await service.import_canonical(result.participants)
        await db.commit()
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.participants = ParticipantRepository(db)
        self.races = RaceRepository(db)

    async def import_canonical(self, participants: list[CanonicalParticipant]) -> ImportStats:
        """
        Upsert participants and insert their races once.

        Safe to run repeatedly: existing identities keep their id, races
        already present (same date and venue) are not inserted again.
        Races without a season are skipped.
        """
        stats = ImportStats()

        for canonical in participants:
            first_season = next((r.season for r in canonical.races if r.season), None)
            participant, created = await self.participants.upsert_canonical(
                name=canonical.name,
                normalized_name=canonical.normalized_name,
                distance=canonical.distance,
                gender=canonical.gender,
                season=first_season,
                link=canonical.link,
            )
            if created:
                stats.participants_created += 1
            else:
                stats.participants_updated += 1

            for race in canonical.races:
                if not race.season:
                    stats.races_skipped += 1
                    continue
                inserted = await self.races.insert_if_absent(
                    participant_id=participant.id,
                    date=race.date,
                    location=race.location,
                    result=race.result,
                    km=race.km,
                    season=race.season,
                )
                if inserted:
                    stats.races_inserted += 1
                else:
                    stats.races_skipped += 1

        logger.info(
            "Imported participants: %d created, %d updated; races: %d inserted, %d skipped",
            stats.participants_created,
            stats.participants_updated,
            stats.races_inserted,
            stats.races_skipped,
        )
        return stats

    async def get_race_history(self, name: str) -> list[RaceEntry]:
        """
        Races of everyone stored under this exact name.

        Category comes from the owning participant's distance.
        """
        rows = await self.participants.get_history(name)
        return [
            RaceEntry(
                date=race.date,
                result=race.result,
                km=race.km,
                location=race.location,
                season=race.season,
                category=distance,
            )
            for race, distance in rows
        ]
