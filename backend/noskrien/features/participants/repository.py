"""
Participant repositories.

Data access layer for Participant and Race models. This is the storage
side of the merge engine: list everything, upsert canonical identities,
insert races once, reassign races, delete absorbed participants.
"""

from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import raiseload

from noskrien.shared.latvian import LATVIAN_CHAR_MAP, match_key, search_variants
from noskrien.shared.repository import BaseRepository
from .models import Participant, Race


def _folded(column):
    """SQL expression folding Latvian letters and case, like match_key()."""
    expr = func.lower(column)
    for char, ascii_char in LATVIAN_CHAR_MAP.items():
        expr = func.replace(expr, char, ascii_char.lower())
    return expr


class ParticipantRepository(BaseRepository[Participant]):
    """Repository for Participant operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Participant)

    async def list_all(self) -> list[Participant]:
        """
        Full scan of participants for batch merging, ordered by id.

        Races are not loaded; touching them raises.
        """
        result = await self.db.execute(
            select(Participant)
            .options(raiseload(Participant.races))
            .order_by(Participant.id)
        )
        return list(result.scalars().all())

    async def get_by_identity(
        self,
        normalized_name: str,
        distance: str,
        gender: str,
    ) -> Participant | None:
        """Get participant by identity key."""
        return await self.get_by(
            normalized_name=normalized_name,
            distance=distance,
            gender=gender,
        )

    async def get_legacy_match(
        self,
        normalized_name: str,
        distance: str,
        gender: str,
    ) -> Participant | None:
        """
        Oldest row stored without a match key whose name folds to normalized_name.

        Rows imported before normalization have NULL normalized_name and
        would otherwise never be found by identity.
        """
        result = await self.db.execute(
            select(Participant)
            .where(
                Participant.normalized_name.is_(None),
                Participant.distance == distance,
                Participant.gender == gender,
            )
            .order_by(Participant.id)
        )
        for participant in result.scalars():
            if match_key(participant.name) == normalized_name:
                return participant
        return None

    async def upsert_canonical(
        self,
        name: str,
        normalized_name: str,
        distance: str,
        gender: str,
        **kwargs,
    ) -> tuple[Participant, bool]:
        """
        Insert or update participant keyed by identity.

        On conflict the stored name becomes the newly selected canonical name.
        A legacy row without a match key is adopted when its name folds to
        the same key.

        Returns:
            Tuple of (participant, created)
        """
        participant = await self.get_by_identity(normalized_name, distance, gender)
        if participant is None:
            participant = await self.get_legacy_match(normalized_name, distance, gender)
        if participant:
            changes = {}
            if participant.name != name:
                changes["name"] = name
            if participant.normalized_name != normalized_name:
                changes["normalized_name"] = normalized_name
            if changes:
                await self.update(participant, **changes)
            return participant, False

        participant = await self.create(
            name=name,
            normalized_name=normalized_name,
            distance=distance,
            gender=gender,
            **kwargs,
        )
        return participant, True

    async def delete_by_id(self, participant_id: int) -> int:
        """
        Delete participant row by id without touching its races.

        Returns:
            Number of deleted rows
        """
        result = await self.db.execute(
            delete(Participant)
            .where(Participant.id == participant_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def search(
        self,
        query: str,
        distance: str | None = None,
        limit: int = 10,
    ) -> list[tuple[int, str, str]]:
        """
        Distinct names matching query, diacritic-insensitive.

        Matches every query variant against the name case-insensitively,
        and the folded query against the folded name (so "Berzins" finds
        "Bērziņš").

        Returns:
            List of (lowest id, name, gender)
        """
        conditions = [
            func.lower(Participant.name).contains(variant.lower(), autoescape=True)
            for variant in search_variants(query)
        ]
        conditions.append(_folded(Participant.name).contains(match_key(query), autoescape=True))

        stmt = (
            select(func.min(Participant.id), Participant.name, Participant.gender)
            .where(or_(*conditions))
        )
        if distance:
            stmt = stmt.where(Participant.distance == distance)
        stmt = (
            stmt.group_by(Participant.name, Participant.gender)
            .order_by(Participant.name)
            .limit(limit)
        )

        result = await self.db.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def get_history(self, name: str) -> list[tuple[Race, str]]:
        """
        All races of participants with this exact name.

        Returns:
            List of (race, participant distance) ordered by date
        """
        result = await self.db.execute(
            select(Race, Participant.distance)
            .join(Participant, Race.participant_id == Participant.id)
            .where(Participant.name == name)
            .order_by(Race.date)
        )
        return [(race, distance) for race, distance in result.all()]


class RaceRepository(BaseRepository[Race]):
    """Repository for Race operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Race)

    async def get_for_participant(self, participant_id: int) -> list[Race]:
        """Races of a participant, newest first."""
        result = await self.db.execute(
            select(Race)
            .where(Race.participant_id == participant_id)
            .order_by(Race.date.desc())
        )
        return list(result.scalars().all())

    async def insert_if_absent(
        self,
        participant_id: int,
        date: str,
        location: str,
        **kwargs,
    ) -> bool:
        """
        Insert race unless the participant already has one on that date
        at that venue.

        Returns:
            True if a row was inserted
        """
        existing = await self.get_by(
            participant_id=participant_id,
            date=date,
            location=location,
        )
        if existing:
            return False
        await self.create(
            participant_id=participant_id,
            date=date,
            location=location,
            **kwargs,
        )
        return True

    async def reassign(self, old_participant_id: int, new_participant_id: int) -> int:
        """
        Move all races from one participant to another.

        Returns:
            Number of moved races
        """
        result = await self.db.execute(
            update(Race)
            .where(Race.participant_id == old_participant_id)
            .values(participant_id=new_participant_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def delete_duplicates_for(self, participant_id: int) -> int:
        """
        Drop races repeated on the same date and venue, keeping the oldest row.

        Reassignment can leave the keeper with two copies of one race.

        Returns:
            Number of deleted rows
        """
        races = await self.get_for_participant(participant_id)
        seen: set[tuple[str, str]] = set()
        doomed: list[int] = []
        for race in sorted(races, key=lambda r: r.id):
            key = (race.date, race.location.strip())
            if key in seen:
                doomed.append(race.id)
            else:
                seen.add(key)

        if not doomed:
            return 0
        result = await self.db.execute(
            delete(Race)
            .where(Race.id.in_(doomed))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
