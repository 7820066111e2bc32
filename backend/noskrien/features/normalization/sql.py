"""SQL emission: idempotent import script from canonical participants.

Generates:
- UPSERT statements for participants (ON CONFLICT DO UPDATE keeps the
  newly selected canonical name)
- Conditional INSERT statements for races (NOT EXISTS on participant,
  date and venue)

The script is safe to run any number of times.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .models import CanonicalParticipant

logger = logging.getLogger(__name__)


@dataclass
class SqlScript:
    """Generated SQL plus statement counts."""

    sql: str
    participant_count: int
    race_count: int


def escape_sql_string(value: str) -> str:
    """Escape a string literal by doubling single quotes."""
    return value.replace("'", "''")


def participant_upsert(participant: CanonicalParticipant) -> str:
    name = escape_sql_string(participant.name)
    normalized = escape_sql_string(participant.normalized_name)
    distance = escape_sql_string(participant.distance)
    gender = escape_sql_string(participant.gender)
    return (
        "INSERT INTO participants (name, distance, gender, normalized_name)\n"
        f"VALUES ('{name}', '{distance}', '{gender}', '{normalized}')\n"
        "ON CONFLICT(normalized_name, distance, gender)\n"
        "DO UPDATE SET name = excluded.name;\n"
    )


def race_insert(participant: CanonicalParticipant, race) -> str:
    normalized = escape_sql_string(participant.normalized_name)
    distance = escape_sql_string(participant.distance)
    gender = escape_sql_string(participant.gender)
    date = escape_sql_string(race.date)
    result = escape_sql_string(race.result)
    km = escape_sql_string(race.km)
    location = escape_sql_string(race.location)
    season = escape_sql_string(race.season)
    return (
        "INSERT INTO races (participant_id, date, result, km, location, season)\n"
        f"SELECT p.id, '{date}', '{result}', '{km}', '{location}', '{season}'\n"
        "FROM participants p\n"
        f"WHERE p.normalized_name = '{normalized}'\n"
        f"  AND p.distance = '{distance}'\n"
        f"  AND p.gender = '{gender}'\n"
        "AND NOT EXISTS (\n"
        "  SELECT 1 FROM races r\n"
        "  WHERE r.participant_id = p.id\n"
        f"    AND r.date = '{date}'\n"
        f"    AND r.location = '{location}'\n"
        ");\n"
    )


def generate_sql(participants: Iterable[CanonicalParticipant]) -> SqlScript:
    """Build the import script.

    Races without a season (bad date upstream) are left out with a warning.
    """
    statements: list[str] = []
    participant_count = 0
    race_count = 0

    for participant in participants:
        statements.append(participant_upsert(participant))
        participant_count += 1

        for race in participant.races:
            if not race.season:
                logger.warning(
                    "Race for '%s' on %s missing season, skipping", participant.name, race.date
                )
                continue
            statements.append(race_insert(participant, race))
            race_count += 1

    logger.info(
        "Generated %d participant UPSERT and %d race INSERT statements",
        participant_count, race_count,
    )
    return SqlScript(
        sql="\n".join(statements),
        participant_count=participant_count,
        race_count=race_count,
    )
