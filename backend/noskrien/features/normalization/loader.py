"""Data directory reader/writer for scraped results.

Layout (written by the scraper):
    data/
      2023-2024/
        Tautas/
          results_men.json
          results_women.json
        Sporta/
          ...

Each file is a JSON list of participants:
    {"name": "Dāvis Pazars", "link": "...", "races": [
        {"Datums": "2023-11-26", "Rezultāts": "52:09", "km": "10,0", "Vieta": "Smiltene"}
    ]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from noskrien.shared.constants import GENDER_FILE_NAMES, gender_from_filename
from noskrien.shared.exceptions import DataDirectoryError

from .models import CanonicalParticipant, ParticipantRecord, RaceEntry

logger = logging.getLogger(__name__)


def _race_from_json(raw: dict) -> RaceEntry | None:
    """Map scraper keys to RaceEntry. None if a required field is missing."""
    try:
        return RaceEntry(
            date=str(raw["Datums"]).strip(),
            result=str(raw.get("Rezultāts", "")),
            km=str(raw.get("km", "")),
            location=str(raw["Vieta"]),
            season=raw.get("season"),
            category=raw.get("category"),
        )
    except (KeyError, TypeError):
        return None


def _race_to_json(race: RaceEntry) -> dict:
    raw = {
        "Datums": race.date,
        "Rezultāts": race.result,
        "km": race.km,
        "Vieta": race.location,
    }
    if race.season:
        raw["season"] = race.season
    return raw


def iter_result_files(data_dir: Path):
    """Yield (season, distance, path) for every results file, sorted."""
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise DataDirectoryError(f"Data directory not found: {data_dir}")

    for season_dir in sorted(p for p in data_dir.iterdir() if p.is_dir()):
        for distance_dir in sorted(p for p in season_dir.iterdir() if p.is_dir()):
            for path in sorted(distance_dir.glob("*.json")):
                yield season_dir.name, distance_dir.name, path


def load_data_dir(data_dir: Path) -> list[ParticipantRecord]:
    """Read all participant records under data_dir.

    Participants without a name are skipped with a warning; races missing
    their date or venue are dropped.

    Raises:
        DataDirectoryError: If data_dir does not exist
    """
    records: list[ParticipantRecord] = []
    dropped_races = 0

    for season, distance, path in iter_result_files(data_dir):
        gender = gender_from_filename(path.name)
        try:
            participants = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataDirectoryError(f"Invalid JSON in {path}: {e}") from e

        for raw in participants:
            name = (raw.get("name") or "").strip()
            if not name:
                logger.warning("Participant without name in %s, skipping", path)
                continue

            races = []
            for raw_race in raw.get("races") or []:
                race = _race_from_json(raw_race)
                if race is None:
                    dropped_races += 1
                    continue
                races.append(race)

            records.append(
                ParticipantRecord(
                    name=name,
                    link=raw.get("link"),
                    season=season,
                    distance=distance,
                    gender=gender,
                    races=races,
                )
            )

    logger.info("Loaded %d participants from %s", len(records), data_dir)
    if dropped_races:
        logger.warning("Dropped %d races with missing date or venue", dropped_races)
    return records


def write_data_dir(data_dir: Path, participants: list[CanonicalParticipant]) -> dict[Path, int]:
    """Write canonical participants back into the season/distance layout.

    A participant appears in every season file its records came from and
    in every season where it has races, with only that season's races.
    Participants without races keep their entry, and races with an
    unparseable date go back to their original season unchanged. Result
    files that end up with no participants are rewritten as empty lists.

    Returns:
        {file path: number of participants written}
    """
    data_dir = Path(data_dir)
    files: dict[Path, list[dict]] = {}

    for participant in participants:
        file_name = GENDER_FILE_NAMES.get(participant.gender, GENDER_FILE_NAMES["U"])
        by_season: dict[str, list[RaceEntry]] = {season: [] for season in participant.seasons}
        for race in participant.races:
            by_season.setdefault(race.season, []).append(race)
        for season, race in participant.undated_races:
            by_season.setdefault(season, []).append(race)

        for season, races in by_season.items():
            path = data_dir / season / participant.distance / file_name
            files.setdefault(path, []).append(
                {
                    "name": participant.name,
                    "link": participant.link,
                    "races": [_race_to_json(r) for r in races],
                    "normalized_name": participant.normalized_name,
                }
            )

    if data_dir.is_dir():
        for _, _, path in iter_result_files(data_dir):
            files.setdefault(path, [])

    written: dict[Path, int] = {}
    for path, entries in sorted(files.items()):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(entries, ensure_ascii=False, indent=2), encoding="utf-8")
        written[path] = len(entries)
        logger.debug("%s/%s: %d participants", path.parent.name, path.name, len(entries))

    logger.info("Wrote %d result files to %s", len(written), data_dir)
    return written
