"""Race comparator: align two race histories and compute pace deltas."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from noskrien.shared.constants import DEFAULT_CATEGORY, DISTANCE_TOLERANCE_KM
from noskrien.shared.seasons import derive_season

from .models import ComparisonSummary, HeadToHead, RaceComparisonRow
from .parsing import calculate_pace, parse_distance, parse_time

logger = logging.getLogger(__name__)


class RaceLike(Protocol):
    date: str
    result: str
    km: str
    location: str
    category: str | None


def effective_category(race: RaceLike) -> str:
    """Race category, trimmed; races without one are baseline class."""
    category = (race.category or "").strip()
    return category or DEFAULT_CATEGORY


def race_key(race: RaceLike) -> tuple[str, str, str]:
    """Composite match key: date, trimmed venue, category."""
    return (race.date, (race.location or "").strip(), effective_category(race))


def compare_races(
    races_a: Iterable[RaceLike],
    races_b: Iterable[RaceLike],
    category: str,
    tolerance_km: float = DISTANCE_TOLERANCE_KM,
) -> list[RaceComparisonRow]:
    """Races both participants ran, with pace per km and the difference.

    A race pair counts when date, venue and category match, both have a
    time, and their distances differ by less than tolerance_km (a 10 km
    and a 20 km course can share a date and venue).

    Args:
        races_a: First participant's history
        races_b: Second participant's history
        category: Only races of this category are compared
        tolerance_km: Max distance difference for the same race

    Returns:
        Rows sorted by date; diff < 0 means A was faster. Empty when
        nothing matches.
    """
    by_key = {race_key(r): r for r in races_b}
    rows: list[RaceComparisonRow] = []

    for race_a in races_a:
        key = race_key(race_a)
        if key[2] != category:
            continue

        race_b = by_key.get(key)
        if race_b is None:
            continue
        if (race_a.location or "").strip() != (race_b.location or "").strip():
            continue

        time_a = parse_time(race_a.result)
        time_b = parse_time(race_b.result)
        if time_a is None or time_b is None:
            continue

        km_a = parse_distance(race_a.km)
        km_b = parse_distance(race_b.km)
        if km_a is None or km_b is None or km_a <= 0 or km_b <= 0:
            continue
        if abs(km_a - km_b) >= tolerance_km:
            continue

        pace_a = calculate_pace(time_a, km_a)
        pace_b = calculate_pace(time_b, km_b)
        try:
            season = derive_season(race_a.date)
        except ValueError:
            logger.debug("Skipping common race with bad date %r", race_a.date)
            continue

        rows.append(
            RaceComparisonRow(
                date=race_a.date,
                race=race_a.location,
                season=season,
                pace1=pace_a,
                pace2=pace_b,
                diff=pace_a - pace_b,
                p1_time=race_a.result,
                p2_time=race_b.result,
                distance=km_a,
            )
        )

    rows.sort(key=lambda row: row.date)
    return rows


def count_wins(rows: Iterable[RaceComparisonRow]) -> tuple[int, int]:
    """(first participant's wins, second participant's wins)."""
    first = second = 0
    for row in rows:
        if row.diff < 0:
            first += 1
        elif row.diff > 0:
            second += 1
    return first, second


def arrange_for_display(
    rows: list[RaceComparisonRow],
    first_name: str,
    second_name: str,
) -> HeadToHead:
    """Decide which participant is shown first.

    If the first participant won more races, the pair is swapped: names,
    paces and times trade places and diff changes sign. Equal win counts
    keep the input order.
    """
    first_wins, second_wins = count_wins(rows)
    if first_wins > second_wins:
        return HeadToHead(
            first_name=second_name,
            second_name=first_name,
            rows=[row.swapped() for row in rows],
            swapped=True,
            first_wins=second_wins,
            second_wins=first_wins,
        )
    return HeadToHead(
        first_name=first_name,
        second_name=second_name,
        rows=list(rows),
        swapped=False,
        first_wins=first_wins,
        second_wins=second_wins,
    )


def summarize(rows: list[RaceComparisonRow]) -> ComparisonSummary:
    """Win counts and pace difference statistics."""
    first_wins, second_wins = count_wins(rows)
    diffs = [row.diff for row in rows]
    return ComparisonSummary(
        races=len(rows),
        first_wins=first_wins,
        second_wins=second_wins,
        ties=len(rows) - first_wins - second_wins,
        avg_diff=sum(diffs) / len(diffs) if diffs else None,
        best_diff=min(diffs) if diffs else None,
        worst_diff=max(diffs) if diffs else None,
    )
