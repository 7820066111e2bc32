"""
Unified constants for distance categories and genders.

This module provides a single source of truth for the category and gender
codes used by the data files, the database and the API.
"""

from enum import Enum


class DistanceCategory(str, Enum):
    """
    Distance classes of the Noskrien Ziemu series.

    Used in:
    - Data directory layout (data/<season>/<distance>/)
    - Participant identity key
    - Comparison category filter
    """
    TAUTAS = "Tautas"  # shorter, recreational
    SPORTA = "Sporta"  # longer, competitive


class Gender(str, Enum):
    """
    Gender codes as used by the results site.

    The site splits results into men's and women's files, and the codes
    are the Latvian initials.
    """
    MALE = "V"  # vīrieši
    FEMALE = "S"  # sievietes
    UNKNOWN = "U"


# Races without an explicit category belong to the baseline class
DEFAULT_CATEGORY = DistanceCategory.TAUTAS.value

# Same event, different measured distance for different participants
DISTANCE_TOLERANCE_KM = 0.5

# Result values that mean "not finished / not timed"
NO_TIME_MARKERS: frozenset[str] = frozenset({"", "0", "x", "-"})

# Result files inside data/<season>/<distance>/
GENDER_FILE_NAMES: dict[str, str] = {
    Gender.MALE.value: "results_men.json",
    Gender.FEMALE.value: "results_women.json",
    Gender.UNKNOWN.value: "results_unknown.json",
}


def gender_from_filename(filename: str) -> str:
    """
    Infer gender code from a results file name.

    'women' is checked first since 'men' is a substring of it.
    """
    lower = filename.lower()
    if "women" in lower:
        return Gender.FEMALE.value
    if "men" in lower:
        return Gender.MALE.value
    return Gender.UNKNOWN.value
