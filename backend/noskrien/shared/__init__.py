"""
Shared utilities (NOT business logic).

Usage:
    from noskrien.shared import match_key, derive_season
    from noskrien.shared.formatters import format_pace
"""
from .latvian import (
    LATVIAN_CHAR_MAP,
    normalize,
    count_accented,
    has_natural_casing,
    match_key,
    search_variants,
)
from .seasons import derive_season
from .formatters import format_pace, format_diff
from .constants import (
    DistanceCategory,
    Gender,
    DEFAULT_CATEGORY,
    DISTANCE_TOLERANCE_KM,
    NO_TIME_MARKERS,
    GENDER_FILE_NAMES,
    gender_from_filename,
)
from .exceptions import NoskrienError, DataDirectoryError, MergeExecutionError
from .repository import BaseRepository

__all__ = [
    # latvian
    "LATVIAN_CHAR_MAP",
    "normalize",
    "count_accented",
    "has_natural_casing",
    "match_key",
    "search_variants",
    # seasons
    "derive_season",
    # formatters
    "format_pace",
    "format_diff",
    # constants
    "DistanceCategory",
    "Gender",
    "DEFAULT_CATEGORY",
    "DISTANCE_TOLERANCE_KM",
    "NO_TIME_MARKERS",
    "GENDER_FILE_NAMES",
    "gender_from_filename",
    # exceptions
    "NoskrienError",
    "DataDirectoryError",
    "MergeExecutionError",
    # repository
    "BaseRepository",
]
