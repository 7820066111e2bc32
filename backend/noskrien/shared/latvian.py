"""
Latvian character normalization.

Folds the eleven Latvian diacritic letters (ā, č, ē, ģ, ī, ķ, ļ, ņ, š, ū, ž)
to their ASCII equivalents. Used for name matching, never for display.

Usage:
    normalize("Dāvis Pazars")    # "Davis Pazars"
    match_key("BĒRZIŅŠ")         # "berzins"
    count_accented("Bērziņš")    # 3
"""

import re

LATVIAN_CHAR_MAP: dict[str, str] = {
    "ā": "a", "Ā": "A",
    "č": "c", "Č": "C",
    "ē": "e", "Ē": "E",
    "ģ": "g", "Ģ": "G",
    "ī": "i", "Ī": "I",
    "ķ": "k", "Ķ": "K",
    "ļ": "l", "Ļ": "L",
    "ņ": "n", "Ņ": "N",
    "š": "s", "Š": "S",
    "ū": "u", "Ū": "U",
    "ž": "z", "Ž": "Z",
}

_ASCII_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")
_TRANSLATION = str.maketrans(LATVIAN_CHAR_MAP)
_LATVIAN_CHAR_PATTERN = re.compile(f"[{''.join(LATVIAN_CHAR_MAP)}]")


def normalize(text: str) -> str:
    """
    Replace Latvian letters with ASCII letters of the same case.

    Everything else (spaces, punctuation, other letters) passes through.

    Examples:
        normalize("Dāvis Pazars")   -> "Davis Pazars"
        normalize("JĀNIS KALNIŅŠ")  -> "JANIS KALNINS"
    """
    return text.translate(_TRANSLATION)


def count_accented(text: str) -> int:
    """Number of Latvian special characters (either case) in text."""
    return len(_LATVIAN_CHAR_PATTERN.findall(text))


def has_natural_casing(text: str) -> bool:
    """
    True unless every letter in text is uppercase.

    Text without letters counts as natural.

    Examples:
        has_natural_casing("Dāvis Pazars") -> True
        has_natural_casing("DĀVIS PAZARS") -> False
    """
    letters = [ch for ch in text if ch in LATVIAN_CHAR_MAP or ch.lower() in _ASCII_LOWER]
    if not letters:
        return True
    return not all(ch.isupper() for ch in letters)


def match_key(text: str) -> str:
    """Diacritic-folded, lowercased form used for identity comparison."""
    return normalize(text).lower()


def search_variants(query: str) -> list[str]:
    """
    Query strings to try for a diacritic-insensitive search.

    Returns the query itself and, when different, its folded form.
    """
    folded = normalize(query)
    if folded == query:
        return [query]
    return [query, folded]
