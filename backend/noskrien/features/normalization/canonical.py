"""Canonical name selection: which spelling represents an identity."""

from __future__ import annotations

from typing import Iterable

from noskrien.shared.latvian import count_accented, has_natural_casing


def canonical_sort_key(name: str) -> tuple[int, int, str]:
    """Sort key where the most preferred spelling sorts first.

    Priority:
        1. More Latvian characters ("Bērziņš" over "Berzins")
        2. Natural casing over ALL CAPS ("Ilze" over "ILZE")
        3. Code-point order as a stable tie-breaker
    """
    return (-count_accented(name), 0 if has_natural_casing(name) else 1, name)


def select_canonical(variants: Iterable[str]) -> str:
    """Pick the display spelling from names believed to be one person.

    Order-independent: the result depends only on the set of variants.

    Raises:
        ValueError: If no variants are given.
    """
    names = list(variants)
    if not names:
        raise ValueError("select_canonical() needs at least one name")
    return min(names, key=canonical_sort_key)
