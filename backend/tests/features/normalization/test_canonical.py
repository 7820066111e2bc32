"""
Tests for canonical name selection.
"""

import itertools

import pytest

from noskrien.features.normalization import canonical_sort_key, select_canonical


class TestSelectCanonical:
    """Tests for select_canonical function."""

    def test_prefers_more_latvian_letters(self):
        assert select_canonical(["Davis Pazars", "Dāvis Pazars"]) == "Dāvis Pazars"

    def test_prefers_full_diacritics(self):
        """'Bērziņš' (3) beats the partially folded 'Berziņš' (1)."""
        assert select_canonical(["Berzins", "Berziņš", "Bērziņš"]) == "Bērziņš"

    def test_natural_casing_breaks_tie(self):
        """Equal accent count: natural casing wins over ALL CAPS."""
        assert select_canonical(["ILZE KRONBERGA", "Ilze Kronberga"]) == "Ilze Kronberga"

    def test_accents_beat_casing(self):
        """An ALL CAPS name with diacritics still beats plain ASCII."""
        assert select_canonical(["Janis Kalnins", "JĀNIS KALNIŅŠ"]) == "JĀNIS KALNIŅŠ"

    def test_lexicographic_tie_breaker(self):
        """Identical score: code-point order decides, not input order."""
        assert select_canonical(["Anna b", "Anna B"]) == "Anna B"

    def test_order_independent(self):
        """Every permutation yields the same pick."""
        variants = ["BĒRZIŅŠ", "Berzins", "Bērziņš", "berziņš", "BERZINS"]
        picks = {select_canonical(p) for p in itertools.permutations(variants)}
        assert picks == {"Bērziņš"}

    def test_idempotent(self):
        """Selecting again among the winner alone returns the winner."""
        winner = select_canonical(["Davis Pazars", "Dāvis Pazars"])
        assert select_canonical([winner]) == winner

    def test_single_variant(self):
        assert select_canonical(["Ilze"]) == "Ilze"

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            select_canonical([])

    def test_sort_key_shape(self):
        assert canonical_sort_key("Dāvis") == (-1, 0, "Dāvis")
        assert canonical_sort_key("DAVIS") == (0, 1, "DAVIS")
