"""
Tests for category and gender constants.
"""

import pytest

from noskrien.shared.constants import (
    DEFAULT_CATEGORY,
    GENDER_FILE_NAMES,
    Gender,
    gender_from_filename,
)


class TestGenderFromFilename:
    """Tests for gender_from_filename function."""

    @pytest.mark.parametrize("filename,expected", [
        ("results_men.json", "V"),
        ("results_women.json", "S"),
        ("RESULTS_WOMEN.json", "S"),
        ("results.json", "U"),
    ])
    def test_detection(self, filename, expected):
        """'women' wins over its substring 'men'."""
        assert gender_from_filename(filename) == expected

    def test_file_names_round_trip(self):
        """Every gender writes to a file it is read back from."""
        for gender, filename in GENDER_FILE_NAMES.items():
            assert gender_from_filename(filename) == gender


def test_default_category_is_tautas():
    assert DEFAULT_CATEGORY == "Tautas"
    assert Gender.FEMALE.value == "S"
