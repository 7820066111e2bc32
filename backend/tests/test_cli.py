"""
Tests for the file-based CLI commands.
"""

import json

import pytest
from click.testing import CliRunner

from noskrien.cli import cli
from noskrien.config import settings


@pytest.fixture
def data_dir(tmp_path):
    root = tmp_path / "data"
    path = root / "2023-2024" / "Tautas" / "results_men.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps([
        {"name": "Davis Pazars", "link": None, "races": [
            {"Datums": "2023-11-26", "Rezultāts": "52:09", "km": "10,0", "Vieta": "Smiltene"},
        ]},
        {"name": "Dāvis Pazars", "link": None, "races": [
            {"Datums": "2023-12-17", "Rezultāts": "1:01:59", "km": "10,0", "Vieta": "Ļaudona"},
        ]},
    ], ensure_ascii=False), encoding="utf-8")
    return root


class TestFileCommands:
    """Tests for normalize, check-duplicates and generate-sql."""

    def test_check_duplicates_reports_and_fails(self, data_dir):
        result = CliRunner().invoke(cli, ["check-duplicates", str(data_dir)])
        assert result.exit_code == 1
        assert "'Davis Pazars', 'Dāvis Pazars'" in result.output

    def test_normalize_dry_run(self, data_dir):
        result = CliRunner().invoke(cli, ["normalize", str(data_dir), "--dry-run"])
        assert result.exit_code == 0
        assert "Merged duplicates:    1" in result.output
        assert "Dry run" in result.output

    def test_normalize_then_clean(self, data_dir):
        runner = CliRunner()
        assert runner.invoke(cli, ["normalize", str(data_dir)]).exit_code == 0

        result = runner.invoke(cli, ["check-duplicates", str(data_dir)])
        assert result.exit_code == 0
        assert "No duplicates found." in result.output

    def test_generate_sql(self, data_dir, tmp_path):
        output = tmp_path / "out" / "import.sql"
        result = CliRunner().invoke(cli, ["generate-sql", str(data_dir), str(output)])
        assert result.exit_code == 0
        sql = output.read_text(encoding="utf-8")
        assert "'Dāvis Pazars'" in sql
        assert sql.count("INSERT INTO races") == 2

    def test_data_dir_defaults_to_setting(self, data_dir, monkeypatch):
        monkeypatch.setattr(settings, "data_dir", data_dir)
        result = CliRunner().invoke(cli, ["normalize", "--dry-run"])
        assert result.exit_code == 0
        assert "Records scanned:      2" in result.output

    def test_missing_directory(self, tmp_path):
        result = CliRunner().invoke(cli, ["normalize", str(tmp_path / "nope")])
        assert result.exit_code != 0
        assert "Data directory not found" in result.output
