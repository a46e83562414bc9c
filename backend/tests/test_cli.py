"""
Tests for the update_vendor_ratings command-line script.
"""
import importlib.util
import json
from pathlib import Path

import pytest

from vendor_rating.dependencies import get_db

SCRIPT = Path(__file__).parent.parent / "scripts" / "update_vendor_ratings.py"


@pytest.fixture(scope="module")
def cli():
    module_spec = importlib.util.spec_from_file_location("update_vendor_ratings", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def stored_rating(db_path, vendor_id):
    with get_db(db_path) as conn:
        return conn.execute("SELECT rating FROM vendors WHERE id = ?", (vendor_id,)).fetchone()["rating"]


class TestUpdateRatingsScript:
    """Run main() against a seeded database."""

    def test_batch_run_updates_ratings(self, cli, db_path, capsys):
        code = cli.main(["--db", str(db_path), "--workers", "2", "--log-level", "CRITICAL"])
        summary = json.loads(capsys.readouterr().out)
        assert code == 0
        assert summary["updated"] == 3
        assert summary["errors"] == 0
        assert summary["failed_vendors"] == []
        assert summary["dry_run"] is False
        assert stored_rating(db_path, "v-beta") != 3.8

    def test_dry_run_leaves_database_untouched(self, cli, db_path, capsys):
        code = cli.main(["--db", str(db_path), "--dry-run", "--log-level", "CRITICAL"])
        summary = json.loads(capsys.readouterr().out)
        assert code == 0
        assert summary["updated"] == 3
        assert summary["dry_run"] is True
        assert stored_rating(db_path, "v-beta") == 3.8

    def test_single_vendor(self, cli, db_path, capsys):
        code = cli.main(["--db", str(db_path), "--vendor-id", "v-alpha", "--log-level", "CRITICAL"])
        result = json.loads(capsys.readouterr().out)
        assert code == 0
        assert result["vendor_id"] == "v-alpha"
        assert result["review_count"] == 3
        assert stored_rating(db_path, "v-alpha") == 4.5

    def test_unknown_vendor_exit_code(self, cli, db_path, capsys):
        assert cli.main(["--db", str(db_path), "--vendor-id", "nope", "--log-level", "CRITICAL"]) == 1

    def test_missing_database(self, cli, tmp_path):
        assert cli.main(["--db", str(tmp_path / "missing.db"), "--log-level", "CRITICAL"]) == 2

    def test_init_schema_on_fresh_database(self, cli, tmp_path, capsys):
        db = tmp_path / "fresh.db"
        code = cli.main(["--db", str(db), "--init-schema", "--log-level", "CRITICAL"])
        summary = json.loads(capsys.readouterr().out)
        assert code == 0
        assert summary["updated"] == 0
        assert summary["cancelled"] is False
