"""
Unit tests for the logstore CLI.
"""

import sqlite3

from click.testing import CliRunner

from logstore.cli.main import cli


class TestAppendCommand:
    """Test `logstore append`."""

    def test_append(self, sqlite_db_path):
        runner = CliRunner()

        result = runner.invoke(
            cli,
            [
                "append", str(sqlite_db_path),
                "-m", "boom",
                "-l", "error",
                "-c", "env=prod",
                "-p", "env=staging",
                "-p", "req=42",
                "-t", "ValueError: bad",
            ],
        )

        assert result.exit_code == 0, result.output
        conn = sqlite3.connect(str(sqlite_db_path))
        try:
            assert conn.execute(
                "SELECT formatted_message, level_string, reference_flag FROM logging_event"
            ).fetchall() == [("boom", "ERROR", 3)]
            assert dict(
                conn.execute("SELECT mapped_key, mapped_value FROM logging_event_property").fetchall()
            ) == {"env": "staging", "req": "42"}
            assert conn.execute("SELECT i, trace_line FROM logging_event_exception").fetchall() == [
                (0, "ValueError: bad")
            ]
        finally:
            conn.close()

    def test_bad_property(self, sqlite_db_path):
        result = CliRunner().invoke(cli, ["append", str(sqlite_db_path), "-m", "x", "-p", "oops"])

        assert result.exit_code == 2

    def test_missing_tables(self, tmp_path):
        db_path = tmp_path / "empty.db"
        sqlite3.connect(str(db_path)).close()

        result = CliRunner().invoke(cli, ["append", str(db_path), "-m", "x"])

        assert result.exit_code == 1
        assert "no such table" in result.output


class TestDialectsCommand:
    """Test `logstore dialects`."""

    def test_lists_dialects(self):
        result = CliRunner().invoke(cli, ["dialects"])

        assert result.exit_code == 0
        assert "sqlite" in result.output
        assert "postgres" in result.output
