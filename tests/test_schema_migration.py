import os
import sqlite3
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import Database, LoggedSetRepository


class TestSchemaMigration:
    def _legacy_db(self, tmp_path) -> str:
        db_file = tmp_path / "legacy.db"
        conn = sqlite3.connect(str(db_file))
        conn.execute(
            "CREATE TABLE workout_raw_records (id INTEGER PRIMARY KEY AUTOINCREMENT, date TEXT, weight REAL, exercise TEXT, load REAL, reps INTEGER, sets INTEGER)"
        )
        conn.execute(
            "INSERT INTO workout_raw_records (date, weight, exercise, load, reps, sets) VALUES ('2025/1/5', 57, 'press', 35, 13, 2)"
        )
        conn.execute("CREATE TABLE workout_raw_records_old (id INTEGER)")
        conn.commit()
        conn.close()
        return str(db_file)

    def test_drops_existing_backup_table(self, tmp_path):
        db_file = self._legacy_db(tmp_path)

        Database(db_file)

        conn = sqlite3.connect(db_file)
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='workout_raw_records_old'"
        )
        assert cur.fetchone() is None
        cur = conn.execute("PRAGMA table_info(workout_raw_records)")
        cols = [row[1] for row in cur.fetchall()]
        assert cols[-2:] == ["comment", "created_at"]
        conn.close()

    def test_keeps_rows_with_defaults(self, tmp_path):
        db_file = self._legacy_db(tmp_path)

        records = LoggedSetRepository(db_file).fetch_sets()

        assert len(records) == 1
        assert records[0].date == "2025/1/5"
        assert records[0].set_count == 2
        assert records[0].comment == ""
        assert records[0].created_at
