import sqlite3
import aiosqlite
import datetime
from contextlib import contextmanager, asynccontextmanager
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from config import YamlConfig
from models import LoggedSet
from settings_schema import validate_settings


class Database:
    """Owns the SQLite file: opens connections and keeps tables current."""

    _TABLE_DEFINITIONS = {
        "workout_raw_records": (
            """CREATE TABLE workout_raw_records (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date TEXT NOT NULL,
                    weight REAL NOT NULL,
                    exercise TEXT NOT NULL,
                    load REAL NOT NULL,
                    reps INTEGER NOT NULL,
                    sets INTEGER NOT NULL,
                    comment TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL
                );""",
            [
                "id",
                "date",
                "weight",
                "exercise",
                "load",
                "reps",
                "sets",
                "comment",
                "created_at",
            ],
        ),
        "settings": (
            """CREATE TABLE settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );""",
            ["key", "value"],
        ),
    }

    # SQL expressions for columns an older file does not have yet
    _COLUMN_FILL: Dict[str, str] = {
        "comment": "''",
        "created_at": "datetime('now')",
        "sets": "1",
        "weight": "60.0",
    }

    _SETTING_DEFAULTS = {
        "default_bodyweight": "60.0",
        "load_step": "5.0",
        "reps_step": "1",
        "max_set_count": "10",
        "store_url": "",
        "store_table": "workout_raw_records",
        "store_api_key": "",
        "log_level": "INFO",
    }

    def __init__(self, db_path: str = "workout.db") -> None:
        self._db_path = db_path
        with self._connection() as conn:
            for table, (sql, columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, columns)
            conn.executemany(
                "INSERT OR IGNORE INTO settings (key, value) VALUES (?, ?);",
                self._SETTING_DEFAULTS.items(),
            )

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, columns: List[str]
    ) -> None:
        found = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?;", (table,)
        ).fetchone()
        if found is None:
            conn.execute(sql)
            return
        current = [row[1] for row in conn.execute(f"PRAGMA table_info({table});")]
        if current == columns:
            return

        logger.info("Migrating table {} from {} to {}", table, current, columns)
        backup = f"{table}_old"
        conn.execute(f"DROP TABLE IF EXISTS {backup};")
        conn.execute(f"ALTER TABLE {table} RENAME TO {backup};")
        conn.execute(sql)
        targets = [c for c in columns if c in current or c in self._COLUMN_FILL]
        if any(c in current for c in targets):
            sources = [c if c in current else self._COLUMN_FILL[c] for c in targets]
            conn.execute(
                f"INSERT INTO {table} ({', '.join(targets)}) "
                f"SELECT {', '.join(sources)} FROM {backup};"
            )
        conn.execute(f"DROP TABLE {backup};")


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            return conn.execute(query, params).fetchall()


class AsyncDatabase(Database):
    """Provides asynchronous connection management."""

    @asynccontextmanager
    async def _async_connection(self):
        conn = await aiosqlite.connect(self._db_path)
        try:
            yield conn
            await conn.commit()
        finally:
            await conn.close()


class AsyncBaseRepository(AsyncDatabase):
    """Asynchronous variant of BaseRepository using aiosqlite."""

    async def execute(self, query: str, params: Tuple = ()) -> int:
        async with self._async_connection() as conn:
            cursor = await conn.execute(query, params)
            return cursor.lastrowid

    async def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        async with self._async_connection() as conn:
            cursor = await conn.execute(query, params)
            return list(await cursor.fetchall())


_SET_COLUMNS = "id, date, weight, exercise, load, reps, sets, comment, created_at"
_SELECT_ALL = (
    f"SELECT {_SET_COLUMNS} FROM workout_raw_records ORDER BY created_at ASC, id ASC;"
)
_SELECT_ONE = f"SELECT {_SET_COLUMNS} FROM workout_raw_records WHERE id = ?;"
_INSERT = (
    "INSERT INTO workout_raw_records (date, weight, exercise, load, reps, sets, comment, created_at) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?);"
)
_UPDATE = (
    "UPDATE workout_raw_records SET date = ?, weight = ?, exercise = ?, load = ?, reps = ?, sets = ?, comment = ? "
    "WHERE id = ?;"
)
_DELETE = "DELETE FROM workout_raw_records WHERE id = ?;"


def _timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="microseconds")


def _row_to_set(row: Tuple) -> LoggedSet:
    rid, date, weight, exercise, load, reps, sets, comment, created_at = row
    return LoggedSet(
        id=rid,
        date=date,
        weight=float(weight),
        exercise=exercise,
        load=float(load),
        reps=int(reps),
        sets=int(sets),
        comment=comment or "",
        created_at=created_at,
    )


def _fields(record: LoggedSet) -> Tuple:
    return (
        record.date,
        record.bodyweight,
        record.exercise,
        record.load,
        record.reps,
        record.set_count,
        record.comment,
    )


class LoggedSetRepository(BaseRepository):
    """Repository for the raw set log, ordered by insertion time."""

    def add_many(self, records: Iterable[LoggedSet]) -> List[LoggedSet]:
        """Insert ``records`` in one transaction and return them with ids."""
        created_at = _timestamp()
        ids: list[int] = []
        with self._connection() as conn:
            for record in records:
                cursor = conn.execute(_INSERT, _fields(record) + (created_at,))
                ids.append(cursor.lastrowid)
        logger.info("Inserted {} logged sets", len(ids))
        return [self.fetch_detail(i) for i in ids]

    def fetch_sets(self) -> List[LoggedSet]:
        return [_row_to_set(r) for r in self.fetch_all(_SELECT_ALL)]

    def fetch_detail(self, set_id: int) -> LoggedSet:
        rows = self.fetch_all(_SELECT_ONE, (set_id,))
        if not rows:
            raise ValueError("set not found")
        return _row_to_set(rows[0])

    def update(self, set_id: int, record: LoggedSet) -> LoggedSet:
        self.fetch_detail(set_id)
        self.execute(_UPDATE, _fields(record) + (set_id,))
        logger.info("Updated logged set {}", set_id)
        return self.fetch_detail(set_id)

    def delete(self, set_id: int) -> None:
        self.fetch_detail(set_id)
        self.execute(_DELETE, (set_id,))
        logger.info("Deleted logged set {}", set_id)


class AsyncLoggedSetRepository(AsyncBaseRepository):
    """Async repository for the raw set log."""

    async def add_many(self, records: Iterable[LoggedSet]) -> List[LoggedSet]:
        created_at = _timestamp()
        ids: list[int] = []
        async with self._async_connection() as conn:
            for record in records:
                cursor = await conn.execute(_INSERT, _fields(record) + (created_at,))
                ids.append(cursor.lastrowid)
        logger.info("Inserted {} logged sets", len(ids))
        return [await self.fetch_detail(i) for i in ids]

    async def fetch_sets(self) -> List[LoggedSet]:
        return [_row_to_set(r) for r in await self.fetch_all(_SELECT_ALL)]

    async def fetch_detail(self, set_id: int) -> LoggedSet:
        rows = await self.fetch_all(_SELECT_ONE, (set_id,))
        if not rows:
            raise ValueError("set not found")
        return _row_to_set(rows[0])

    async def update(self, set_id: int, record: LoggedSet) -> LoggedSet:
        await self.fetch_detail(set_id)
        await self.execute(_UPDATE, _fields(record) + (set_id,))
        logger.info("Updated logged set {}", set_id)
        return await self.fetch_detail(set_id)

    async def delete(self, set_id: int) -> None:
        await self.fetch_detail(set_id)
        await self.execute(_DELETE, (set_id,))
        logger.info("Deleted logged set {}", set_id)


class SettingsRepository(BaseRepository):
    """Settings stored in SQLite and mirrored to a YAML file.

    Edits made to the YAML file win: the file is re-read before every
    lookup, validated, and copied into the ``settings`` table.
    """

    NUMERIC_KEYS = {"default_bodyweight", "load_step", "reps_step", "max_set_count"}

    _UPSERT = (
        "INSERT INTO settings (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value;"
    )

    def __init__(
        self, db_path: str = "workout.db", yaml_path: str = "settings.yaml"
    ) -> None:
        super().__init__(db_path)
        self._yaml = YamlConfig(yaml_path)
        self._sync_from_yaml()
        self._sync_to_yaml()

    def _stored(self) -> Dict[str, str]:
        return dict(self.fetch_all("SELECT key, value FROM settings ORDER BY key;"))

    def _typed(self, stored: Dict[str, str]) -> dict:
        result: dict[str, float | str] = {}
        for key, value in stored.items():
            try:
                result[key] = float(value) if key in self.NUMERIC_KEYS else value
            except ValueError:
                result[key] = value
        return result

    def _sync_from_yaml(self) -> None:
        data = self._yaml.load()
        if not data:
            return
        validate_settings(data)
        # a bool secret is the keyring placeholder, keep the stored value
        rows = [(k, str(v)) for k, v in data.items() if not isinstance(v, bool)]
        with self._connection() as conn:
            conn.executemany(self._UPSERT, rows)

    def _sync_to_yaml(self) -> None:
        self._yaml.save(self._typed(self._stored()))

    def _value(self, key: str) -> Optional[str]:
        self._sync_from_yaml()
        rows = self.fetch_all("SELECT value FROM settings WHERE key = ?;", (key,))
        return rows[0][0] if rows else None

    def get_text(self, key: str, default: str) -> str:
        value = self._value(key)
        return default if value is None else value

    def get_float(self, key: str, default: float) -> float:
        value = self._value(key)
        try:
            return default if value is None else float(value)
        except ValueError:
            return default

    def get_int(self, key: str, default: int) -> int:
        return int(self.get_float(key, float(default)))

    def set_text(self, key: str, value: str) -> None:
        self.execute(self._UPSERT, (key, value))
        self._sync_to_yaml()

    def set_float(self, key: str, value: float) -> None:
        self.set_text(key, str(value))

    def set_int(self, key: str, value: int) -> None:
        self.set_text(key, str(value))

    def all_settings(self) -> dict:
        self._sync_from_yaml()
        return self._typed(self._stored())
