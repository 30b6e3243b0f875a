import sqlite3
import json
import logging
from contextlib import contextmanager
from typing import Dict, List, Optional, Iterable

from pydantic import ValidationError

from models import Workout

logger = logging.getLogger(__name__)

STORAGE_KEY = "gym-log-workouts-v1"


class Database:
    """Provides SQLite connection management and schema initialization."""

    _TABLE_DEFINITIONS = {
        "kv_store": (
            """CREATE TABLE kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );""",
            ["key", "value"],
        ),
    }

    def __init__(self, db_path: str = "workout.db") -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            for table, (sql, columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, columns)

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, columns: List[str]
    ) -> None:
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (table,)
        )
        if cur.fetchone() is None:
            conn.execute(sql)
            return
        cur = conn.execute(f"PRAGMA table_info({table});")
        existing_cols = [row[1] for row in cur.fetchall()]
        if existing_cols != columns:
            raise RuntimeError(
                f"Table {table} has unexpected columns: {', '.join(existing_cols)}"
            )


class KeyValueStore(Database):
    """Persistent string values addressed by a fixed key."""

    def get(self, key: str) -> Optional[str]:
        with self._connection() as conn:
            cur = conn.execute("SELECT value FROM kv_store WHERE key = ?;", (key,))
            row = cur.fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value;",
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?;", (key,))


class MemoryKeyValueStore:
    """Dictionary backed store with the same interface as ``KeyValueStore``."""

    def __init__(self, data: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class WorkoutStore:
    """Load and save the complete workout collection as one JSON blob.

    The blob is a JSON array of workout objects using the field names
    ``id``, ``date``, ``workoutName``, ``exercises`` and ``createdAt``.
    Anything that does not parse into that shape loads as an empty log.
    """

    def __init__(self, kv, key: str = STORAGE_KEY) -> None:
        self.kv = kv
        self.key = key

    def load(self) -> List[Workout]:
        raw = self.kv.get(self.key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("Stored workouts under %s are not valid JSON", self.key)
            return []
        if not isinstance(parsed, list):
            logger.warning("Stored workouts under %s are not a list", self.key)
            return []
        try:
            return [Workout.model_validate(item) for item in parsed]
        except ValidationError as e:
            logger.warning("Stored workouts under %s are malformed: %s", self.key, e)
            return []

    def save(self, items: Iterable[Workout]) -> None:
        records = [w.to_record() for w in items]
        self.kv.set(self.key, json.dumps(records, separators=(",", ":")))
        logger.debug("Saved %d workouts under %s", len(records), self.key)
