"""SQLite-backed record store."""

import json
import sqlite3
from pathlib import Path
from typing import Any

from .models import SavedBlueprint, Task

TASKS_KEY = "eisenhower-tasks"
BLUEPRINTS_KEY = "ai-blueprints"

SCHEMA = """
CREATE TABLE IF NOT EXISTS records (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,  -- JSON document
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class StoredDataError(ValueError):
    """A stored record could not be parsed into the expected shape."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored record '{key}' is invalid: {reason}")
        self.key = key
        self.reason = reason


class Store:
    """SQLite key-value store holding the task board and saved blueprints."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.conn: sqlite3.Connection | None = None

    def connect(self) -> sqlite3.Connection:
        """Connect to the database."""
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        return self.conn

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        self.connect()
        self.init_schema()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def init_schema(self):
        """Initialize the database schema."""
        if not self.conn:
            raise RuntimeError("Database not connected")
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def get_record(self, key: str) -> Any | None:
        """Get the decoded JSON value stored under key, or None."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        row = self.conn.execute("SELECT value FROM records WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StoredDataError(key, f"not valid JSON ({e})") from e

    def put_record(self, key: str, value: Any):
        """Insert or replace the JSON value stored under key."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        self.conn.execute(
            """
            INSERT OR REPLACE INTO records (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            """,
            (key, json.dumps(value, ensure_ascii=False)),
        )
        self.conn.commit()

    def delete_record(self, key: str):
        """Remove the record stored under key."""
        if not self.conn:
            raise RuntimeError("Database not connected")
        self.conn.execute("DELETE FROM records WHERE key = ?", (key,))
        self.conn.commit()

    def _load_list(self, key: str, factory) -> tuple:
        raw = self.get_record(key)
        if raw is None:
            return ()
        if not isinstance(raw, list):
            raise StoredDataError(key, f"expected a JSON array, got {type(raw).__name__}")
        try:
            return tuple(factory(item) for item in raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise StoredDataError(key, f"malformed entry ({e})") from e

    def load_tasks(self) -> tuple[Task, ...]:
        """Load the task board. A missing record is an empty board."""
        return self._load_list(TASKS_KEY, Task.from_dict)

    def save_tasks(self, tasks: tuple[Task, ...]):
        self.put_record(TASKS_KEY, [t.to_dict() for t in tasks])

    def load_blueprints(self) -> tuple[SavedBlueprint, ...]:
        """Load saved blueprints. A missing record is an empty list."""
        return self._load_list(BLUEPRINTS_KEY, SavedBlueprint.from_dict)

    def save_blueprints(self, saved: tuple[SavedBlueprint, ...]):
        self.put_record(BLUEPRINTS_KEY, [b.to_dict() for b in saved])
