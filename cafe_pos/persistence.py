"""SQLite persistence for catalog and ledger snapshots."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from cafe_pos.config import DB_PATH
from cafe_pos.debug_log import log_debug


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SnapshotStore:
    """Key/value store holding one JSON snapshot per key.

    Reads and writes are best-effort: a failed load reports ``None`` and a
    failed save is logged, so in-memory state never depends on the disk.
    """

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create persistence schema if it does not already exist."""
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS snapshots (
                    key TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    saved_at TEXT NOT NULL
                );
                """
            )

    def load(self, key: str) -> Any | None:
        """Return the decoded snapshot stored under ``key``, or None."""
        try:
            self.bootstrap_schema()
            with self._connect() as conn:
                row = conn.execute("SELECT payload FROM snapshots WHERE key = ?", (key,)).fetchone()
        except (sqlite3.Error, OSError) as exc:
            log_debug(f"snapshot_load_failed key={key!r} error={exc!r}")
            return None
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except ValueError as exc:
            log_debug(f"snapshot_decode_failed key={key!r} error={exc!r}")
            return None

    def save(self, key: str, snapshot: Any) -> None:
        """Replace the snapshot stored under ``key``."""
        try:
            payload = json.dumps(snapshot, ensure_ascii=False)
            self.bootstrap_schema()
            with self._connect() as conn:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO snapshots (key, payload, saved_at) VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET payload = excluded.payload, saved_at = excluded.saved_at
                        """,
                        (key, payload, _utc_now_iso()),
                    )
        except (sqlite3.Error, OSError, TypeError, ValueError) as exc:
            log_debug(f"snapshot_save_failed key={key!r} error={exc!r}")
