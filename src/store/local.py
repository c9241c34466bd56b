"""On-device key-value store: whole-collection JSON blobs in SQLite."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger()

PROFILE_KEY = "authos_db_profile"
MEMORIES_KEY = "authos_db_memories"
PRODUCTS_KEY = "authos_db_products"
DRAFTS_KEY = "authos_db_drafts"
CHAT_HISTORY_KEY = "authos_db_chat_history"
# {table: {record id: op}} of local writes the Record Store has not accepted
PENDING_SYNC_KEY = "authos_db_pending_sync"

ALL_KEYS = (PROFILE_KEY, MEMORIES_KEY, PRODUCTS_KEY, DRAFTS_KEY, CHAT_HISTORY_KEY, PENDING_SYNC_KEY)


def wal_connect(db_path: str | Path) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode."""
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


class LocalStore:
    """Synchronous get/set/remove of string values under fixed keys.

    No transactions across keys and no queries; callers read a whole blob,
    change it, and write it back.
    """

    def __init__(self, db_path: str | Path = "~/authos/local.db"):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with wal_connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)

    def get(self, key: str) -> str | None:
        with wal_connect(self.db_path) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with wal_connect(self.db_path) as conn:
            conn.execute(
                """INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                                  updated_at = excluded.updated_at""",
                (key, value, now),
            )

    def remove(self, key: str) -> None:
        with wal_connect(self.db_path) as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))

    def get_json(self, key: str, default: Any = None) -> Any:
        """Parse a stored blob. Missing or corrupted blobs yield ``default``."""
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("local_store.parse_failed", key=key, error=str(e))
            return default

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value, ensure_ascii=False))
