"""Database migration utilities.

Handles schema evolution by applying idempotent migrations keyed by an integer
`schema_version` stored in the metadata table.

Version history:
  1. single guaraní rate kept as JSON under metadata key 'rate'
     ({"rate": 1450, "updatedAt": "..."})
  2. one row per target currency in the `rates` table
"""

from __future__ import annotations
from pathlib import Path
import json
import sqlite3
from typing import Optional

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"
LEGACY_RATE_KEY = "rate"


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Move the legacy single guaraní rate into the per-currency table."""
    cur = conn.cursor()
    try:
        cur.execute("SELECT value FROM metadata WHERE key=?", (LEGACY_RATE_KEY,))
        row = cur.fetchone()
        if row:
            _copy_legacy_rate(cur, row[0])
            cur.execute("DELETE FROM metadata WHERE key=?", (LEGACY_RATE_KEY,))
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def _copy_legacy_rate(cur: sqlite3.Cursor, raw: str) -> None:
    try:
        data = json.loads(raw)
    except ValueError:
        return  # unreadable legacy entry is dropped, as the old API would 404 on it
    rate = data.get("rate") if isinstance(data, dict) else None
    if not isinstance(rate, (int, float)) or isinstance(rate, bool) or rate <= 0:
        return
    updated_at = data.get("updatedAt")
    if updated_at:
        cur.execute(
            "INSERT OR IGNORE INTO rates (currency, rate, updated_at) VALUES ('PYG', ?, ?)",
            (float(rate), str(updated_at)),
        )
    else:
        cur.execute(
            "INSERT OR IGNORE INTO rates (currency, rate) VALUES ('PYG', ?)",
            (float(rate),),
        )
