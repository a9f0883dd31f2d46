"""Data Access Layer for published exchange rates.

Responsibilities
----------------
- Read the latest rate per target currency.
- Upsert one or both rates in a single transaction, stamping each written
  currency with its own update time.
- Translate sqlite failures into ``PersistenceError`` so callers see one
  generic storage failure.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Any, Dict, List, Mapping, Optional

from cambio.core.errors import PersistenceError

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # ------------------------------------------------------------------
    # Rates
    def get_rate(self, currency: str) -> Optional[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute(
                    "SELECT currency, rate, updated_at FROM rates WHERE currency = ?",
                    (currency.upper(),),
                )
                row = cur.fetchone()
                return dict(row) if row else None
        except sqlite3.Error as e:
            raise PersistenceError(f"failed to read {currency} rate: {e}") from e

    def list_rates(self) -> List[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute("SELECT currency, rate, updated_at FROM rates ORDER BY currency")
                return [dict(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise PersistenceError(f"failed to list rates: {e}") from e

    def upsert_rates(self, rates: Mapping[str, float]) -> List[Dict[str, Any]]:
        """Write the given currency -> rate pairs and return the stored rows."""
        if not rates:
            raise ValueError("at least one rate is required")
        currencies = [c.upper() for c in rates]
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                for currency, rate in rates.items():
                    cur.execute(
                        f"""
                        INSERT INTO rates (currency, rate, updated_at)
                        VALUES (?, ?, ({UTC_NOW_SQL}))
                        ON CONFLICT(currency) DO UPDATE SET
                            rate = excluded.rate,
                            updated_at = excluded.updated_at
                        """,
                        (currency.upper(), float(rate)),
                    )
                conn.commit()
                placeholders = ",".join("?" for _ in currencies)
                cur.execute(
                    f"SELECT currency, rate, updated_at FROM rates "
                    f"WHERE currency IN ({placeholders}) ORDER BY currency",
                    currencies,
                )
                return [dict(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise PersistenceError(f"failed to save rates: {e}") from e
