"""Published exchange rates.

Reads and writes go straight to the database on every call: a quote must use
the rate the operator last published, never a cached or made-up one. A
currency with no row (or an unusable stored value) has no rate, and the
solver declines with ``rate_unavailable``.

Design:
- Base currency: BRL
- PYG rate: guaraníes per 1 BRL
- USD rate: BRL per 1 USD
- Writes require the admin password; comparison is constant-time.
"""

from __future__ import annotations

import hmac
import logging
from typing import Dict, List, Optional

from cambio.db.dal import Database
from cambio.models.rates import RateRecord
from cambio.services.quotes import CurrencyCode, ExchangeRate

logger = logging.getLogger("cambio.rates")


class AdminNotConfiguredError(RuntimeError):
    pass


class InvalidCredentialsError(PermissionError):
    pass


class RateService:
    def __init__(self, db: Database, admin_password: str = ""):
        self._db = db
        self._admin_password = admin_password

    def get_exchange_rate(self, currency: CurrencyCode) -> Optional[ExchangeRate]:
        row = self._db.get_rate(currency.value)
        if row is None:
            return None
        record = self._to_record(row)
        if record is None:
            return None
        return ExchangeRate.from_value(currency, record.rate, record.updated_at)

    def list_rates(self) -> List[RateRecord]:
        records = (self._to_record(r) for r in self._db.list_rates())
        return [r for r in records if r is not None]

    def verify_admin(self, password: str) -> None:
        if not self._admin_password:
            raise AdminNotConfiguredError("admin password is not configured")
        if not hmac.compare_digest(
            password.encode("utf-8"), self._admin_password.encode("utf-8")
        ):
            logger.warning("rejected rate update: wrong password")
            raise InvalidCredentialsError("wrong admin password")

    def update_rates(self, password: str, rates: Dict[str, float]) -> List[RateRecord]:
        """Store already-validated positive rates after checking the password."""
        self.verify_admin(password)
        rows = self._db.upsert_rates(rates)
        logger.info("rates updated: %s", ", ".join(sorted(rates)))
        return [RateRecord(**r) for r in rows]

    @staticmethod
    def _to_record(row: dict) -> Optional[RateRecord]:
        try:
            return RateRecord(**row)
        except ValueError:
            logger.warning("ignoring unusable stored rate for %s", row.get("currency"))
            return None
