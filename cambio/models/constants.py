"""Domain constants used by the API payload validators.

Derived from the quote engine so the API cannot drift from what the solver
supports.
"""

from typing import Set

from cambio.services.quotes import BASE_CURRENCY, DELIVERY_OPTIONS, CurrencyCode

TARGET_CURRENCIES: Set[str] = {c.value for c in CurrencyCode}
DELIVERY_IDS: Set[str] = {o.id for o in DELIVERY_OPTIONS}

__all__ = ["BASE_CURRENCY", "TARGET_CURRENCIES", "DELIVERY_IDS"]
