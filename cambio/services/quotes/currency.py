from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

"""Target currency metadata.

The guaraní and dollar quotes run the same algorithm; what differs is the note
size, the decimal places and which way the published rate points:

    PYG rate 1450  -> 1 BRL buys 1450 PYG   (target per base)
    USD rate 5.50  -> 1 USD costs 5.50 BRL  (base per target)

so BRL -> PYG multiplies while BRL -> USD divides.
"""


class CurrencyCode(str, Enum):
    PYG = "PYG"
    USD = "USD"


class RateOrientation(str, Enum):
    TARGET_PER_BASE = "target_per_base"
    BASE_PER_TARGET = "base_per_target"


@dataclass(frozen=True)
class CurrencyProfile:
    code: CurrencyCode
    note_size: float
    decimals: int
    orientation: RateOrientation

    def to_target(self, base_amount: float, rate: float) -> float:
        if self.orientation is RateOrientation.TARGET_PER_BASE:
            return base_amount * rate
        return base_amount / rate

    def to_base(self, target_amount: float, rate: float) -> float:
        if self.orientation is RateOrientation.TARGET_PER_BASE:
            return target_amount / rate
        return target_amount * rate


BASE_CURRENCY = "BRL"

CURRENCY_PROFILES: Dict[CurrencyCode, CurrencyProfile] = {
    CurrencyCode.PYG: CurrencyProfile(
        code=CurrencyCode.PYG,
        note_size=50000,
        decimals=0,
        orientation=RateOrientation.TARGET_PER_BASE,
    ),
    CurrencyCode.USD: CurrencyProfile(
        code=CurrencyCode.USD,
        note_size=50,
        decimals=2,
        orientation=RateOrientation.BASE_PER_TARGET,
    ),
}


def get_profile(currency: CurrencyCode | str) -> CurrencyProfile:
    if isinstance(currency, CurrencyCode):
        return CURRENCY_PROFILES[currency]
    try:
        return CURRENCY_PROFILES[CurrencyCode(currency.upper())]
    except ValueError as e:
        raise ValueError(f"unsupported target currency '{currency}'") from e
