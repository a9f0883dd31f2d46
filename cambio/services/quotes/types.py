"""Value objects flowing through the quote solver.

Everything here is frozen: a quote is built from fresh inputs on every call
and nothing is carried between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from .currency import CurrencyCode


class Direction(str, Enum):
    PAY_GIVEN = "pay_given"
    RECEIVE_GIVEN = "receive_given"


class QuoteStatus(str, Enum):
    OK = "ok"
    DECLINED = "declined"
    RATE_UNAVAILABLE = "rate_unavailable"


class DeclineReason(str, Enum):
    INVALID_INPUT = "invalid_input"
    AMBIGUOUS_DIRECTION = "ambiguous_direction"
    RATE_UNAVAILABLE = "rate_unavailable"


@dataclass(frozen=True)
class ExchangeRate:
    target_currency: CurrencyCode
    units: float
    observed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.units) or self.units <= 0:
            raise ValueError("exchange rate must be a positive number")

    @classmethod
    def from_value(
        cls,
        target_currency: CurrencyCode,
        units: Optional[float],
        observed_at: Optional[datetime] = None,
    ) -> Optional["ExchangeRate"]:
        """Build a rate, or None when the value cannot be used.

        A missing rate and a non-positive one mean the same thing: no quote.
        """
        if units is None:
            return None
        try:
            return cls(target_currency, float(units), observed_at)
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class DeliveryOption:
    id: str
    label: str
    fee: float = 0.0

    def __post_init__(self) -> None:
        if self.fee < 0:
            raise ValueError("delivery fee cannot be negative")


@dataclass(frozen=True)
class ConversionRequest:
    direction: Direction
    amount: Optional[float]
    currency: CurrencyCode
    rate: Optional[ExchangeRate]
    delivery: DeliveryOption

    def __post_init__(self) -> None:
        if self.rate is not None and self.rate.target_currency != self.currency:
            raise ValueError(
                f"rate is for {self.rate.target_currency.value}, "
                f"request is for {self.currency.value}"
            )


@dataclass(frozen=True)
class QuoteResult:
    pay_amount: float
    receive_amount: float
    fee: float
    delivery_fee: float

    EMPTY: ClassVar["QuoteResult"]


QuoteResult.EMPTY = QuoteResult(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class QuoteOutcome:
    status: QuoteStatus
    currency: CurrencyCode
    result: QuoteResult = field(default=QuoteResult.EMPTY)
    reason: Optional[DeclineReason] = None
    direction: Optional[Direction] = None
    rate: Optional[ExchangeRate] = None
    delivery: Optional[DeliveryOption] = None

    @property
    def ok(self) -> bool:
        return self.status is QuoteStatus.OK
