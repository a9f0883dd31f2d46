"""Pydantic API models for the quote service."""

from .constants import (
    BASE_CURRENCY,
    TARGET_CURRENCIES,
    DELIVERY_IDS,
)  # re-export
from .rates import RateRecord, RateUpdateIn, RatesOut
from .quote import QuoteIn, QuoteOut, DeliveryOptionOut

__all__ = [
    "BASE_CURRENCY",
    "TARGET_CURRENCIES",
    "DELIVERY_IDS",
    "RateRecord",
    "RateUpdateIn",
    "RatesOut",
    "QuoteIn",
    "QuoteOut",
    "DeliveryOptionOut",
]
