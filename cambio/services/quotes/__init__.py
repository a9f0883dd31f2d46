"""Quote engine: currency profiles, delivery catalogue and the solver."""

from .currency import (
    BASE_CURRENCY,
    CURRENCY_PROFILES,
    CurrencyCode,
    CurrencyProfile,
    RateOrientation,
    get_profile,
)
from .delivery import DEFAULT_DELIVERY_ID, DELIVERY_OPTIONS, get_delivery_option
from .solver import quote_from_inputs, reconcile_fee, solve
from .types import (
    ConversionRequest,
    DeclineReason,
    DeliveryOption,
    Direction,
    ExchangeRate,
    QuoteOutcome,
    QuoteResult,
    QuoteStatus,
)

__all__ = [
    "BASE_CURRENCY",
    "CURRENCY_PROFILES",
    "CurrencyCode",
    "CurrencyProfile",
    "RateOrientation",
    "get_profile",
    "DEFAULT_DELIVERY_ID",
    "DELIVERY_OPTIONS",
    "get_delivery_option",
    "quote_from_inputs",
    "reconcile_fee",
    "solve",
    "ConversionRequest",
    "DeclineReason",
    "DeliveryOption",
    "Direction",
    "ExchangeRate",
    "QuoteOutcome",
    "QuoteResult",
    "QuoteStatus",
]
