from __future__ import annotations
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from cambio.services.quotes import DEFAULT_DELIVERY_ID, QuoteOutcome
from .constants import BASE_CURRENCY, DELIVERY_IDS, TARGET_CURRENCIES

AmountField = Optional[Union[float, str]]


class QuoteIn(BaseModel):
    """Quote request: fill exactly one of pay_amount / receive_amount.

    Amounts may be JSON numbers or the masked text of the input boxes
    ("2.000,00", "1.500.000").
    """

    currency: str = Field("PYG", description="Target currency: PYG or USD")
    delivery: str = Field(DEFAULT_DELIVERY_ID, description="Delivery option id")
    pay_amount: AmountField = Field(None, description="BRL the customer pays")
    receive_amount: AmountField = Field(
        None, description="Target currency the customer receives"
    )

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        v = v.upper()
        if v not in TARGET_CURRENCIES:
            raise ValueError("unsupported currency")
        return v

    @field_validator("delivery")
    @classmethod
    def valid_delivery(cls, v: str) -> str:
        if v not in DELIVERY_IDS:
            raise ValueError("unknown delivery option")
        return v


class DeliveryOptionOut(BaseModel):
    id: str
    label: str
    fee: float


class QuoteOut(BaseModel):
    status: str
    reason: Optional[str] = None
    direction: Optional[str] = None
    currency: str
    base_currency: str = BASE_CURRENCY
    pay_amount: float
    receive_amount: float
    fee: float
    delivery_fee: float
    rate: Optional[float] = None
    rate_updated_at: Optional[datetime] = None
    delivery: Optional[DeliveryOptionOut] = None

    @classmethod
    def from_outcome(cls, outcome: QuoteOutcome) -> "QuoteOut":
        result = outcome.result
        delivery = outcome.delivery
        return cls(
            status=outcome.status.value,
            reason=outcome.reason.value if outcome.reason else None,
            direction=outcome.direction.value if outcome.direction else None,
            currency=outcome.currency.value,
            pay_amount=result.pay_amount,
            receive_amount=result.receive_amount,
            fee=result.fee,
            delivery_fee=result.delivery_fee,
            rate=outcome.rate.units if outcome.rate else None,
            rate_updated_at=outcome.rate.observed_at if outcome.rate else None,
            delivery=(
                DeliveryOptionOut(id=delivery.id, label=delivery.label, fee=delivery.fee)
                if delivery
                else None
            ),
        )
