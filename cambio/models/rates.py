from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import TARGET_CURRENCIES


class RateRecord(BaseModel):
    currency: str
    rate: float = Field(..., gt=0, allow_inf_nan=False)
    updated_at: Optional[datetime] = None

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        v = v.upper()
        if v not in TARGET_CURRENCIES:
            raise ValueError("unsupported currency")
        return v


class RateUpdateIn(BaseModel):
    """Privileged rate write.

    Only typed, finite, positive numbers get through; at least one of the two
    currencies must be present.
    """

    password: str
    pyg: Optional[float] = Field(
        None, gt=0, strict=True, allow_inf_nan=False, description="Guaraníes per 1 BRL"
    )
    usd: Optional[float] = Field(
        None, gt=0, strict=True, allow_inf_nan=False, description="BRL per 1 USD"
    )

    @model_validator(mode="after")
    def at_least_one_rate(self) -> "RateUpdateIn":
        if self.pyg is None and self.usd is None:
            raise ValueError("provide at least one of 'pyg' or 'usd'")
        return self

    def as_rates(self) -> dict[str, float]:
        rates: dict[str, float] = {}
        if self.pyg is not None:
            rates["PYG"] = self.pyg
        if self.usd is not None:
            rates["USD"] = self.usd
        return rates


class RatesOut(BaseModel):
    pyg: Optional[float] = None
    usd: Optional[float] = None
    updated_at_pyg: Optional[datetime] = None
    updated_at_usd: Optional[datetime] = None

    @classmethod
    def from_records(cls, records: list[RateRecord]) -> "RatesOut":
        out = cls()
        for record in records:
            key = record.currency.lower()
            setattr(out, key, record.rate)
            setattr(out, f"updated_at_{key}", record.updated_at)
        return out
