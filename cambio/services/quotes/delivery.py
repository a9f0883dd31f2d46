"""Delivery catalogue.

Fees are flat BRL amounts added to the quote; the solver never looks at the id
or label.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .types import DeliveryOption

DELIVERY_OPTIONS: Tuple[DeliveryOption, ...] = (
    DeliveryOption(id="franco", label="Presidente Franco", fee=0.0),
    DeliveryOption(id="lago", label="Região do Lago", fee=0.0),
    DeliveryOption(id="km4", label="Região do Km4", fee=5.0),
    DeliveryOption(id="km7", label="Região do Km7", fee=10.0),
)
DEFAULT_DELIVERY_ID = DELIVERY_OPTIONS[0].id

_BY_ID: Dict[str, DeliveryOption] = {o.id: o for o in DELIVERY_OPTIONS}


def get_delivery_option(option_id: str) -> DeliveryOption:
    try:
        return _BY_ID[option_id]
    except KeyError as e:
        raise ValueError(f"unknown delivery option '{option_id}'") from e
