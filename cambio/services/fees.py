"""Service fee schedule.

Small transactions pay a flat fee covering handling; above the last flat
bracket the fee becomes a percentage of the total. Upper bounds are inclusive,
so the schedule jumps at 250.00, 1000.00 and 2000.00 (pricing policy, not a
rounding artefact).
"""

from __future__ import annotations

from typing import Tuple

# (inclusive upper bound of the total paid, flat fee), in BRL
FLAT_FEE_TIERS: Tuple[Tuple[float, float], ...] = (
    (250.0, 10.0),
    (1000.0, 20.0),
    (2000.0, 30.0),
)
PERCENT_FEE = 0.015  # 1.5% above the last flat tier


def fee_tier(total_paid: float) -> int:
    """Index of the bracket ``total_paid`` falls in (0..len(FLAT_FEE_TIERS))."""
    for index, (upper, _) in enumerate(FLAT_FEE_TIERS):
        if total_paid <= upper:
            return index
    return len(FLAT_FEE_TIERS)


def service_fee(total_paid: float) -> float:
    tier = fee_tier(total_paid)
    if tier < len(FLAT_FEE_TIERS):
        return FLAT_FEE_TIERS[tier][1]
    return total_paid * PERCENT_FEE
