"""Conversion & fee reconciliation.

A quote has to satisfy three things at once: the fee is looked up from the
*total* the customer pays, the disbursed amount must be a whole number of
notes, and typing either side of the exchange must give the same quote.

The fee and the total depend on each other, so the fee is settled by a bounded
fixed-point iteration rather than solved in closed form:

    fee_1 = service_fee(base)
    fee_k = service_fee(base + fee_{k-1})

where ``base`` is the net converted amount plus delivery. Two passes reproduce
the published quotes and are the default. Since the flat tiers are much wider
than the fee steps, two passes land on the bracket of the final total except
above the last flat tier, where the percentage fee can still move by a
fraction of a cent. ``passes > 2`` keeps iterating until the fee moves by less
than half a cent, falling back to the last value.

Nothing in this module holds state; every call builds its own values.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from cambio.core.config import TWO_PASS_REFINEMENT
from cambio.services.fees import fee_tier, service_fee
from cambio.services.money import parse_amount, quantize, round2, round_to_note

from .currency import CurrencyCode, get_profile
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

logger = logging.getLogger("cambio.quotes")

FEE_TOLERANCE = 0.005

AmountInput = Union[str, int, float, None]


def reconcile_fee(base_total: float, passes: int = TWO_PASS_REFINEMENT) -> float:
    """Settle the service fee for a quote whose pre-fee total is ``base_total``."""
    if passes < 1:
        raise ValueError("passes must be at least 1")
    fee = service_fee(base_total)
    for _ in range(passes - 1):
        refined = service_fee(base_total + fee)
        settled = abs(refined - fee) < FEE_TOLERANCE
        fee = refined
        if settled:
            break
    return fee


def _settle(total: float, fee: float, delivery_fee: float, target: float) -> QuoteResult:
    logger.debug(
        "fee settled: tier=%s fee=%.4f total=%.4f", fee_tier(total), fee, total
    )
    return QuoteResult(
        pay_amount=round2(total),
        receive_amount=target,
        fee=round2(fee),
        delivery_fee=round2(delivery_fee),
    )


def _decline(
    request: ConversionRequest, reason: DeclineReason
) -> QuoteOutcome:
    status = (
        QuoteStatus.RATE_UNAVAILABLE
        if reason is DeclineReason.RATE_UNAVAILABLE
        else QuoteStatus.DECLINED
    )
    logger.debug(
        "quote declined",
        extra={
            "currency": request.currency.value,
            "direction": request.direction.value,
            "reason": reason.value,
        },
    )
    return QuoteOutcome(
        status=status,
        currency=request.currency,
        reason=reason,
        direction=request.direction,
        rate=request.rate,
        delivery=request.delivery,
    )


def solve(request: ConversionRequest, passes: int = TWO_PASS_REFINEMENT) -> QuoteOutcome:
    """Turn a one-sided request into a reconciled quote, or decline it.

    Declines never raise: a missing rate gives ``rate_unavailable``; a zero,
    negative, non-finite or unparsed amount, or one whose conversion leaves
    the float range, gives ``declined`` with the EMPTY result. An amount too
    small to buy half a note still quotes: nothing is disbursed and the
    customer pays the fee plus delivery.
    """
    if request.rate is None:
        return _decline(request, DeclineReason.RATE_UNAVAILABLE)
    amount = request.amount
    if amount is None or not math.isfinite(amount) or amount <= 0:
        return _decline(request, DeclineReason.INVALID_INPUT)

    profile = get_profile(request.currency)
    rate = request.rate.units
    delivery_fee = request.delivery.fee

    if request.direction is Direction.PAY_GIVEN:
        first_fee = service_fee(amount)
        net = max(0.0, amount - first_fee - delivery_fee)
        raw_target = profile.to_target(net, rate)
    else:
        raw_target = amount
    if not math.isfinite(raw_target):
        return _decline(request, DeclineReason.INVALID_INPUT)
    target = round_to_note(raw_target, profile.note_size)
    if not math.isfinite(target):
        return _decline(request, DeclineReason.INVALID_INPUT)

    target = quantize(target, profile.decimals)
    exact_net = profile.to_base(target, rate)
    fee = reconcile_fee(exact_net + delivery_fee, passes)
    total = exact_net + fee + delivery_fee
    if not math.isfinite(total):
        return _decline(request, DeclineReason.INVALID_INPUT)

    result = _settle(total, fee, delivery_fee, target)
    logger.debug(
        "quote computed",
        extra={
            "currency": request.currency.value,
            "direction": request.direction.value,
            "status": QuoteStatus.OK.value,
        },
    )
    return QuoteOutcome(
        status=QuoteStatus.OK,
        currency=request.currency,
        result=result,
        direction=request.direction,
        rate=request.rate,
        delivery=request.delivery,
    )


def _supplied(value: AmountInput) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def quote_from_inputs(
    currency: CurrencyCode,
    rate: Optional[ExchangeRate],
    delivery: DeliveryOption,
    pay_amount: AmountInput = None,
    receive_amount: AmountInput = None,
    passes: int = TWO_PASS_REFINEMENT,
) -> QuoteOutcome:
    """Quote from the two input boxes; exactly one of them must be filled.

    With both or neither filled there is no way to tell which side the
    customer means, so the quote is declined as ambiguous.
    """
    has_pay = _supplied(pay_amount)
    has_receive = _supplied(receive_amount)
    if has_pay == has_receive:
        logger.debug(
            "quote declined",
            extra={
                "currency": currency.value,
                "reason": DeclineReason.AMBIGUOUS_DIRECTION.value,
            },
        )
        return QuoteOutcome(
            status=QuoteStatus.DECLINED,
            currency=currency,
            reason=DeclineReason.AMBIGUOUS_DIRECTION,
            rate=rate,
            delivery=delivery,
        )
    if has_pay:
        direction, raw = Direction.PAY_GIVEN, pay_amount
    else:
        direction, raw = Direction.RECEIVE_GIVEN, receive_amount
    request = ConversionRequest(
        direction=direction,
        amount=parse_amount(raw),
        currency=currency,
        rate=rate,
        delivery=delivery,
    )
    return solve(request, passes)
