from fastapi import APIRouter, Depends, Request

from cambio.models.quote import DeliveryOptionOut, QuoteIn, QuoteOut
from cambio.routers.rates import get_rate_service
from cambio.services.quotes import (
    DELIVERY_OPTIONS,
    CurrencyCode,
    get_delivery_option,
    quote_from_inputs,
)
from cambio.services.rate_service import RateService

router = APIRouter(tags=["quotes"])


@router.get(
    "/delivery-options",
    response_model=list[DeliveryOptionOut],
    summary="List delivery options",
)
async def list_delivery_options():
    return [DeliveryOptionOut(id=o.id, label=o.label, fee=o.fee) for o in DELIVERY_OPTIONS]


@router.post("/quotes", response_model=QuoteOut, summary="Quote a currency exchange")
async def create_quote(
    payload: QuoteIn,
    request: Request,
    svc: RateService = Depends(get_rate_service),
):
    """Declined and rate-unavailable quotes are normal answers (HTTP 200)."""
    currency = CurrencyCode(payload.currency)
    outcome = quote_from_inputs(
        currency=currency,
        rate=svc.get_exchange_rate(currency),
        delivery=get_delivery_option(payload.delivery),
        pay_amount=payload.pay_amount,
        receive_amount=payload.receive_amount,
        passes=request.app.state.settings.refinement_passes,
    )
    return QuoteOut.from_outcome(outcome)
