from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from cambio.db.dal import Database
from cambio.models.rates import RatesOut, RateUpdateIn
from cambio.services.rate_service import (
    AdminNotConfiguredError,
    InvalidCredentialsError,
    RateService,
)

"""Rates router.

Endpoints:
    - GET /rates   -> latest PYG / USD rates with their update stamps
    - POST /rates  -> publish one or both rates (admin password required)

GET answers 404 while no rate has ever been published so the UI can show an
explicit "unavailable" state instead of a number.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


def get_rate_service(request: Request) -> RateService:
    settings = request.app.state.settings
    return RateService(Database(settings.db_path), settings.admin_password)


@router.get("", response_model=RatesOut, summary="Current published rates")
async def read_rates(svc: RateService = Depends(get_rate_service)):
    records = svc.list_rates()
    if not records:
        raise HTTPException(status_code=404, detail="no rate published yet")
    return RatesOut.from_records(records)


@router.post("", response_model=RatesOut, summary="Publish new rates")
async def publish_rates(
    payload: RateUpdateIn,
    svc: RateService = Depends(get_rate_service),
):
    try:
        records = svc.update_rates(payload.password, payload.as_rates())
    except AdminNotConfiguredError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    return RatesOut.from_records(records)
