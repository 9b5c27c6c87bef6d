"""GET /v1/services/{service_id}/slots: slots livres de um dia."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Query

from api.routes.scheduling.dependencies import Container
from api.routes.scheduling.schemas import SlotsResponse

router = APIRouter()


@router.get("/services/{service_id}/slots", response_model=SlotsResponse)
async def get_available_slots(
    service_id: str,
    container: Container,
    day: dt.date = Query(..., alias="date", description="Dia no formato YYYY-MM-DD."),
) -> SlotsResponse:
    computation = await container.booking.get_available_slots(service_id, day)
    return SlotsResponse(
        service_id=service_id,
        date=day,
        slots=list(computation.slots),
        reason=computation.reason,
    )
