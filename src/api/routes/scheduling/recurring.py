"""Endpoints de séries recorrentes.

- POST  /v1/recurring-appointments
- POST  /v1/recurring-appointments/preview
- GET   /v1/recurring-appointments/{series_id}
- PATCH /v1/recurring-appointments/{series_id}/status
- POST  /v1/recurring-appointments/{series_id}/materialize
- GET   /v1/businesses/{business_id}/recurring-appointments
- GET   /v1/customers/{customer_id}/recurring-appointments
"""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from api.routes.scheduling.dependencies import Container
from api.routes.scheduling.schemas import (
    MaterializeRequest,
    MaterializeResponse,
    PreviewResponse,
    SeriesStatusUpdate,
)
from app.domain.recurring_appointment import RecurringAppointment, SeriesDefinition
from fsm.states import RecurrenceStatus

router = APIRouter()


@router.post(
    "/recurring-appointments",
    response_model=RecurringAppointment,
    status_code=status.HTTP_201_CREATED,
)
async def create_recurring_appointment(
    body: SeriesDefinition,
    container: Container,
) -> RecurringAppointment:
    return await container.expander.create_series(body)


@router.post("/recurring-appointments/preview", response_model=PreviewResponse)
async def preview_recurring_dates(
    body: SeriesDefinition,
    container: Container,
    limit: int | None = Query(default=None, ge=1, le=366),
) -> PreviewResponse:
    return PreviewResponse(dates=container.expander.preview_dates(body, limit))


@router.get("/recurring-appointments/{series_id}", response_model=RecurringAppointment)
async def get_recurring_appointment(series_id: str, container: Container) -> RecurringAppointment:
    return await container.expander.get_series(series_id)


@router.patch("/recurring-appointments/{series_id}/status", response_model=RecurringAppointment)
async def update_recurring_appointment_status(
    series_id: str,
    body: SeriesStatusUpdate,
    container: Container,
) -> RecurringAppointment:
    return await container.expander.apply_bulk_status(series_id, body.status)


@router.post("/recurring-appointments/{series_id}/materialize", response_model=MaterializeResponse)
async def materialize_recurring_appointment(
    series_id: str,
    body: MaterializeRequest,
    container: Container,
) -> MaterializeResponse:
    created = await container.expander.materialize_upcoming(series_id, body.horizon)
    return MaterializeResponse(series_id=series_id, created=created)


@router.get(
    "/businesses/{business_id}/recurring-appointments",
    response_model=list[RecurringAppointment],
)
async def list_recurring_appointments(
    business_id: str,
    container: Container,
    status_filter: RecurrenceStatus | None = Query(default=None, alias="status"),
    customer_id: str | None = None,
) -> list[RecurringAppointment]:
    return await container.expander.list_series(
        business_id, status=status_filter, customer_id=customer_id
    )


@router.get(
    "/customers/{customer_id}/recurring-appointments",
    response_model=list[RecurringAppointment],
)
async def list_customer_recurring_appointments(
    customer_id: str,
    container: Container,
    status_filter: RecurrenceStatus | None = Query(default=None, alias="status"),
    business_id: str | None = None,
) -> list[RecurringAppointment]:
    return await container.expander.list_customer_series(
        customer_id, status=status_filter, business_id=business_id
    )
