"""Endpoints de agendamentos avulsos.

- POST  /v1/appointments
- GET   /v1/appointments/{appointment_id}
- PATCH /v1/appointments/{appointment_id}/status
- GET   /v1/businesses/{business_id}/appointments
- GET   /v1/customers/{customer_id}/appointments
"""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Query, status

from api.routes.scheduling.dependencies import Container
from api.routes.scheduling.schemas import AppointmentStatusUpdate, CreateAppointmentRequest
from app.domain.appointment import Appointment
from fsm.states import AppointmentStatus
from fsm.types import ActorRole

router = APIRouter()


@router.post("/appointments", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def create_appointment(body: CreateAppointmentRequest, container: Container) -> Appointment:
    return await container.booking.create_appointment(body.to_booking_request())


@router.get("/appointments/{appointment_id}", response_model=Appointment)
async def get_appointment(appointment_id: str, container: Container) -> Appointment:
    return await container.list_appointments.get(appointment_id)


@router.patch("/appointments/{appointment_id}/status", response_model=Appointment)
async def update_appointment_status(
    appointment_id: str,
    body: AppointmentStatusUpdate,
    container: Container,
) -> Appointment:
    return await container.update_status.execute(
        appointment_id,
        body.status,
        ActorRole(body.actor),
        trigger=f"{body.actor}_request",
    )


@router.get("/businesses/{business_id}/appointments", response_model=list[Appointment])
async def list_business_appointments(
    business_id: str,
    container: Container,
    status_filter: AppointmentStatus | None = Query(default=None, alias="status"),
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
) -> list[Appointment]:
    return await container.list_appointments.for_business(
        business_id, status=status_filter, date_from=date_from, date_to=date_to
    )


@router.get("/customers/{customer_id}/appointments", response_model=list[Appointment])
async def list_customer_appointments(
    customer_id: str,
    container: Container,
    status_filter: AppointmentStatus | None = Query(default=None, alias="status"),
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
) -> list[Appointment]:
    return await container.list_appointments.for_customer(
        customer_id, status=status_filter, date_from=date_from, date_to=date_to
    )
