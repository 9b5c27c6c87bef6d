"""Callbacks do colaborador de pagamento.

- POST /v1/payments/callbacks/{appointment_id}/confirmed
- POST /v1/payments/callbacks/{appointment_id}/failed
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.scheduling.dependencies import Container
from app.domain.appointment import Appointment

router = APIRouter()


@router.post("/payments/callbacks/{appointment_id}/confirmed", response_model=Appointment)
async def payment_confirmed(appointment_id: str, container: Container) -> Appointment:
    return await container.payment_callbacks.on_payment_confirmed(appointment_id)


@router.post("/payments/callbacks/{appointment_id}/failed", response_model=Appointment)
async def payment_failed(appointment_id: str, container: Container) -> Appointment:
    return await container.payment_callbacks.on_payment_failed(appointment_id)
