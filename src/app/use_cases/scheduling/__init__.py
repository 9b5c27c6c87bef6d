"""Casos de uso de agendamento expostos pela API."""

from app.use_cases.scheduling.list_appointments import ListAppointmentsUseCase
from app.use_cases.scheduling.payment_callbacks import PaymentCallbacksUseCase
from app.use_cases.scheduling.update_appointment_status import (
    UpdateAppointmentStatusUseCase,
    appointment_lock_key,
)

__all__ = [
    "ListAppointmentsUseCase",
    "PaymentCallbacksUseCase",
    "UpdateAppointmentStatusUseCase",
    "appointment_lock_key",
]
