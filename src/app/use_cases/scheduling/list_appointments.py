"""Consultas de agendamentos por id, negócio ou cliente."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils.errors import AppointmentNotFoundError, ValidationError

if TYPE_CHECKING:
    import datetime as dt

    from app.domain.appointment import Appointment
    from app.protocols.appointment_store import AppointmentStoreProtocol
    from fsm.states import AppointmentStatus


def _check_range(date_from: dt.date | None, date_to: dt.date | None) -> None:
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValidationError("date_from não pode ser posterior a date_to")


class ListAppointmentsUseCase:
    def __init__(self, appointments: AppointmentStoreProtocol) -> None:
        self._appointments = appointments

    async def get(self, appointment_id: str) -> Appointment:
        appointment = await self._appointments.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(f"Agendamento {appointment_id} não encontrado")
        return appointment

    async def for_business(
        self,
        business_id: str,
        *,
        status: AppointmentStatus | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Appointment]:
        _check_range(date_from, date_to)
        return await self._appointments.list_for_business(
            business_id, status=status, date_from=date_from, date_to=date_to
        )

    async def for_customer(
        self,
        customer_id: str,
        *,
        status: AppointmentStatus | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Appointment]:
        _check_range(date_from, date_to)
        return await self._appointments.list_for_customer(
            customer_id, status=status, date_from=date_from, date_to=date_to
        )
