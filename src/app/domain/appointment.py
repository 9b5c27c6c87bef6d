"""Modelos de dominio para agendamento de servicos.

Datas e horarios sao "wall clock" locais do negocio (sem tzinfo); o fuso
e resolvido uma unica vez pelo relogio injetado (ver `ClockProtocol`).
"""

from __future__ import annotations

import datetime as dt
import uuid
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from fsm.states.appointment import AppointmentStatus
from fsm.states.appointment import is_active as is_active_status


def _new_id() -> str:
    return uuid.uuid4().hex


def add_minutes(start: dt.time, minutes: int) -> dt.time:
    """Soma minutos a um horario; nao atravessa meia-noite."""
    moment = dt.datetime.combine(dt.date.min, start) + dt.timedelta(minutes=minutes)
    if moment.date() != dt.date.min:
        raise ValueError("Intervalo atravessa a meia-noite")
    return moment.time()


class TimeSlot(BaseModel):
    """Intervalo semiaberto [start, end) dentro de um dia."""

    model_config = ConfigDict(frozen=True)

    start: dt.time
    end: dt.time

    def overlaps(self, other: TimeSlot) -> bool:
        return self.start < other.end and other.start < self.end


class AvailabilityReason(StrEnum):
    """Motivo de um resultado vazio de disponibilidade."""

    NOT_AVAILABLE_DAY = "not_available_day"
    EMPTY_WINDOW = "empty_window"


class SlotComputation(BaseModel):
    """Resultado de `compute_slots`: slots livres ou um motivo para vazio."""

    model_config = ConfigDict(frozen=True)

    slots: tuple[TimeSlot, ...] = ()
    reason: AvailabilityReason | None = None

    @property
    def is_available_day(self) -> bool:
        return self.reason is not AvailabilityReason.NOT_AVAILABLE_DAY


class BookingRequest(BaseModel):
    """Pedido de reserva de um slot; `end_time` e derivado da duracao."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    service_id: str = Field(..., min_length=1)
    business_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    date: dt.date
    start_time: dt.time
    notes: str | None = Field(default=None, max_length=2000)
    staff_id: str | None = None
    recurring_id: str | None = None


class Appointment(BaseModel):
    """Reserva concreta de um slot. Nunca e removida; apenas muda de status."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    service_id: str
    business_id: str
    customer_id: str
    staff_id: str | None = None
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    status: AppointmentStatus
    notes: str | None = None
    recurring_id: str | None = None
    payment_reference: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    @property
    def resource_id(self) -> str:
        """Recurso disputado: profissional quando houver, senao o servico."""
        return self.staff_id or self.service_id

    @property
    def starts_at(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.start_time)

    @property
    def ends_at(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.end_time)

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(start=self.start_time, end=self.end_time)

    @property
    def is_active(self) -> bool:
        return is_active_status(self.status)

    def overlaps(self, other: Appointment) -> bool:
        """Conflito de recurso: mesmo negocio, recurso e dia, com intervalos cruzados."""
        return (
            self.business_id == other.business_id
            and self.resource_id == other.resource_id
            and self.date == other.date
            and self.slot.overlaps(other.slot)
        )


__all__ = [
    "Appointment",
    "AvailabilityReason",
    "BookingRequest",
    "SlotComputation",
    "TimeSlot",
    "add_minutes",
]
