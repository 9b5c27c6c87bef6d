"""Schemas HTTP das rotas de agendamento.

Entidades de domínio são devolvidas como estão; aqui ficam apenas os
envelopes de entrada/saída próprios da API.
"""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.appointment import Appointment, AvailabilityReason, BookingRequest, TimeSlot
from fsm.states import AppointmentStatus, RecurrenceStatus


class SlotsResponse(BaseModel):
    service_id: str
    date: dt.date
    slots: list[TimeSlot]
    reason: AvailabilityReason | None = None


class CreateAppointmentRequest(BaseModel):
    """Reserva avulsa pedida pelo cliente.

    `staff_id` escolhe o profissional (recurso independente). O vínculo com
    uma série só é criado pelo RecurrenceExpander, então `recurring_id` não é
    aceito aqui.
    """

    model_config = ConfigDict(extra="forbid")

    service_id: str = Field(..., min_length=1)
    business_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    date: dt.date
    start_time: dt.time
    notes: str | None = Field(default=None, max_length=2000)
    staff_id: str | None = None

    def to_booking_request(self) -> BookingRequest:
        return BookingRequest(**self.model_dump())


class AppointmentStatusUpdate(BaseModel):
    """Mudança de status pedida por negócio ou cliente.

    Pagamento usa os callbacks dedicados; o ator SYSTEM é interno.
    """

    model_config = ConfigDict(extra="forbid")

    status: AppointmentStatus
    actor: Literal["business", "customer"]


class SeriesStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: RecurrenceStatus


class PreviewResponse(BaseModel):
    dates: list[dt.date]


class MaterializeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    horizon: dt.date | None = None


class MaterializeResponse(BaseModel):
    series_id: str
    created: list[Appointment]


class ErrorResponse(BaseModel):
    error_code: str
    message: str
