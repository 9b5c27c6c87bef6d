"""Eventos de agendamento entregues ao colaborador de notificacao."""

from __future__ import annotations

import datetime as dt
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventType(StrEnum):
    APPOINTMENT_CREATED = "appointment_created"
    APPOINTMENT_STATUS_CHANGED = "appointment_status_changed"
    SERIES_CREATED = "series_created"
    SERIES_STATUS_CHANGED = "series_status_changed"


class RecipientKind(StrEnum):
    BUSINESS = "business"
    CUSTOMER = "customer"


class Recipient(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RecipientKind
    id: str


class AppointmentEvent(BaseModel):
    """Evento sem PII: apenas identificadores e status."""

    model_config = ConfigDict(frozen=True)

    type: EventType
    business_id: str
    appointment_id: str | None = None
    recurring_id: str | None = None
    status: str | None = None
    occurred_at: dt.datetime
    data: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


__all__ = ["AppointmentEvent", "EventType", "Recipient", "RecipientKind"]
