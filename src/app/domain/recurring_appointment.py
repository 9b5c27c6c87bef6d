"""Series recorrentes de agendamento e sua definicao de entrada."""

from __future__ import annotations

import datetime as dt
import uuid
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.domain.service import Weekday
from fsm.states.recurrence import RecurrenceStatus


class RecurrencePattern(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    def __str__(self) -> str:
        return self.value


WEEKDAY_PATTERNS: frozenset[RecurrencePattern] = frozenset({
    RecurrencePattern.WEEKLY,
    RecurrencePattern.BIWEEKLY,
})


class SeriesDefinition(BaseModel):
    """Entrada de criacao/preview de uma serie.

    Regras de coerencia do padrao:
    - weekly/biweekly exigem `day_of_week`;
    - monthly exige `day_of_month` (1-31);
    - `end_date`, quando informado, nao pode ser anterior a `start_date`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    business_id: str = Field(..., min_length=1)
    service_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    staff_id: str | None = None
    pattern: RecurrencePattern
    day_of_week: Weekday | None = None
    day_of_month: int | None = Field(default=None, ge=1, le=31)
    start_date: dt.date
    end_date: dt.date | None = None
    start_time: dt.time
    occurrences: int | None = Field(default=None, ge=1)
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _parse_day_of_week(cls, value: Any) -> Weekday | None:
        if value is None:
            return None
        return Weekday.parse(value)

    @model_validator(mode="after")
    def _check_pattern_fields(self) -> SeriesDefinition:
        if self.pattern in WEEKDAY_PATTERNS and self.day_of_week is None:
            raise ValueError(f"day_of_week e obrigatorio para o padrao {self.pattern}")
        if self.pattern is RecurrencePattern.MONTHLY and self.day_of_month is None:
            raise ValueError("day_of_month e obrigatorio para o padrao monthly")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date nao pode ser anterior a start_date")
        return self


class RecurringAppointment(BaseModel):
    """Serie persistida. `appointment_ids` e `skipped_dates` so crescem."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    business_id: str
    service_id: str
    customer_id: str
    staff_id: str | None = None
    pattern: RecurrencePattern
    day_of_week: Weekday | None = None
    day_of_month: int | None = None
    start_date: dt.date
    end_date: dt.date | None = None
    start_time: dt.time
    end_time: dt.time
    occurrences: int | None = None
    notes: str | None = None
    status: RecurrenceStatus = RecurrenceStatus.ACTIVE
    appointment_ids: tuple[str, ...] = ()
    skipped_dates: tuple[dt.date, ...] = ()
    last_processed_date: dt.date | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    @property
    def processed_count(self) -> int:
        """Ocorrencias ja tratadas (criadas ou puladas)."""
        return len(self.appointment_ids) + len(self.skipped_dates)

    @property
    def remaining_occurrences(self) -> int | None:
        if self.occurrences is None:
            return None
        return max(self.occurrences - self.processed_count, 0)

    def with_instance(self, appointment_id: str, day: dt.date, now: dt.datetime) -> RecurringAppointment:
        return self.model_copy(
            update={
                "appointment_ids": (*self.appointment_ids, appointment_id),
                "last_processed_date": day,
                "updated_at": now,
            }
        )

    def with_skipped(self, day: dt.date, now: dt.datetime) -> RecurringAppointment:
        return self.model_copy(
            update={
                "skipped_dates": (*self.skipped_dates, day),
                "last_processed_date": day,
                "updated_at": now,
            }
        )

    def with_status(self, status: RecurrenceStatus, now: dt.datetime) -> RecurringAppointment:
        return self.model_copy(update={"status": status, "updated_at": now})

    def to_definition(self) -> SeriesDefinition:
        return SeriesDefinition(
            business_id=self.business_id,
            service_id=self.service_id,
            customer_id=self.customer_id,
            staff_id=self.staff_id,
            pattern=self.pattern,
            day_of_week=self.day_of_week,
            day_of_month=self.day_of_month,
            start_date=self.start_date,
            end_date=self.end_date,
            start_time=self.start_time,
            occurrences=self.occurrences,
            notes=self.notes,
        )


__all__ = [
    "WEEKDAY_PATTERNS",
    "RecurrencePattern",
    "RecurringAppointment",
    "SeriesDefinition",
]
