"""Serviço ofertado por um negócio e sua janela diária de disponibilidade.

O catálogo é somente leitura para o agendamento: o dono do negócio altera
o serviço fora deste núcleo e nunca o remove enquanto houver agendamentos
ativos (usa `is_active=False`).
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Weekday(StrEnum):
    """Dia da semana em ordem ISO (segunda primeiro)."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    def __str__(self) -> str:
        return self.value

    @property
    def iso_index(self) -> int:
        """Índice compatível com `date.weekday()` (segunda = 0)."""
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def from_date(cls, day: dt.date) -> Weekday:
        return _WEEKDAY_ORDER[day.weekday()]

    @classmethod
    def parse(cls, value: Any) -> Weekday:
        """Aceita nome (case-insensitive) ou índice 0-6 com domingo = 0.

        O índice numérico segue a convenção dos clientes web (0 = domingo).
        """
        if isinstance(value, Weekday):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Dia da semana inválido: {value!r}")
        if isinstance(value, int):
            if not 0 <= value <= 6:
                raise ValueError(f"Dia da semana fora de 0-6: {value}")
            return _WEEKDAY_ORDER[(value - 1) % 7]
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized.isdigit():
                return cls.parse(int(normalized))
            try:
                return cls(normalized)
            except ValueError:
                pass
        raise ValueError(f"Dia da semana inválido: {value!r}")


_WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)


class ServiceAvailability(BaseModel):
    """Janela diária única: dias da semana + [start_time, end_time)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    days: frozenset[Weekday] = Field(default_factory=frozenset)
    start_time: dt.time
    end_time: dt.time

    @field_validator("days", mode="before")
    @classmethod
    def _parse_days(cls, value: Any) -> frozenset[Weekday]:
        if value is None:
            return frozenset()
        return frozenset(Weekday.parse(item) for item in value)

    @model_validator(mode="after")
    def _check_window(self) -> ServiceAvailability:
        if self.start_time > self.end_time:
            raise ValueError("availability.start_time deve ser <= end_time")
        return self

    def offers(self, day: dt.date) -> bool:
        """Indica se o serviço atende no dia da semana de `day`."""
        return Weekday.from_date(day) in self.days


class Service(BaseModel):
    """Configuração de um serviço agendável (visão do provedor de catálogo)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    business_id: str = Field(..., min_length=1)
    name: str = ""
    duration_minutes: int = Field(..., gt=0, description="Duração de cada slot em minutos.")
    availability: ServiceAvailability
    price: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True

    @property
    def requires_payment(self) -> bool:
        return self.price > 0


__all__ = ["Service", "ServiceAvailability", "Weekday"]
