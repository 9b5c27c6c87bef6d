"""Contrato de persistência de séries recorrentes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.recurring_appointment import RecurringAppointment
    from fsm.states.recurrence import RecurrenceStatus


class RecurringStoreProtocol(ABC):
    """Store assíncrono de séries. `save` é upsert por id."""

    @abstractmethod
    async def save(self, series: RecurringAppointment) -> None:
        """Insere ou substitui a série."""

    @abstractmethod
    async def get(self, series_id: str) -> RecurringAppointment | None:
        """Busca por id; None se não existir."""

    @abstractmethod
    async def list_for_business(
        self,
        business_id: str,
        *,
        status: RecurrenceStatus | None = None,
        customer_id: str | None = None,
    ) -> list[RecurringAppointment]:
        """Séries do negócio, mais recentes primeiro."""

    @abstractmethod
    async def list_for_customer(
        self,
        customer_id: str,
        *,
        status: RecurrenceStatus | None = None,
        business_id: str | None = None,
    ) -> list[RecurringAppointment]:
        """Séries do cliente, mais recentes primeiro."""

    @abstractmethod
    async def list_active(self) -> list[RecurringAppointment]:
        """Séries ACTIVE (manutenção periódica de materialização)."""
