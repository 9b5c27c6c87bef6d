"""Contratos de persistência de agendamentos.

O store é a segunda barreira contra reserva dupla: além do lock por chave,
`insert` rejeita um agendamento ativo que cruze outro ativo no mesmo
(business_id, recurso, data), como faria uma constraint de unicidade.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import datetime as dt

    from app.domain.appointment import Appointment
    from fsm.states.appointment import AppointmentStatus


class SlotConflictError(Exception):
    """Insert violaria a restrição de não sobreposição do store."""

    def __init__(self, appointment_id: str, conflicting_id: str) -> None:
        super().__init__(f"Agendamento {appointment_id} cruza {conflicting_id}")
        self.appointment_id = appointment_id
        self.conflicting_id = conflicting_id


class AppointmentStoreProtocol(ABC):
    """Contrato assíncrono para o store de agendamentos.

    Métodos canônicos:
    - insert(appointment): persiste novo agendamento (SlotConflictError em sobreposição)
    - update(appointment): substitui a versão persistida (status, payment_reference)
    - get(appointment_id): retorna o agendamento ou None
    - list_active_for_resource(business_id, resource_id, day): ocupação do recurso
    """

    @abstractmethod
    async def insert(self, appointment: Appointment) -> None:
        """Persiste um agendamento novo.

        Raises:
            SlotConflictError: se cruzar outro agendamento ativo do mesmo recurso.
        """

    @abstractmethod
    async def update(self, appointment: Appointment) -> None:
        """Substitui a versão persistida de um agendamento existente."""

    @abstractmethod
    async def get(self, appointment_id: str) -> Appointment | None:
        """Busca por id; None se não existir."""

    @abstractmethod
    async def get_many(self, appointment_ids: list[str]) -> list[Appointment]:
        """Busca vários ids preservando a ordem; ids ausentes são ignorados."""

    @abstractmethod
    async def list_active_for_resource(
        self,
        business_id: str,
        resource_id: str,
        day: dt.date,
    ) -> list[Appointment]:
        """Agendamentos pending/confirmed do recurso no dia."""

    @abstractmethod
    async def list_for_business(
        self,
        business_id: str,
        *,
        status: AppointmentStatus | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Appointment]:
        """Agendamentos do negócio ordenados por data/hora."""

    @abstractmethod
    async def list_for_customer(
        self,
        customer_id: str,
        *,
        status: AppointmentStatus | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Appointment]:
        """Agendamentos do cliente ordenados por data/hora."""
