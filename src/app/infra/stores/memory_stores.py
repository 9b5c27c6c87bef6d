"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from app.domain.appointment import Appointment
from app.domain.recurring_appointment import RecurringAppointment
from app.domain.service import Service
from app.protocols.appointment_store import AppointmentStoreProtocol, SlotConflictError
from app.protocols.recurring_store import RecurringStoreProtocol
from fsm.states.appointment import AppointmentStatus
from fsm.states.recurrence import RecurrenceStatus
from utils.errors import AppointmentNotFoundError


def _in_range(day: dt.date, date_from: dt.date | None, date_to: dt.date | None) -> bool:
    if date_from is not None and day < date_from:
        return False
    return date_to is None or day <= date_to


def _sorted_by_start(items: Iterable[Appointment]) -> list[Appointment]:
    return sorted(items, key=lambda item: (item.starts_at, item.created_at))


class MemoryAppointmentStore(AppointmentStoreProtocol):
    """Store de agendamentos em memória (apenas dev/test).

    `insert` verifica sobreposição e grava sem ceder o event loop, então a
    checagem é atômica entre coroutines.
    """

    def __init__(self) -> None:
        self._items: dict[str, Appointment] = {}

    async def insert(self, appointment: Appointment) -> None:
        if appointment.is_active:
            for existing in self._items.values():
                if existing.is_active and existing.overlaps(appointment):
                    raise SlotConflictError(appointment.id, existing.id)
        self._items[appointment.id] = appointment

    async def update(self, appointment: Appointment) -> None:
        if appointment.id not in self._items:
            raise AppointmentNotFoundError(f"Agendamento {appointment.id} não encontrado")
        self._items[appointment.id] = appointment

    async def get(self, appointment_id: str) -> Appointment | None:
        return self._items.get(appointment_id)

    async def get_many(self, appointment_ids: list[str]) -> list[Appointment]:
        return [self._items[item_id] for item_id in appointment_ids if item_id in self._items]

    async def list_active_for_resource(
        self,
        business_id: str,
        resource_id: str,
        day: dt.date,
    ) -> list[Appointment]:
        return _sorted_by_start(
            item
            for item in self._items.values()
            if item.is_active
            and item.business_id == business_id
            and item.resource_id == resource_id
            and item.date == day
        )

    async def list_for_business(
        self,
        business_id: str,
        *,
        status: AppointmentStatus | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Appointment]:
        return _sorted_by_start(
            item
            for item in self._items.values()
            if item.business_id == business_id
            and (status is None or item.status == status)
            and _in_range(item.date, date_from, date_to)
        )

    async def list_for_customer(
        self,
        customer_id: str,
        *,
        status: AppointmentStatus | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Appointment]:
        return _sorted_by_start(
            item
            for item in self._items.values()
            if item.customer_id == customer_id
            and (status is None or item.status == status)
            and _in_range(item.date, date_from, date_to)
        )


class MemoryRecurringStore(RecurringStoreProtocol):
    """Store de séries em memória (apenas dev/test)."""

    def __init__(self) -> None:
        self._items: dict[str, RecurringAppointment] = {}

    async def save(self, series: RecurringAppointment) -> None:
        self._items[series.id] = series

    async def get(self, series_id: str) -> RecurringAppointment | None:
        return self._items.get(series_id)

    def _newest_first(self, items: Iterable[RecurringAppointment]) -> list[RecurringAppointment]:
        return sorted(items, key=lambda item: item.created_at, reverse=True)

    async def list_for_business(
        self,
        business_id: str,
        *,
        status: RecurrenceStatus | None = None,
        customer_id: str | None = None,
    ) -> list[RecurringAppointment]:
        return self._newest_first(
            item
            for item in self._items.values()
            if item.business_id == business_id
            and (status is None or item.status == status)
            and (customer_id is None or item.customer_id == customer_id)
        )

    async def list_for_customer(
        self,
        customer_id: str,
        *,
        status: RecurrenceStatus | None = None,
        business_id: str | None = None,
    ) -> list[RecurringAppointment]:
        return self._newest_first(
            item
            for item in self._items.values()
            if item.customer_id == customer_id
            and (status is None or item.status == status)
            and (business_id is None or item.business_id == business_id)
        )

    async def list_active(self) -> list[RecurringAppointment]:
        return self._newest_first(
            item for item in self._items.values() if item.status == RecurrenceStatus.ACTIVE
        )


class MemoryServiceCatalog:
    """Catálogo de serviços em memória (apenas dev/test)."""

    def __init__(self, services: Iterable[Service] = ()) -> None:
        self._services: dict[str, Service] = {service.id: service for service in services}

    def put(self, service: Service) -> None:
        self._services[service.id] = service

    async def get_service(self, service_id: str) -> Service | None:
        return self._services.get(service_id)
