"""BookingCoordinator: valida, serializa e grava reservas.

Fluxo de `create_appointment`:
1. carrega o serviço e valida negócio, ativação, dia e grade de horário;
2. sob o lock (business_id, recurso, data) recalcula a disponibilidade
   com as reservas ativas e grava;
3. se o store acusar sobreposição, revalida e tenta uma única vez mais;
4. após o commit dispara pagamento (preço > 0) e notificação em background.
"""

from __future__ import annotations

import datetime as dt
import logging
import time
from typing import TYPE_CHECKING

from app.domain.appointment import Appointment, BookingRequest, TimeSlot, add_minutes
from app.domain.notifications import EventType
from app.observability import get_correlation_id, record_booking_conflict, record_latency
from app.protocols.appointment_store import SlotConflictError
from app.services.appointment_availability import compute_slots, is_slot_in_window
from app.use_cases.scheduling.update_appointment_status import appointment_lock_key
from fsm.states.appointment import initial_status_for
from utils.errors import (
    InvalidDayError,
    ServiceDisabledError,
    ServiceNotFoundError,
    SlotNoLongerAvailableError,
    ValidationError,
)

if TYPE_CHECKING:
    from app.coordinators.event_publisher import EventPublisher
    from app.domain.appointment import SlotComputation
    from app.domain.service import Service
    from app.infra.background_tasks import BackgroundTaskRunner
    from app.protocols.appointment_store import AppointmentStoreProtocol
    from app.protocols.booking_lock import BookingLockProtocol
    from app.protocols.clock import ClockProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol
    from app.protocols.service_catalog import ServiceCatalogProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "booking_coordinator"
_STORE_ATTEMPTS = 2


def booking_lock_key(business_id: str, resource_id: str, day: dt.date) -> str:
    return f"booking:{business_id}:{resource_id}:{day.isoformat()}"


class BookingCoordinator:
    """Ponto único de criação de agendamentos (avulsos e de séries)."""

    def __init__(
        self,
        *,
        catalog: ServiceCatalogProtocol,
        appointments: AppointmentStoreProtocol,
        lock: BookingLockProtocol,
        clock: ClockProtocol,
        payments: PaymentGatewayProtocol,
        events: EventPublisher,
        tasks: BackgroundTaskRunner,
    ) -> None:
        self._catalog = catalog
        self._appointments = appointments
        self._lock = lock
        self._clock = clock
        self._payments = payments
        self._events = events
        self._tasks = tasks

    async def load_service(self, service_id: str) -> Service:
        service = await self._catalog.get_service(service_id)
        if service is None:
            raise ServiceNotFoundError(f"Serviço {service_id} não encontrado")
        return service

    async def load_bookable_service(self, service_id: str) -> Service:
        """Como `load_service`, mas exige o serviço ativo."""
        service = await self.load_service(service_id)
        if not service.is_active:
            raise ServiceDisabledError(f"Serviço {service_id} está desativado")
        return service

    async def get_available_slots(self, service_id: str, day: dt.date) -> SlotComputation:
        """Slots livres do serviço no dia (lê as reservas ativas do recurso)."""
        service = await self.load_bookable_service(service_id)
        booked = await self._booked_intervals(service.business_id, service.id, day)
        return compute_slots(service, day, booked, now=self._clock.now())

    async def create_appointment(self, request: BookingRequest) -> Appointment:
        started = time.perf_counter()
        service = await self.load_service(request.service_id)
        end_time = self._validate_request(service, request)
        resource_id = request.staff_id or service.id
        key = booking_lock_key(request.business_id, resource_id, request.date)

        async with self._lock.hold(key):
            appointment = await self._commit(service, request, end_time, resource_id)

        logger.info(
            "appointment_created",
            extra={
                "component": _COMPONENT,
                "appointment_id": appointment.id,
                "business_id": appointment.business_id,
                "service_id": appointment.service_id,
                "recurring_id": appointment.recurring_id,
                "status": str(appointment.status),
                "correlation_id": get_correlation_id(),
            },
        )
        record_latency(
            _COMPONENT,
            "create_appointment",
            (time.perf_counter() - started) * 1000,
            get_correlation_id(),
        )

        if service.requires_payment:
            self._tasks.schedule(
                self._attach_payment(appointment),
                name=f"payment:{appointment.id}",
            )
        self._events.appointment_event(EventType.APPOINTMENT_CREATED, appointment, self._clock.now())
        return appointment

    def _validate_request(self, service: Service, request: BookingRequest) -> dt.time:
        if service.business_id != request.business_id:
            raise ValidationError("Serviço não pertence ao negócio informado")
        if not service.is_active:
            raise ServiceDisabledError(f"Serviço {service.id} está desativado")
        if not service.availability.offers(request.date):
            raise InvalidDayError(
                f"Serviço não atende em {request.date.isoformat()} ({request.date.strftime('%A').lower()})"
            )
        try:
            end_time = add_minutes(request.start_time, service.duration_minutes)
        except ValueError as exc:
            raise ValidationError("Horário ultrapassa o fim do dia") from exc
        if not is_slot_in_window(service, request.start_time):
            raise ValidationError("Horário fora da grade de disponibilidade do serviço")
        return end_time

    async def _commit(
        self,
        service: Service,
        request: BookingRequest,
        end_time: dt.time,
        resource_id: str,
    ) -> Appointment:
        requested = TimeSlot(start=request.start_time, end=end_time)
        for attempt in range(1, _STORE_ATTEMPTS + 1):
            booked = await self._booked_intervals(request.business_id, resource_id, request.date)
            computation = compute_slots(service, request.date, booked, now=self._clock.now())
            if requested not in computation.slots:
                self._record_conflict("revalidation", request, attempt)
                raise SlotNoLongerAvailableError("Horário não está mais disponível")

            now = self._clock.now()
            appointment = Appointment(
                service_id=service.id,
                business_id=request.business_id,
                customer_id=request.customer_id,
                staff_id=request.staff_id,
                date=request.date,
                start_time=request.start_time,
                end_time=end_time,
                status=initial_status_for(service.price),
                notes=request.notes,
                recurring_id=request.recurring_id,
                created_at=now,
                updated_at=now,
            )
            try:
                await self._appointments.insert(appointment)
            except SlotConflictError:
                self._record_conflict("store_constraint", request, attempt)
                continue
            return appointment

        raise SlotNoLongerAvailableError("Horário não está mais disponível")

    async def _booked_intervals(self, business_id: str, resource_id: str, day: dt.date) -> list[TimeSlot]:
        active = await self._appointments.list_active_for_resource(business_id, resource_id, day)
        return [item.slot for item in active]

    async def _attach_payment(self, appointment: Appointment) -> None:
        reference = await self._payments.initialize_payment(appointment)
        async with self._lock.hold(appointment_lock_key(appointment.id)):
            latest = await self._appointments.get(appointment.id)
            if latest is None:
                return
            await self._appointments.update(
                latest.model_copy(update={"payment_reference": reference, "updated_at": self._clock.now()})
            )
        logger.info(
            "payment_reference_attached",
            extra={"component": _COMPONENT, "appointment_id": appointment.id},
        )

    def _record_conflict(self, reason: str, request: BookingRequest, attempt: int) -> None:
        logger.info(
            "slot_conflict",
            extra={
                "component": _COMPONENT,
                "reason": reason,
                "attempt": attempt,
                "business_id": request.business_id,
                "service_id": request.service_id,
            },
        )
        record_booking_conflict(reason, get_correlation_id(), {"attempt": attempt})
