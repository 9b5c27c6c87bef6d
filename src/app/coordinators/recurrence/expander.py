"""RecurrenceExpander: cria séries e materializa suas instâncias.

Cada ocorrência é reservada pelo BookingCoordinator, com as mesmas
garantias de um agendamento avulso. Ocorrências sem slot (conflito, dia não
atendido, horário passado) vão para `skipped_dates` e não são retentadas.
A série é gravada após cada ocorrência: uma execução interrompida mantém o
progresso já feito e a próxima continua do cursor.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import TYPE_CHECKING

from app.domain.appointment import Appointment, BookingRequest, add_minutes
from app.domain.notifications import EventType
from app.domain.recurring_appointment import (
    WEEKDAY_PATTERNS,
    RecurringAppointment,
    SeriesDefinition,
)
from app.observability import get_correlation_id, record_materialization
from app.services.appointment_availability import is_slot_in_window
from app.services.recurrence_dates import generate_occurrences, is_series_exhausted, preview_dates
from fsm.states import AppointmentStatus, RecurrenceStatus
from fsm.transitions import is_series_transition_valid
from fsm.types import ActorRole
from utils.errors import (
    InvalidDayError,
    InvalidTransitionError,
    SchedulingError,
    SeriesNotFoundError,
    ServiceDisabledError,
    SlotNoLongerAvailableError,
    ValidationError,
)

if TYPE_CHECKING:
    from app.coordinators.booking.coordinator import BookingCoordinator
    from app.coordinators.event_publisher import EventPublisher
    from app.domain.service import Service
    from app.protocols.appointment_store import AppointmentStoreProtocol
    from app.protocols.booking_lock import BookingLockProtocol
    from app.protocols.clock import ClockProtocol
    from app.protocols.recurring_store import RecurringStoreProtocol
    from app.use_cases.scheduling.update_appointment_status import UpdateAppointmentStatusUseCase

logger = logging.getLogger(__name__)

_COMPONENT = "recurrence_expander"
_SKIPPABLE = (SlotNoLongerAvailableError, InvalidDayError, ValidationError)


def series_lock_key(series_id: str) -> str:
    return f"series:{series_id}"


class RecurrenceExpander:
    def __init__(
        self,
        *,
        coordinator: BookingCoordinator,
        series_store: RecurringStoreProtocol,
        appointments: AppointmentStoreProtocol,
        update_status: UpdateAppointmentStatusUseCase,
        lock: BookingLockProtocol,
        clock: ClockProtocol,
        events: EventPublisher,
        horizon_days: int = 28,
        max_instances_per_run: int = 60,
        preview_limit: int = 4,
    ) -> None:
        self._coordinator = coordinator
        self._series = series_store
        self._appointments = appointments
        self._update_status = update_status
        self._lock = lock
        self._clock = clock
        self._events = events
        self._horizon_days = horizon_days
        self._max_per_run = max_instances_per_run
        self._preview_limit = preview_limit

    # ──────────────────────────────────────────────────────────────
    # Criação
    # ──────────────────────────────────────────────────────────────

    async def create_series(self, definition: SeriesDefinition) -> RecurringAppointment:
        """Valida, persiste a série ACTIVE e materializa o horizonte inicial."""
        service = await self._coordinator.load_service(definition.service_id)
        end_time = self._validate_definition(service, definition)

        now = self._clock.now()
        series = RecurringAppointment(
            business_id=definition.business_id,
            service_id=definition.service_id,
            customer_id=definition.customer_id,
            staff_id=definition.staff_id,
            pattern=definition.pattern,
            day_of_week=definition.day_of_week,
            day_of_month=definition.day_of_month,
            start_date=definition.start_date,
            end_date=definition.end_date,
            start_time=definition.start_time,
            end_time=end_time,
            occurrences=definition.occurrences,
            notes=definition.notes,
            status=RecurrenceStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        await self._series.save(series)
        logger.info(
            "series_created",
            extra={
                "component": _COMPONENT,
                "series_id": series.id,
                "business_id": series.business_id,
                "pattern": str(series.pattern),
                "correlation_id": get_correlation_id(),
            },
        )

        await self.materialize_upcoming(series.id)
        stored = await self.get_series(series.id)
        self._events.series_event(EventType.SERIES_CREATED, stored, self._clock.now())
        return stored

    def _validate_definition(self, service: Service, definition: SeriesDefinition) -> dt.time:
        if service.business_id != definition.business_id:
            raise ValidationError("Serviço não pertence ao negócio informado")
        if not service.is_active:
            raise ServiceDisabledError(f"Serviço {service.id} está desativado")
        if definition.pattern in WEEKDAY_PATTERNS and definition.day_of_week not in service.availability.days:
            raise InvalidDayError(f"Serviço não atende às {definition.day_of_week}")
        if not is_slot_in_window(service, definition.start_time):
            raise ValidationError("Horário fora da grade de disponibilidade do serviço")
        if not preview_dates(definition, 1):
            raise ValidationError("Série não gera nenhuma ocorrência")
        return add_minutes(definition.start_time, service.duration_minutes)

    # ──────────────────────────────────────────────────────────────
    # Materialização
    # ──────────────────────────────────────────────────────────────

    async def materialize_upcoming(
        self,
        series_id: str,
        horizon: dt.date | None = None,
    ) -> list[Appointment]:
        """Cria as instâncias devidas até o horizonte, em ordem cronológica.

        Só age em séries ACTIVE. Repetir com o mesmo horizonte não cria nada
        novo: as datas já tratadas ficam atrás do cursor `last_processed_date`.
        """
        async with self._lock.hold(series_lock_key(series_id)):
            series = await self.get_series(series_id)
            if series.status != RecurrenceStatus.ACTIVE:
                logger.info(
                    "series_materialization_skipped",
                    extra={"component": _COMPONENT, "series_id": series_id, "status": str(series.status)},
                )
                return []
            await self._coordinator.load_bookable_service(series.service_id)

            today = self._clock.today()
            until = horizon or today + dt.timedelta(days=self._horizon_days)
            definition = series.to_definition()
            dates = generate_occurrences(
                definition,
                until=until,
                after=series.last_processed_date,
                from_date=today,
                limit=self._max_per_run,
            )

            created: list[Appointment] = []
            skipped = 0
            for day in dates:
                series, appointment = await self._book_occurrence(series, day)
                if appointment is None:
                    skipped += 1
                else:
                    created.append(appointment)

            cursor = max(series.last_processed_date or dt.date.min, today - dt.timedelta(days=1))
            if is_series_exhausted(definition, after=cursor):
                series = series.with_status(RecurrenceStatus.COMPLETED, self._clock.now())
                await self._series.save(series)
                logger.info("series_completed", extra={"component": _COMPONENT, "series_id": series_id})

        record_materialization(series_id, len(created), skipped, get_correlation_id())
        return created

    async def _book_occurrence(
        self,
        series: RecurringAppointment,
        day: dt.date,
    ) -> tuple[RecurringAppointment, Appointment | None]:
        request = BookingRequest(
            service_id=series.service_id,
            business_id=series.business_id,
            customer_id=series.customer_id,
            staff_id=series.staff_id,
            date=day,
            start_time=series.start_time,
            notes=series.notes,
            recurring_id=series.id,
        )
        try:
            appointment = await self._coordinator.create_appointment(request)
        except _SKIPPABLE as exc:
            series = series.with_skipped(day, self._clock.now())
            await self._series.save(series)
            logger.warning(
                "series_occurrence_skipped",
                extra={
                    "component": _COMPONENT,
                    "series_id": series.id,
                    "date": day.isoformat(),
                    "error_code": exc.code,
                },
            )
            return series, None

        series = series.with_instance(appointment.id, day, self._clock.now())
        await self._series.save(series)
        return series, appointment

    async def materialize_all_active(self, horizon: dt.date | None = None) -> int:
        """Manutenção periódica: materializa todas as séries ACTIVE.

        Falha de uma série (serviço desativado ou removido, por exemplo) é
        logada e não interrompe as demais; a série continua ACTIVE e volta a
        ser tentada na próxima execução.
        """
        total = 0
        for series in await self._series.list_active():
            try:
                total += len(await self.materialize_upcoming(series.id, horizon))
            except SchedulingError as exc:
                logger.warning(
                    "series_maintenance_failed",
                    extra={
                        "component": _COMPONENT,
                        "series_id": series.id,
                        "service_id": series.service_id,
                        "error_code": exc.code,
                    },
                )
        return total

    # ──────────────────────────────────────────────────────────────
    # Status da série
    # ──────────────────────────────────────────────────────────────

    async def apply_bulk_status(
        self,
        series_id: str,
        new_status: RecurrenceStatus,
    ) -> RecurringAppointment:
        """Muda o status da série.

        - paused: para de materializar; instâncias intactas
        - active (de paused): retoma do próximo ponto não processado; se o
          serviço não está mais disponível ou a retomada falha, a série
          continua PAUSED
        - cancelled: cancela instâncias futuras pending/confirmed (ator SYSTEM)
        - completed: para de materializar, sem cascata
        """
        async with self._lock.hold(series_lock_key(series_id)):
            series = await self.get_series(series_id)
            previous = series.status
            if not is_series_transition_valid(previous, new_status):
                raise InvalidTransitionError(str(previous), str(new_status))
            if new_status == RecurrenceStatus.ACTIVE:
                await self._coordinator.load_bookable_service(series.service_id)
            series = series.with_status(new_status, self._clock.now())
            await self._series.save(series)

        logger.info(
            "series_status_changed",
            extra={
                "component": _COMPONENT,
                "series_id": series_id,
                "from_state": str(previous),
                "to_state": str(new_status),
                "correlation_id": get_correlation_id(),
            },
        )

        if new_status == RecurrenceStatus.CANCELLED:
            await self._cascade_cancel(series)
        elif new_status == RecurrenceStatus.ACTIVE:
            try:
                await self.materialize_upcoming(series_id)
            except Exception:
                await self._restore_status(series_id, previous)
                raise

        stored = await self.get_series(series_id)
        self._events.series_event(EventType.SERIES_STATUS_CHANGED, stored, self._clock.now())
        return stored

    async def _restore_status(self, series_id: str, status: RecurrenceStatus) -> None:
        async with self._lock.hold(series_lock_key(series_id)):
            series = await self.get_series(series_id)
            await self._series.save(series.with_status(status, self._clock.now()))
        logger.warning(
            "series_resume_failed",
            extra={"component": _COMPONENT, "series_id": series_id, "to_state": str(status)},
        )

    async def _cascade_cancel(self, series: RecurringAppointment) -> int:
        now = self._clock.now()
        cancelled = 0
        for child in await self._appointments.get_many(list(series.appointment_ids)):
            if not child.is_active or child.starts_at <= now:
                continue
            try:
                await self._update_status.execute(
                    child.id,
                    AppointmentStatus.CANCELLED,
                    ActorRole.SYSTEM,
                    trigger="series_cancelled",
                    metadata={"recurring_id": series.id},
                )
            except InvalidTransitionError as exc:
                # Instância mudou de status entre a leitura e o cancelamento.
                logger.info(
                    "series_cascade_child_skipped",
                    extra={"series_id": series.id, "appointment_id": child.id, "reason": exc.message},
                )
                continue
            cancelled += 1
        logger.info(
            "series_cascade_cancelled",
            extra={"component": _COMPONENT, "series_id": series.id, "cancelled": cancelled},
        )
        return cancelled

    # ──────────────────────────────────────────────────────────────
    # Consultas
    # ──────────────────────────────────────────────────────────────

    async def get_series(self, series_id: str) -> RecurringAppointment:
        series = await self._series.get(series_id)
        if series is None:
            raise SeriesNotFoundError(f"Série {series_id} não encontrada")
        return series

    async def list_series(
        self,
        business_id: str,
        *,
        status: RecurrenceStatus | None = None,
        customer_id: str | None = None,
    ) -> list[RecurringAppointment]:
        return await self._series.list_for_business(business_id, status=status, customer_id=customer_id)

    async def list_customer_series(
        self,
        customer_id: str,
        *,
        status: RecurrenceStatus | None = None,
        business_id: str | None = None,
    ) -> list[RecurringAppointment]:
        return await self._series.list_for_customer(customer_id, status=status, business_id=business_id)

    def preview_dates(self, definition: SeriesDefinition, limit: int | None = None) -> list[dt.date]:
        """Próximas datas do padrão, sem consultar disponibilidade."""
        return preview_dates(definition, self._preview_limit if limit is None else limit)
