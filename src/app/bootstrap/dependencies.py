"""Composition root do agendamento: conecta implementações aos protocolos.

`build_container` aceita qualquer colaborador já pronto (testes passam
fakes); os ausentes são criados conforme as settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client, create_http_client
from app.coordinators.booking import BookingCoordinator
from app.coordinators.event_publisher import EventPublisher
from app.coordinators.recurrence import RecurrenceExpander
from app.infra.background_tasks import BackgroundTaskRunner
from app.infra.catalog import HttpServiceCatalog
from app.infra.clock import SystemClock
from app.infra.locks import InProcessBookingLock, RedisBookingLock
from app.infra.notifications import LoggingNotifier, WebhookNotifier
from app.infra.payments import HttpPaymentGateway, LoggingPaymentGateway
from app.infra.stores import MemoryAppointmentStore, MemoryRecurringStore, MemoryServiceCatalog
from app.use_cases.scheduling import (
    ListAppointmentsUseCase,
    PaymentCallbacksUseCase,
    UpdateAppointmentStatusUseCase,
)
from config.settings import (
    IntegrationSettings,
    SchedulingSettings,
    get_base_settings,
    get_integration_settings,
    get_scheduling_settings,
)

if TYPE_CHECKING:
    from app.protocols import (
        AppointmentStoreProtocol,
        BookingLockProtocol,
        ClockProtocol,
        NotifierProtocol,
        PaymentGatewayProtocol,
        RecurringStoreProtocol,
        ServiceCatalogProtocol,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulingContainer:
    """Dependências montadas, compartilhadas pelas rotas via `app.state`."""

    catalog: ServiceCatalogProtocol
    appointments: AppointmentStoreProtocol
    series_store: RecurringStoreProtocol
    lock: BookingLockProtocol
    clock: ClockProtocol
    tasks: BackgroundTaskRunner
    booking: BookingCoordinator
    expander: RecurrenceExpander
    update_status: UpdateAppointmentStatusUseCase
    payment_callbacks: PaymentCallbacksUseCase
    list_appointments: ListAppointmentsUseCase


def create_booking_lock(settings: SchedulingSettings) -> BookingLockProtocol:
    """Cria o lock por chave conforme BOOKING_LOCK_BACKEND."""
    if settings.booking_lock_backend == "redis":
        lock: BookingLockProtocol = RedisBookingLock(
            create_async_redis_client(),
            timeout_seconds=settings.booking_lock_timeout_seconds,
            ttl_seconds=settings.booking_lock_ttl_seconds,
        )
    else:
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_lock_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        lock = InProcessBookingLock(timeout_seconds=settings.booking_lock_timeout_seconds)
    logger.info("booking_lock_created", extra={"backend": settings.booking_lock_backend})
    return lock


def create_service_catalog(settings: IntegrationSettings) -> ServiceCatalogProtocol:
    if settings.service_catalog_url:
        return HttpServiceCatalog(base_url=settings.service_catalog_url, http_client=create_http_client())
    logger.info("service_catalog_created", extra={"backend": "memory"})
    return MemoryServiceCatalog()


def create_payment_gateway(settings: IntegrationSettings) -> PaymentGatewayProtocol:
    if settings.payment_gateway_url and settings.payment_gateway_api_key:
        return HttpPaymentGateway(
            base_url=settings.payment_gateway_url,
            api_key=settings.payment_gateway_api_key,
            http_client=create_http_client(),
        )
    logger.info("payment_gateway_created", extra={"backend": "logging"})
    return LoggingPaymentGateway()


def create_notifier(settings: IntegrationSettings) -> NotifierProtocol:
    if settings.notification_webhook_url:
        return WebhookNotifier(url=settings.notification_webhook_url, http_client=create_http_client())
    logger.info("notifier_created", extra={"backend": "logging"})
    return LoggingNotifier()


def build_container(
    *,
    scheduling: SchedulingSettings | None = None,
    integrations: IntegrationSettings | None = None,
    catalog: ServiceCatalogProtocol | None = None,
    appointments: AppointmentStoreProtocol | None = None,
    series_store: RecurringStoreProtocol | None = None,
    lock: BookingLockProtocol | None = None,
    clock: ClockProtocol | None = None,
    payments: PaymentGatewayProtocol | None = None,
    notifier: NotifierProtocol | None = None,
) -> SchedulingContainer:
    """Monta o grafo de dependências do agendamento."""
    scheduling = scheduling or get_scheduling_settings()
    integrations = integrations or get_integration_settings()

    if catalog is None:
        catalog = create_service_catalog(integrations)
    if appointments is None:
        appointments = MemoryAppointmentStore()
    if series_store is None:
        series_store = MemoryRecurringStore()
    if lock is None:
        lock = create_booking_lock(scheduling)
    if clock is None:
        clock = SystemClock(scheduling.schedule_timezone)
    if payments is None:
        payments = create_payment_gateway(integrations)
    if notifier is None:
        notifier = create_notifier(integrations)

    tasks = BackgroundTaskRunner(limit=scheduling.background_task_limit)
    events = EventPublisher(notifier, tasks)
    booking = BookingCoordinator(
        catalog=catalog,
        appointments=appointments,
        lock=lock,
        clock=clock,
        payments=payments,
        events=events,
        tasks=tasks,
    )
    update_status = UpdateAppointmentStatusUseCase(appointments, lock, clock, events)
    expander = RecurrenceExpander(
        coordinator=booking,
        series_store=series_store,
        appointments=appointments,
        update_status=update_status,
        lock=lock,
        clock=clock,
        events=events,
        horizon_days=scheduling.recurrence_horizon_days,
        max_instances_per_run=scheduling.recurrence_max_instances_per_run,
        preview_limit=scheduling.recurrence_preview_limit,
    )
    return SchedulingContainer(
        catalog=catalog,
        appointments=appointments,
        series_store=series_store,
        lock=lock,
        clock=clock,
        tasks=tasks,
        booking=booking,
        expander=expander,
        update_status=update_status,
        payment_callbacks=PaymentCallbacksUseCase(update_status),
        list_appointments=ListAppointmentsUseCase(appointments),
    )
