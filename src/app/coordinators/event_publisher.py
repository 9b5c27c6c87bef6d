"""Publicação fire-and-forget de eventos de agenda para o notificador."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.notifications import AppointmentEvent, EventType, Recipient, RecipientKind

if TYPE_CHECKING:
    import datetime as dt

    from app.domain.appointment import Appointment
    from app.domain.recurring_appointment import RecurringAppointment
    from app.infra.background_tasks import BackgroundTaskRunner
    from app.protocols.notifier import NotifierProtocol

logger = logging.getLogger(__name__)


class EventPublisher:
    """Entrega eventos ao negócio e ao cliente em background."""

    def __init__(self, notifier: NotifierProtocol, tasks: BackgroundTaskRunner) -> None:
        self._notifier = notifier
        self._tasks = tasks

    def appointment_event(self, event_type: EventType, appointment: Appointment, now: dt.datetime) -> None:
        event = AppointmentEvent(
            type=event_type,
            business_id=appointment.business_id,
            appointment_id=appointment.id,
            recurring_id=appointment.recurring_id,
            status=str(appointment.status),
            occurred_at=now,
            data={"date": appointment.date.isoformat(), "start_time": appointment.start_time.isoformat()},
        )
        self._publish(event, business_id=appointment.business_id, customer_id=appointment.customer_id)

    def series_event(self, event_type: EventType, series: RecurringAppointment, now: dt.datetime) -> None:
        event = AppointmentEvent(
            type=event_type,
            business_id=series.business_id,
            recurring_id=series.id,
            status=str(series.status),
            occurred_at=now,
            data={"pattern": str(series.pattern), "instances": len(series.appointment_ids)},
        )
        self._publish(event, business_id=series.business_id, customer_id=series.customer_id)

    def _publish(self, event: AppointmentEvent, *, business_id: str, customer_id: str) -> None:
        recipients = (
            Recipient(kind=RecipientKind.BUSINESS, id=business_id),
            Recipient(kind=RecipientKind.CUSTOMER, id=customer_id),
        )
        for recipient in recipients:
            self._tasks.schedule(
                self._deliver(recipient, event),
                name=f"notify:{event.type}:{recipient.kind}",
            )

    async def _deliver(self, recipient: Recipient, event: AppointmentEvent) -> None:
        try:
            await self._notifier.notify(recipient, event)
        except Exception:
            logger.warning(
                "notification_failed",
                extra={
                    "event_type": str(event.type),
                    "recipient_kind": str(recipient.kind),
                    "appointment_id": event.appointment_id,
                    "recurring_id": event.recurring_id,
                },
                exc_info=True,
            )
            raise
