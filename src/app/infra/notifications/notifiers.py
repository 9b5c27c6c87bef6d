"""Notificadores: webhook HTTP e log-only."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.notifications import AppointmentEvent, Recipient
    from app.infra.http import HttpClient

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """Publica o evento em um webhook; o destinatário final é resolvido lá."""

    def __init__(self, *, url: str, http_client: HttpClient) -> None:
        self._url = url
        self._http = http_client

    async def notify(self, recipient: Recipient, event: AppointmentEvent) -> None:
        body = {
            "recipient": recipient.model_dump(mode="json"),
            "event": event.to_payload(),
        }
        await self._http.post(self._url, json=body)
        logger.debug(
            "notification_sent",
            extra={"event_type": str(event.type), "recipient_kind": str(recipient.kind)},
        )


class LoggingNotifier:
    async def notify(self, recipient: Recipient, event: AppointmentEvent) -> None:
        logger.info(
            "notification_logged",
            extra={
                "event_type": str(event.type),
                "recipient_kind": str(recipient.kind),
                "appointment_id": event.appointment_id,
                "recurring_id": event.recurring_id,
            },
        )
