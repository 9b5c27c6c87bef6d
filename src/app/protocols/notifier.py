"""Contrato do colaborador de notificações (e-mail, push, webhook)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.notifications import AppointmentEvent, Recipient


@runtime_checkable
class NotifierProtocol(Protocol):
    async def notify(self, recipient: Recipient, event: AppointmentEvent) -> None:
        """Entrega o evento; falhas nunca afetam a operação de agenda."""
        ...
