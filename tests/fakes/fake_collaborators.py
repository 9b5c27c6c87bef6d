"""Colaboradores externos falsos (pagamento e notificação) sem IO."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.appointment import Appointment
    from app.domain.notifications import AppointmentEvent, Recipient


class RecordingPaymentGateway:
    """Registra chamadas e devolve referências previsíveis."""

    def __init__(self, *, fail: bool = False) -> None:
        self.calls: list[str] = []
        self._fail = fail

    async def initialize_payment(self, appointment: Appointment) -> str:
        self.calls.append(appointment.id)
        if self._fail:
            raise RuntimeError("gateway offline")
        return f"pay-{appointment.id[:8]}"


class RecordingNotifier:
    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[tuple[Recipient, AppointmentEvent]] = []
        self._fail = fail

    async def notify(self, recipient: Recipient, event: AppointmentEvent) -> None:
        self.sent.append((recipient, event))
        if self._fail:
            raise RuntimeError("notifier offline")

    def event_types(self) -> list[str]:
        return [str(event.type) for _, event in self.sent]
