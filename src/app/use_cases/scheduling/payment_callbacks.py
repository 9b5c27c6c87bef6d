"""Callbacks do colaborador de pagamento (push, sem polling).

- confirmado: pending -> confirmed (ator PAYMENT)
- falhou: pending -> cancelled (ator PAYMENT)

Callbacks repetidos para um agendamento já no status alvo são ignorados; a
checagem acontece sob o lock do agendamento, junto com a transição.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fsm.states import AppointmentStatus
from fsm.types import ActorRole

if TYPE_CHECKING:
    from app.domain.appointment import Appointment
    from app.use_cases.scheduling.update_appointment_status import UpdateAppointmentStatusUseCase


class PaymentCallbacksUseCase:
    def __init__(self, update_status: UpdateAppointmentStatusUseCase) -> None:
        self._update_status = update_status

    async def on_payment_confirmed(self, appointment_id: str) -> Appointment:
        return await self._apply(appointment_id, AppointmentStatus.CONFIRMED, "payment_confirmed")

    async def on_payment_failed(self, appointment_id: str) -> Appointment:
        return await self._apply(appointment_id, AppointmentStatus.CANCELLED, "payment_failed")

    async def _apply(self, appointment_id: str, target: AppointmentStatus, trigger: str) -> Appointment:
        return await self._update_status.execute(
            appointment_id,
            target,
            ActorRole.PAYMENT,
            trigger=trigger,
            metadata={"source": "payment_gateway"},
            idempotent=True,
        )
