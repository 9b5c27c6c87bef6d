"""Use case de mudança de status de um agendamento via state machine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.notifications import EventType
from app.observability import get_correlation_id
from fsm.manager import create_fsm
from fsm.transitions import is_transition_valid
from fsm.types import ActorRole, TransitionContext
from utils.errors import AppointmentNotFoundError, InvalidTransitionError

if TYPE_CHECKING:
    from app.coordinators.event_publisher import EventPublisher
    from app.domain.appointment import Appointment
    from app.protocols.appointment_store import AppointmentStoreProtocol
    from app.protocols.booking_lock import BookingLockProtocol
    from app.protocols.clock import ClockProtocol
    from fsm.states import AppointmentStatus

logger = logging.getLogger(__name__)


def appointment_lock_key(appointment_id: str) -> str:
    return f"appointment:{appointment_id}"


class UpdateAppointmentStatusUseCase:
    """Aplica uma transição de status validada pela state machine.

    A leitura, a transição e a gravação rodam sob o lock do agendamento,
    então duas mudanças concorrentes nunca partem do mesmo status lido.
    Com `idempotent=True`, pedir o status atual devolve o agendamento sem
    erro e sem evento (callbacks repetidos).
    """

    def __init__(
        self,
        appointments: AppointmentStoreProtocol,
        lock: BookingLockProtocol,
        clock: ClockProtocol,
        events: EventPublisher,
    ) -> None:
        self._appointments = appointments
        self._lock = lock
        self._clock = clock
        self._events = events

    async def execute(
        self,
        appointment_id: str,
        new_status: AppointmentStatus,
        actor: ActorRole,
        *,
        trigger: str = "status_update",
        metadata: dict[str, Any] | None = None,
        idempotent: bool = False,
    ) -> Appointment:
        async with self._lock.hold(appointment_lock_key(appointment_id)):
            appointment = await self._appointments.get(appointment_id)
            if appointment is None:
                raise AppointmentNotFoundError(f"Agendamento {appointment_id} não encontrado")
            if idempotent and appointment.status == new_status:
                logger.info(
                    "appointment_status_unchanged",
                    extra={"appointment_id": appointment_id, "status": str(new_status), "trigger": trigger},
                )
                return appointment

            machine = create_fsm(appointment)
            context = TransitionContext(actor=actor, now=self._clock.now())
            audit = dict(metadata or {})
            if appointment.payment_reference:
                audit.setdefault("payment_reference", appointment.payment_reference)
            result = machine.transition(new_status, trigger, context, audit)
            transition = result.transition
            if transition is None:
                logger.info(
                    "appointment_transition_rejected",
                    extra={
                        "appointment_id": appointment_id,
                        "from_state": str(appointment.status),
                        "to_state": str(new_status),
                        "actor": str(actor),
                        "reason": result.error_reason,
                    },
                )
                reason = result.error_reason if is_transition_valid(appointment.status, new_status) else None
                raise InvalidTransitionError(str(appointment.status), str(new_status), reason)

            updated = machine.appointment
            await self._appointments.update(updated)

        logger.info(
            "appointment_status_changed",
            extra={**transition.to_log_dict(), "correlation_id": get_correlation_id()},
        )
        self._events.appointment_event(EventType.APPOINTMENT_STATUS_CHANGED, updated, context.now)
        return updated
