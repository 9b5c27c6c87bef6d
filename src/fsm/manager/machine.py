"""
Máquina de estados (AppointmentStateMachine) para agendamentos.

Único ponto autorizado a produzir uma cópia do agendamento com
status alterado. Mantém histórico rastreável das transições.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.appointment import AppointmentStatus, is_terminal
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionContext, TransitionResult

if TYPE_CHECKING:
    from app.domain.appointment import Appointment


class AppointmentStateMachine:
    """
    Máquina de estados de um agendamento.

    Recebe o registro atual e, a cada transição bem-sucedida, substitui
    o registro por uma cópia com o novo status e `updated_at`.

    Attributes:
        appointment: Registro atual (imutável)
        current_state: Status atual
        history: Transições realizadas por esta instância
    """

    __slots__ = ("_appointment", "_history")

    def __init__(self, appointment: Appointment) -> None:
        self._appointment = appointment
        self._history: list[StateTransition] = []

    @property
    def appointment(self) -> Appointment:
        """Registro atual do agendamento."""
        return self._appointment

    @property
    def current_state(self) -> AppointmentStatus:
        """Status atual da máquina."""
        return self._appointment.status

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def is_terminal(self) -> bool:
        """Verifica se está em status terminal."""
        return is_terminal(self.current_state)

    def get_valid_targets(self) -> frozenset[AppointmentStatus]:
        """Retorna destinos da tabela a partir do status atual (sem guards)."""
        return get_valid_targets(self.current_state)

    def can_transition_to(self, target: AppointmentStatus, context: TransitionContext) -> bool:
        """Verifica tabela e guards sem efetuar a transição."""
        if not is_transition_valid(self.current_state, target):
            return False
        return evaluate_guards(self.current_state, target, self._with_end(context)).allowed

    def transition(
        self,
        target: AppointmentStatus,
        trigger: str,
        context: TransitionContext,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de status.

        Args:
            target: Status de destino
            trigger: Identificador do gatilho (ex: 'payment_confirmed')
            context: Ator e relógio
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        current = self.current_state
        if not is_transition_valid(current, target):
            return TransitionResult(
                success=False,
                error_reason=f"Transição inválida: {current.value} → {target.value}",
            )

        guard_result: GuardResult = evaluate_guards(current, target, self._with_end(context))
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        transition = StateTransition(
            appointment_id=self._appointment.id,
            from_state=current,
            to_state=target,
            trigger=trigger,
            actor=context.actor,
            timestamp=context.now,
            metadata=metadata or {},
        )

        self._appointment = self._appointment.model_copy(
            update={"status": target, "updated_at": context.now}
        )
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do status atual para observability (sem PII)."""
        return {
            "appointment_id": self._appointment.id,
            "current_state": self.current_state.value,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.value for s in self.get_valid_targets()),
        }

    def _with_end(self, context: TransitionContext) -> TransitionContext:
        return dataclasses.replace(context, ends_at=self._appointment.ends_at)


def create_fsm(appointment: Appointment) -> AppointmentStateMachine:
    """Factory da máquina de estados para um agendamento."""
    return AppointmentStateMachine(appointment)
