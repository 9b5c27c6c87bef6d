"""
Guards e invariantes para transições de status de agendamento.

Este módulo define regras adicionais (guards) que podem bloquear
uma transição presente na tabela: papel do ator e horário.
"""

from collections.abc import Callable

from fsm.states.appointment import TERMINAL_STATUSES, AppointmentStatus
from fsm.transitions.rules import REQUIRES_END_TIME_PASSED, get_allowed_actors
from fsm.types.transition import TransitionContext


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[AppointmentStatus, AppointmentStatus, TransitionContext], GuardResult]


def guard_valid_state(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    context: TransitionContext,
) -> GuardResult:
    """Guard: ambos os status precisam ser membros do enum."""
    if not isinstance(from_state, AppointmentStatus):
        return GuardResult.deny(f"Status de origem inválido: {from_state}")
    if not isinstance(to_state, AppointmentStatus):
        return GuardResult.deny(f"Status de destino inválido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    context: TransitionContext,
) -> GuardResult:
    """Guard: status terminais não permitem saída."""
    if from_state in TERMINAL_STATUSES:
        return GuardResult.deny(f"Status {from_state.value} é terminal, não permite transição")
    return GuardResult.allow()


def guard_same_state(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    context: TransitionContext,
) -> GuardResult:
    """Guard: transição reflexiva nunca é permitida."""
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.value} → {to_state.value}"
        )
    return GuardResult.allow()


def guard_actor_allowed(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    context: TransitionContext,
) -> GuardResult:
    """Guard: o papel do ator precisa estar autorizado para a aresta."""
    allowed = get_allowed_actors(from_state, to_state)
    if context.actor not in allowed:
        return GuardResult.deny(
            f"Papel {context.actor.value} não pode executar "
            f"{from_state.value} → {to_state.value}"
        )
    return GuardResult.allow()


def guard_end_time_passed(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    context: TransitionContext,
) -> GuardResult:
    """
    Guard: conclusão e no-show só depois do fim do agendamento.

    Sem `ends_at` no contexto a transição é negada.
    """
    if (from_state, to_state) not in REQUIRES_END_TIME_PASSED:
        return GuardResult.allow()
    if context.ends_at is None or context.now < context.ends_at:
        return GuardResult.deny(
            f"{to_state.value} só é permitido após o horário de término"
        )
    return GuardResult.allow()


# Aplicados em ordem; o primeiro deny interrompe
DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
    guard_actor_allowed,
    guard_end_time_passed,
]


def evaluate_guards(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    context: TransitionContext,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Args:
        from_state: Status de origem
        to_state: Status de destino
        context: Ator, relógio e fim do agendamento
        guards: Lista de guards a aplicar (usa DEFAULT_GUARDS se None)

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, context)
        if not result.allowed:
            return result

    return GuardResult.allow()
