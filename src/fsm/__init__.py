"""
Módulo FSM: Máquinas de estados do agendamento.

Governa o ciclo de vida de agendamentos (AppointmentStatus) e de
séries recorrentes (RecurrenceStatus). Nenhum componente escreve
status diretamente: toda mudança passa por aqui.

Estrutura:
    - states/: Status (AppointmentStatus, RecurrenceStatus) e status inicial
    - transitions/: Tabelas de transição e papéis autorizados
    - rules/: Guards (papel do ator, horário de término)
    - manager/: Máquina de estados (AppointmentStateMachine)
    - types/: Tipos de dados (ActorRole, StateTransition, TransitionResult)
"""

# Manager
from fsm.manager import AppointmentStateMachine, create_fsm

# Guards/Rules
from fsm.rules import GuardResult, evaluate_guards

# Status
from fsm.states import (
    ACTIVE_STATUSES,
    TERMINAL_SERIES_STATUSES,
    TERMINAL_STATUSES,
    AppointmentStatus,
    RecurrenceStatus,
    initial_status_for,
    is_active,
    is_series_terminal,
    is_terminal,
    is_valid_status,
)

# Transições
from fsm.transitions import (
    SERIES_TRANSITIONS,
    TRANSITION_ACTORS,
    VALID_TRANSITIONS,
    get_allowed_actors,
    get_valid_targets,
    is_series_transition_valid,
    is_transition_valid,
    validate_transition_map,
)

# Types
from fsm.types import ActorRole, StateTransition, TransitionContext, TransitionResult

__all__ = [
    "ACTIVE_STATUSES",
    "SERIES_TRANSITIONS",
    "TERMINAL_SERIES_STATUSES",
    "TERMINAL_STATUSES",
    "TRANSITION_ACTORS",
    "VALID_TRANSITIONS",
    "ActorRole",
    "AppointmentStateMachine",
    "AppointmentStatus",
    "GuardResult",
    "RecurrenceStatus",
    "StateTransition",
    "TransitionContext",
    "TransitionResult",
    "create_fsm",
    "evaluate_guards",
    "get_allowed_actors",
    "get_valid_targets",
    "initial_status_for",
    "is_active",
    "is_series_terminal",
    "is_series_transition_valid",
    "is_terminal",
    "is_transition_valid",
    "is_valid_status",
    "validate_transition_map",
]
