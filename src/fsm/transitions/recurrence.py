"""
Regras de transição de status de séries recorrentes.

ACTIVE ↔ PAUSED; ambos podem encerrar em CANCELLED ou COMPLETED.
"""

from fsm.states.recurrence import TERMINAL_SERIES_STATUSES, RecurrenceStatus

SeriesTransitionMap = dict[RecurrenceStatus, frozenset[RecurrenceStatus]]

SERIES_TRANSITIONS: SeriesTransitionMap = {
    RecurrenceStatus.ACTIVE: frozenset({
        RecurrenceStatus.PAUSED,
        RecurrenceStatus.CANCELLED,
        RecurrenceStatus.COMPLETED,
    }),
    RecurrenceStatus.PAUSED: frozenset({
        RecurrenceStatus.ACTIVE,
        RecurrenceStatus.CANCELLED,
        RecurrenceStatus.COMPLETED,
    }),
    RecurrenceStatus.COMPLETED: frozenset(),
    RecurrenceStatus.CANCELLED: frozenset(),
}


def is_series_transition_valid(
    from_state: RecurrenceStatus,
    to_state: RecurrenceStatus,
) -> bool:
    """Verifica se a série pode ir de `from_state` para `to_state`."""
    if from_state in TERMINAL_SERIES_STATUSES:
        return False
    return to_state in SERIES_TRANSITIONS.get(from_state, frozenset())
