"""
Status de uma série recorrente (RecurringAppointment).

A série só materializa novas instâncias enquanto ACTIVE.
"""

from enum import StrEnum


class RecurrenceStatus(StrEnum):
    """Status canônicos de uma série recorrente."""

    ACTIVE = "active"
    PAUSED = "paused"

    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


TERMINAL_SERIES_STATUSES: frozenset[RecurrenceStatus] = frozenset({
    RecurrenceStatus.COMPLETED,
    RecurrenceStatus.CANCELLED,
})


def is_series_terminal(status: RecurrenceStatus) -> bool:
    """Verifica se a série está encerrada."""
    return status in TERMINAL_SERIES_STATUSES
