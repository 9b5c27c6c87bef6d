"""
Exports públicos do módulo fsm/states.

Status canônicos de agendamentos e séries recorrentes.
"""

from fsm.states.appointment import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    AppointmentStatus,
    initial_status_for,
    is_active,
    is_terminal,
    is_valid_status,
)
from fsm.states.recurrence import (
    TERMINAL_SERIES_STATUSES,
    RecurrenceStatus,
    is_series_terminal,
)

__all__ = [
    "ACTIVE_STATUSES",
    "TERMINAL_SERIES_STATUSES",
    "TERMINAL_STATUSES",
    "AppointmentStatus",
    "RecurrenceStatus",
    "initial_status_for",
    "is_active",
    "is_series_terminal",
    "is_terminal",
    "is_valid_status",
]
