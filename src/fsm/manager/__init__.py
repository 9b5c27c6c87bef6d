"""
Exports públicos do módulo fsm/manager.

Máquina de estados (AppointmentStateMachine) para agendamentos.
"""

from fsm.manager.machine import AppointmentStateMachine, create_fsm

__all__ = [
    "AppointmentStateMachine",
    "create_fsm",
]
