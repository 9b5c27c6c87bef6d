"""
Exports públicos do módulo fsm/types.

Tipos e estruturas de dados para transições de status.
"""

from fsm.types.actor import ActorRole
from fsm.types.transition import StateTransition, TransitionContext, TransitionResult

__all__ = [
    "ActorRole",
    "StateTransition",
    "TransitionContext",
    "TransitionResult",
]
