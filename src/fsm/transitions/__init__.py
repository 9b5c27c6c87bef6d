"""
Exports públicos do módulo fsm/transitions.

Regras de transição válidas entre status de agendamentos e séries.
"""

from fsm.transitions.recurrence import (
    SERIES_TRANSITIONS,
    SeriesTransitionMap,
    is_series_transition_valid,
)
from fsm.transitions.rules import (
    REQUIRES_END_TIME_PASSED,
    TRANSITION_ACTORS,
    VALID_TRANSITIONS,
    ActorMap,
    TransitionMap,
    get_allowed_actors,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)

__all__ = [
    "REQUIRES_END_TIME_PASSED",
    "SERIES_TRANSITIONS",
    "TRANSITION_ACTORS",
    "VALID_TRANSITIONS",
    "ActorMap",
    "SeriesTransitionMap",
    "TransitionMap",
    "get_allowed_actors",
    "get_valid_targets",
    "is_series_transition_valid",
    "is_transition_valid",
    "validate_transition_map",
]
