"""
Regras de transição válidas entre status de agendamento.

Este módulo define o grafo de transições e, para cada aresta,
quais papéis podem dispará-la. Qualquer par fora da tabela é inválido.
"""

from fsm.states.appointment import TERMINAL_STATUSES, AppointmentStatus
from fsm.types.actor import ActorRole

# Tipagem explícita do mapa de transições
TransitionMap = dict[AppointmentStatus, frozenset[AppointmentStatus]]
ActorMap = dict[tuple[AppointmentStatus, AppointmentStatus], frozenset[ActorRole]]

VALID_TRANSITIONS: TransitionMap = {
    # PENDING: confirma (manual ou pagamento) ou cancela
    AppointmentStatus.PENDING: frozenset({
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.CANCELLED,
    }),

    # CONFIRMED: encerra após o horário ou cancela
    AppointmentStatus.CONFIRMED: frozenset({
        AppointmentStatus.COMPLETED,
        AppointmentStatus.NO_SHOW,
        AppointmentStatus.CANCELLED,
    }),

    # Status terminais: sem saída
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}

# Papéis autorizados por aresta
TRANSITION_ACTORS: ActorMap = {
    (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED): frozenset({
        ActorRole.BUSINESS,
        ActorRole.PAYMENT,
    }),
    # PAYMENT: falha de pagamento; SYSTEM: cancelamento em cascata da série
    (AppointmentStatus.PENDING, AppointmentStatus.CANCELLED): frozenset({
        ActorRole.BUSINESS,
        ActorRole.CUSTOMER,
        ActorRole.PAYMENT,
        ActorRole.SYSTEM,
    }),
    (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED): frozenset({
        ActorRole.BUSINESS,
    }),
    (AppointmentStatus.CONFIRMED, AppointmentStatus.NO_SHOW): frozenset({
        ActorRole.BUSINESS,
    }),
    (AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED): frozenset({
        ActorRole.BUSINESS,
        ActorRole.CUSTOMER,
        ActorRole.SYSTEM,
    }),
}

# Arestas que só valem depois do fim do agendamento
REQUIRES_END_TIME_PASSED: frozenset[tuple[AppointmentStatus, AppointmentStatus]] = frozenset({
    (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED),
    (AppointmentStatus.CONFIRMED, AppointmentStatus.NO_SHOW),
})


def get_valid_targets(state: AppointmentStatus) -> frozenset[AppointmentStatus]:
    """
    Retorna os status de destino válidos para um status de origem.

    Args:
        state: Status de origem

    Returns:
        Conjunto de destinos permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: AppointmentStatus, to_state: AppointmentStatus) -> bool:
    """Verifica se o par (origem, destino) está na tabela."""
    if from_state in TERMINAL_STATUSES:
        return False
    return to_state in get_valid_targets(from_state)


def get_allowed_actors(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
) -> frozenset[ActorRole]:
    """Retorna os papéis autorizados para a aresta (vazio se inexistente)."""
    return TRANSITION_ACTORS.get((from_state, to_state), frozenset())


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os status do enum estão no mapa
    - Status terminais têm conjunto vazio
    - Toda aresta tem ao menos um papel autorizado, e vice-versa

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in AppointmentStatus:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Status {state.value} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATUSES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(f"Status terminal {state.value} não deveria ter transições")

    for from_state, targets in VALID_TRANSITIONS.items():
        for target in targets:
            if not TRANSITION_ACTORS.get((from_state, target)):
                errors.append(
                    f"Transição {from_state.value} → {target.value} sem papéis autorizados"
                )

    for from_state, to_state in TRANSITION_ACTORS:
        if to_state not in VALID_TRANSITIONS.get(from_state, frozenset()):
            errors.append(
                f"Papéis definidos para aresta inexistente {from_state.value} → {to_state.value}"
            )

    return errors
