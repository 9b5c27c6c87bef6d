"""
Status canônicos de um agendamento (Appointment).

Este módulo define os status que um agendamento pode assumir durante
seu ciclo de vida e a regra de status inicial na criação.

Status não-terminais ocupam o slot na agenda; terminais liberam o slot
e preservam o histórico (agendamentos nunca são removidos).
"""

from decimal import Decimal
from enum import StrEnum


class AppointmentStatus(StrEnum):
    """
    Status canônicos de um agendamento.

    Status não-terminais (ocupam o slot):
        - PENDING: Criado, aguardando pagamento ou confirmação manual
        - CONFIRMED: Confirmado pelo negócio ou pelo pagamento

    Status terminais:
        - COMPLETED: Atendimento realizado
        - CANCELLED: Cancelado pelo negócio, cliente, pagamento ou série
        - NO_SHOW: Cliente não compareceu
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"

    def __str__(self) -> str:
        return self.value


# Uma vez em status terminal, o agendamento não transita mais
TERMINAL_STATUSES: frozenset[AppointmentStatus] = frozenset({
    AppointmentStatus.COMPLETED,
    AppointmentStatus.CANCELLED,
    AppointmentStatus.NO_SHOW,
})

# Status que bloqueiam o intervalo [start, end) na agenda do recurso
ACTIVE_STATUSES: frozenset[AppointmentStatus] = frozenset({
    AppointmentStatus.PENDING,
    AppointmentStatus.CONFIRMED,
})


def is_terminal(status: AppointmentStatus) -> bool:
    """Verifica se o status é terminal."""
    return status in TERMINAL_STATUSES


def is_active(status: AppointmentStatus) -> bool:
    """Verifica se o status ainda ocupa o slot."""
    return status in ACTIVE_STATUSES


def is_valid_status(status: object) -> bool:
    """Verifica se o valor é um AppointmentStatus válido."""
    return isinstance(status, AppointmentStatus)


def initial_status_for(price: Decimal) -> AppointmentStatus:
    """
    Regra de status inicial na criação do agendamento.

    Serviço pago nasce PENDING (pagamento pendente); gratuito nasce CONFIRMED.

    Args:
        price: Preço do serviço

    Returns:
        Status inicial do novo agendamento
    """
    if price > 0:
        return AppointmentStatus.PENDING
    return AppointmentStatus.CONFIRMED
