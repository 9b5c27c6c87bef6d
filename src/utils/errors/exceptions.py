"""Exceções de domínio do agendamento e falhas de infraestrutura.

Taxonomia:
- SchedulingError: erros esperados, devolvidos ao chamador com `code` estável.
- InfrastructureError: falhas de IO (storage, lock, Redis); propagam sem retry.
"""

from __future__ import annotations


class SchedulingError(Exception):
    """Base para erros de negócio do agendamento."""

    code = "SCHEDULING_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """Entrada malformada (data inválida, duração negativa, período invertido)."""

    code = "VALIDATION_ERROR"


class InvalidDayError(SchedulingError):
    """Serviço não é oferecido no dia da semana solicitado."""

    code = "INVALID_DAY"


class ServiceDisabledError(SchedulingError):
    """Serviço desativado pelo negócio (soft-disable)."""

    code = "SERVICE_DISABLED"


class NotFoundError(SchedulingError):
    """Entidade referenciada não existe."""

    code = "NOT_FOUND"


class ServiceNotFoundError(NotFoundError):
    code = "SERVICE_NOT_FOUND"


class AppointmentNotFoundError(NotFoundError):
    code = "APPOINTMENT_NOT_FOUND"


class SeriesNotFoundError(NotFoundError):
    code = "RECURRING_APPOINTMENT_NOT_FOUND"


class ConflictError(SchedulingError):
    """Estado mudou desde a leitura do chamador; re-consultar e tentar de novo."""

    code = "CONFLICT"


class SlotNoLongerAvailableError(ConflictError):
    """Slot foi ocupado entre a oferta e o commit."""

    code = "SLOT_NO_LONGER_AVAILABLE"


class InvalidTransitionError(ConflictError):
    """Transição de status fora da tabela permitida."""

    code = "INVALID_TRANSITION"

    def __init__(self, from_state: str, to_state: str, reason: str | None = None) -> None:
        message = f"Transição inválida: {from_state} → {to_state}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class StorageUnavailableError(InfrastructureError):
    """Falha de indisponibilidade do storage de agendamentos."""


class LockAcquisitionError(InfrastructureError):
    """Timeout aguardando o lock de serialização de reservas."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""
