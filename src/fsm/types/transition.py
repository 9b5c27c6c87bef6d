"""
Tipos e estruturas de dados para transições de status.

Este módulo define os tipos usados para representar e rastrear
transições de status de agendamentos na FSM.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from fsm.states.appointment import AppointmentStatus
from fsm.types.actor import ActorRole


@dataclass(frozen=True, slots=True)
class TransitionContext:
    """
    Contexto fornecido pelo caller para avaliar guards.

    Attributes:
        actor: Papel de quem dispara a transição
        now: Relógio de parede local do negócio no momento da transição
        ends_at: Fim do agendamento (preenchido pela máquina)
    """

    actor: ActorRole
    now: datetime
    ends_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Registro imutável de uma mudança de status.

    Attributes:
        appointment_id: Agendamento afetado
        from_state: Status de origem
        to_state: Status de destino
        trigger: Identificador do gatilho (ex: 'payment_confirmed')
        actor: Papel que disparou a transição
        metadata: Dados adicionais para auditoria (nunca conter PII)
        timestamp: Momento da transição
    """

    appointment_id: str
    from_state: AppointmentStatus
    to_state: AppointmentStatus
    trigger: str
    actor: ActorRole
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Valida invariantes do objeto após inicialização."""
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        """
        Retorna representação segura para logs (sem PII).

        Returns:
            Dict com dados seguros para logging estruturado
        """
        return {
            "appointment_id": self.appointment_id,
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "trigger": self.trigger,
            "actor": self.actor.value,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi bem-sucedida
        transition: Dados da transição (se success=True)
        error_reason: Motivo da falha (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        """Valida consistência do resultado."""
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
