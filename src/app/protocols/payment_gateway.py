"""Contrato do colaborador de pagamento.

O agendamento apenas dispara a cobrança; a confirmação chega depois por
callback (`on_payment_confirmed` / `on_payment_failed`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.appointment import Appointment


@runtime_checkable
class PaymentGatewayProtocol(Protocol):
    async def initialize_payment(self, appointment: Appointment) -> str:
        """Inicia o checkout e retorna a referência de pagamento."""
        ...
