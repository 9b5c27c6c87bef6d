"""Papéis que podem disparar transições de status."""

from enum import StrEnum


class ActorRole(StrEnum):
    """
    Quem está pedindo a transição.

    - BUSINESS: dono do negócio (confirmação manual, conclusão, no-show)
    - CUSTOMER: cliente que reservou
    - PAYMENT: colaborador de pagamento (callbacks de sucesso/falha)
    - SYSTEM: cascata interna (ex.: cancelamento de série recorrente)
    """

    BUSINESS = "business"
    CUSTOMER = "customer"
    PAYMENT = "payment"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value
