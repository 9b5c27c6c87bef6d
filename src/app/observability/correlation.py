"""Correlation id por requisição (ContextVar, seguro em async).

O middleware HTTP lê X-Correlation-ID, inclusive de callbacks do gateway de
pagamento, ou gera um novo; o valor segue para os logs e para os headers das
integrações (pagamento, webhook de notificação, catálogo).
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

MAX_CORRELATION_ID_LENGTH = 128

# Header vem de fora: aceita só caracteres seguros para log e header
_ALLOWED = re.compile(r"^[A-Za-z0-9._:\-]+$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Correlation id do contexto atual, ou string vazia fora de requisição."""
    return _correlation_id.get()


def normalize_correlation_id(raw: str | None) -> str:
    """Aproveita o id recebido quando seguro; senão gera um UUID hex."""
    candidate = (raw or "").strip()
    if candidate and len(candidate) <= MAX_CORRELATION_ID_LENGTH and _ALLOWED.match(candidate):
        return candidate
    return uuid.uuid4().hex


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation id (normalizado) e devolve o token para reset."""
    return _correlation_id.set(normalize_correlation_id(correlation_id))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
