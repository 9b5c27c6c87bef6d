"""Contrato de lock por chave para serializar validar-e-gravar.

A chave é opaca (ex.: "booking:{business}:{resource}:{date}"). Chaves
diferentes nunca se bloqueiam; não existe lock global.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager


class BookingLockProtocol(ABC):
    @abstractmethod
    def hold(self, key: str) -> AbstractAsyncContextManager[None]:
        """Context manager assíncrono que mantém o lock de `key`.

        Raises:
            LockAcquisitionError: timeout aguardando o lock.
        """
