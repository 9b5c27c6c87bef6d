"""Registro de `asyncio.Lock` por chave (processo único)."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator

from app.protocols.booking_lock import BookingLockProtocol
from utils.errors import LockAcquisitionError

logger = logging.getLogger(__name__)


class InProcessBookingLock(BookingLockProtocol):
    """Lock por chave em memória.

    Entradas sem dono nem espera são removidas ao liberar, mantendo o
    registro proporcional às chaves em disputa.
    """

    def __init__(self, timeout_seconds: float = 5.0) -> None:
        self._timeout = timeout_seconds
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self._timeout)
            except TimeoutError as exc:
                logger.warning("booking_lock_timeout", extra={"lock_key": key, "backend": "memory"})
                raise LockAcquisitionError(f"Timeout aguardando lock {key}") from exc
            try:
                yield
            finally:
                lock.release()
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                self._locks.pop(key, None)

    def __len__(self) -> int:
        return len(self._locks)
