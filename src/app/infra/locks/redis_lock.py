"""Lock distribuído em Redis para múltiplos processos/instâncias.

Usa `redis.asyncio.lock.Lock` (SET NX PX + script de release por token).
O TTL protege contra processos que morrem segurando o lock.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from redis.exceptions import LockError, RedisError

from app.protocols.booking_lock import BookingLockProtocol
from utils.errors import LockAcquisitionError, RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

LOCK_PREFIX = "agenda:lock:"


class RedisBookingLock(BookingLockProtocol):
    def __init__(
        self,
        redis_client: AsyncRedis,
        *,
        timeout_seconds: float = 5.0,
        ttl_seconds: float = 30.0,
    ) -> None:
        self._redis = redis_client
        self._timeout = timeout_seconds
        self._ttl = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{LOCK_PREFIX}{key}"

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._redis.lock(
            self._key(key),
            timeout=self._ttl,
            blocking_timeout=self._timeout,
        )
        try:
            acquired = await lock.acquire()
        except RedisError as exc:
            raise RedisConnectionError("Falha ao adquirir lock no Redis") from exc
        if not acquired:
            logger.warning("booking_lock_timeout", extra={"lock_key": key, "backend": "redis"})
            raise LockAcquisitionError(f"Timeout aguardando lock {key}")
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                # TTL expirou antes do release; outro processo pode ter o lock.
                logger.warning("booking_lock_expired", extra={"lock_key": key})
            except RedisError as exc:
                raise RedisConnectionError("Falha ao liberar lock no Redis") from exc
