"""Locks por chave para serializar reservas e materialização de séries."""

from app.infra.locks.memory_lock import InProcessBookingLock
from app.infra.locks.redis_lock import RedisBookingLock

__all__ = ["InProcessBookingLock", "RedisBookingLock"]
