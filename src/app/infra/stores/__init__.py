"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: agendamentos, séries e catálogo em memória (dev/test)
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryAppointmentStore,
    MemoryRecurringStore,
    MemoryServiceCatalog,
)

__all__ = [
    "MemoryAppointmentStore",
    "MemoryRecurringStore",
    "MemoryServiceCatalog",
]
