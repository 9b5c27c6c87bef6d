"""Settings do núcleo de agendamento.

Horizonte de materialização, limites por execução e backend de lock.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import TYPE_CHECKING, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

LockBackend = Literal["memory", "redis"]


class SchedulingSettings(BaseModel):
    """Configuracoes de agenda, recorrencia e concorrencia."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    schedule_timezone: str = Field(
        default="UTC",
        description="Fuso do relogio de negocio (datas/horarios sao locais).",
    )
    recurrence_horizon_days: int = Field(
        default=28,
        ge=1,
        description="Dias a frente materializados por execucao.",
    )
    recurrence_max_instances_per_run: int = Field(
        default=60,
        ge=1,
        description="Limite de instancias criadas por serie em uma execucao.",
    )
    recurrence_preview_limit: int = Field(
        default=4,
        ge=1,
        description="Quantidade padrao de datas no preview de serie.",
    )
    booking_lock_backend: LockBackend = Field(
        default="memory",
        description="memory (processo unico) ou redis (multi-instancia).",
    )
    booking_lock_timeout_seconds: float = Field(default=5.0, gt=0)
    booking_lock_ttl_seconds: float = Field(default=30.0, gt=0)
    background_task_limit: int = Field(default=100, ge=1)

    def validate_against(self, base: BaseSettings) -> list[str]:
        """Valida combinacoes dependentes de outras settings.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        try:
            ZoneInfo(self.schedule_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"SCHEDULE_TIMEZONE inválido: {self.schedule_timezone}")

        if self.booking_lock_backend == "redis" and not base.redis_url:
            errors.append("BOOKING_LOCK_BACKEND=redis requer REDIS_URL configurado")

        if self.booking_lock_ttl_seconds < self.booking_lock_timeout_seconds:
            errors.append("BOOKING_LOCK_TTL_SECONDS deve ser >= BOOKING_LOCK_TIMEOUT_SECONDS")

        return errors


def _load_scheduling_from_env() -> SchedulingSettings:
    """Carrega SchedulingSettings a partir de variaveis de ambiente."""
    backend_str = os.getenv("BOOKING_LOCK_BACKEND", "memory").lower()
    backend: LockBackend = "redis" if backend_str == "redis" else "memory"
    return SchedulingSettings(
        schedule_timezone=os.getenv("SCHEDULE_TIMEZONE", "UTC"),
        recurrence_horizon_days=int(os.getenv("RECURRENCE_HORIZON_DAYS", "28")),
        recurrence_max_instances_per_run=int(os.getenv("RECURRENCE_MAX_INSTANCES_PER_RUN", "60")),
        recurrence_preview_limit=int(os.getenv("RECURRENCE_PREVIEW_LIMIT", "4")),
        booking_lock_backend=backend,
        booking_lock_timeout_seconds=float(os.getenv("BOOKING_LOCK_TIMEOUT_SECONDS", "5")),
        booking_lock_ttl_seconds=float(os.getenv("BOOKING_LOCK_TTL_SECONDS", "30")),
        background_task_limit=int(os.getenv("BACKGROUND_TASK_LIMIT", "100")),
    )


@lru_cache(maxsize=1)
def get_scheduling_settings() -> SchedulingSettings:
    """Retorna instancia cacheada de SchedulingSettings."""
    return _load_scheduling_from_env()


__all__ = ["LockBackend", "SchedulingSettings", "get_scheduling_settings"]
