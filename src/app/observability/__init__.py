"""Observabilidade: logs estruturados, tracing, métricas.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_booking_conflict
"""

from app.observability.correlation import (
    get_correlation_id,
    normalize_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_booking_conflict,
    record_latency,
    record_materialization,
)

__all__ = [
    "get_correlation_id",
    "normalize_correlation_id",
    "record_booking_conflict",
    "record_latency",
    "record_materialization",
    "reset_correlation_id",
    "set_correlation_id",
]
