"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: histogram de tempos por componente/operação
- Conflito de reserva: counter de slots perdidos na disputa
- Materialização: counter de instâncias criadas/puladas por execução

Uso:
    from app.observability.metrics import record_latency, record_booking_conflict

    start = time.perf_counter()
    # ... operação ...
    record_latency("booking_coordinator", "create_appointment", elapsed_ms, correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "booking_coordinator")
        operation: Nome da operação (ex: "create_appointment")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_booking_conflict(
    reason: str,
    correlation_id: str | None = None,
    metadata: dict[str, str | float | int] | None = None,
) -> None:
    """Registra slot perdido para outra reserva.

    Args:
        reason: "revalidation" (lock) ou "store_constraint" (insert)
        correlation_id: ID de correlação para rastreamento
        metadata: Metadados adicionais opcionais (sem PII)
    """
    extra: dict[str, str | float | int | None] = {
        "metric_type": "booking_conflict",
        "component": "booking_coordinator",
        "reason": reason,
        "correlation_id": correlation_id,
    }
    if metadata:
        extra.update(metadata)

    logger.info("metric_booking_conflict", extra=extra)


def record_materialization(
    series_id: str,
    created: int,
    skipped: int,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de uma execução de materialização de série."""
    logger.info(
        "metric_materialization",
        extra={
            "metric_type": "materialization",
            "component": "recurrence_expander",
            "series_id": series_id,
            "created_count": created,
            "skipped_count": skipped,
            "correlation_id": correlation_id,
        },
    )
