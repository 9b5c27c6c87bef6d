"""Formatters de logging estruturado.

Todo log JSON sai com os campos obrigatórios, sempre nesta ordem:
timestamp (asctime), level, logger (name), message, correlation_id e
service. Campos de `extra=` vêm em seguida.

Sem PII: apenas ids opacos (appointment_id, series_id) e status. Mensagens
de erro de negócio são em português, então o JSON preserva acentos.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem dos campos obrigatórios na linha JSON
LOG_FIELD_ORDER = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

REQUIRED_LOG_FIELDS = frozenset(LOG_FIELD_ORDER)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {"asctime": "2024-01-03 10:30:00,120", "level": "WARNING",
         "logger": "app.coordinators.recurrence.expander",
         "message": "series_occurrence_skipped", "correlation_id": "abc-123",
         "service": "agenda_marketplace", "series_id": "...",
         "date": "2024-01-10", "error_code": "SLOT_NO_LONGER_AVAILABLE"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in LOG_FIELD_ORDER),
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
