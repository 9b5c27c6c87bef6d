"""Serviços de aplicação.

Cálculos puros reutilizáveis (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.appointment_availability import compute_slots, partition_window
from app.services.recurrence_dates import generate_occurrences, preview_dates

__all__ = [
    "compute_slots",
    "generate_occurrences",
    "partition_window",
    "preview_dates",
]
