"""Expansão e manutenção de séries recorrentes."""

from app.coordinators.recurrence.expander import RecurrenceExpander, series_lock_key

__all__ = ["RecurrenceExpander", "series_lock_key"]
