"""Geracao das datas de ocorrencia de uma serie recorrente."""

from __future__ import annotations

import calendar
import datetime as dt
from collections.abc import Iterator

from app.domain.recurring_appointment import RecurrencePattern, SeriesDefinition
from utils.errors import ValidationError

_STEP_DAYS = {
    RecurrencePattern.WEEKLY: 7,
    RecurrencePattern.BIWEEKLY: 14,
}


def first_weekday_on_or_after(start: dt.date, weekday_index: int) -> dt.date:
    """Primeira data >= `start` cujo `weekday()` e `weekday_index`."""
    return start + dt.timedelta(days=(weekday_index - start.weekday()) % 7)


def _daily(start: dt.date) -> Iterator[dt.date]:
    day = start
    while True:
        yield day
        day += dt.timedelta(days=1)


def _stepped(start: dt.date, weekday_index: int, step: int) -> Iterator[dt.date]:
    day = first_weekday_on_or_after(start, weekday_index)
    while True:
        yield day
        day += dt.timedelta(days=step)


def _monthly(start: dt.date, day_of_month: int) -> Iterator[dt.date]:
    year, month = start.year, start.month
    while True:
        # Meses sem o dia (ex.: 31 em abril) sao pulados.
        if day_of_month <= calendar.monthrange(year, month)[1]:
            day = dt.date(year, month, day_of_month)
            if day >= start:
                yield day
        month += 1
        if month > 12:
            year, month = year + 1, 1


def iter_pattern_dates(definition: SeriesDefinition) -> Iterator[dt.date]:
    """Itera as datas do padrao a partir de `start_date`, sem limite superior.

    `end_date` e `occurrences` sao aplicados por `generate_occurrences`.
    """
    pattern = definition.pattern
    if pattern is RecurrencePattern.DAILY:
        return _daily(definition.start_date)
    if pattern is RecurrencePattern.MONTHLY:
        if definition.day_of_month is None:
            raise ValidationError("Padrao mensal exige day_of_month")
        return _monthly(definition.start_date, definition.day_of_month)
    if definition.day_of_week is None:
        raise ValidationError(f"Padrao {pattern} exige day_of_week")
    return _stepped(definition.start_date, definition.day_of_week.iso_index, _STEP_DAYS[pattern])


def generate_occurrences(
    definition: SeriesDefinition,
    *,
    until: dt.date,
    after: dt.date | None = None,
    from_date: dt.date | None = None,
    limit: int | None = None,
) -> list[dt.date]:
    """Datas do padrao ate min(until, end_date), em ordem crescente.

    `occurrences` limita o total de datas do padrao contadas desde
    `start_date`; `after` e o cursor exclusivo, `from_date` o piso inclusivo
    e `limit` corta o tamanho do lote.
    """
    last = until if definition.end_date is None else min(until, definition.end_date)
    dates: list[dt.date] = []
    for index, day in enumerate(iter_pattern_dates(definition)):
        if definition.occurrences is not None and index >= definition.occurrences:
            break
        if day > last:
            break
        if after is not None and day <= after:
            continue
        if from_date is not None and day < from_date:
            continue
        if limit is not None and len(dates) >= limit:
            break
        dates.append(day)
    return dates


def preview_dates(definition: SeriesDefinition, limit: int) -> list[dt.date]:
    """Primeiras `limit` datas da serie (respeita end_date e occurrences)."""
    return generate_occurrences(definition, until=dt.date.max, limit=max(limit, 0))


def is_series_exhausted(definition: SeriesDefinition, *, after: dt.date | None) -> bool:
    """Indica se uma serie limitada nao tem mais datas depois de `after`."""
    if definition.end_date is None and definition.occurrences is None:
        return False
    return not generate_occurrences(definition, until=dt.date.max, after=after, limit=1)


__all__ = [
    "first_weekday_on_or_after",
    "generate_occurrences",
    "is_series_exhausted",
    "iter_pattern_dates",
    "preview_dates",
]
