"""Calculo de slots livres de um servico em um dia.

Funcao pura: recebe o servico, os intervalos ja ocupados do recurso e o
instante atual, sem consultar store nem relogio.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from app.domain.appointment import AvailabilityReason, SlotComputation, TimeSlot
from app.domain.service import Service


def partition_window(start: dt.time, end: dt.time, duration_minutes: int) -> list[TimeSlot]:
    """Divide [start, end) em slots contiguos; o resto parcial e descartado."""
    if duration_minutes <= 0:
        raise ValueError("duration_minutes deve ser positivo")
    step = dt.timedelta(minutes=duration_minutes)
    cursor = dt.datetime.combine(dt.date.min, start)
    limit = dt.datetime.combine(dt.date.min, end)
    slots: list[TimeSlot] = []
    while cursor + step <= limit:
        slots.append(TimeSlot(start=cursor.time(), end=(cursor + step).time()))
        cursor += step
    return slots


def is_slot_in_window(service: Service, start_time: dt.time) -> bool:
    """Indica se `start_time` e o inicio de um slot da grade do servico."""
    window = service.availability
    return any(
        slot.start == start_time
        for slot in partition_window(window.start_time, window.end_time, service.duration_minutes)
    )


def compute_slots(
    service: Service,
    day: dt.date,
    booked_intervals: Iterable[TimeSlot],
    *,
    now: dt.datetime | None = None,
) -> SlotComputation:
    """Retorna os slots reservaveis de `service` em `day`, em ordem crescente.

    - dia fora de `availability.days` -> vazio com NOT_AVAILABLE_DAY;
    - janela vazia (start == end) -> vazio com EMPTY_WINDOW;
    - slots que cruzam um intervalo ocupado sao removidos (semiaberto);
    - com `now`, slots que iniciam antes dele sao removidos (hoje e dias passados).
    """
    window = service.availability
    if not window.offers(day):
        return SlotComputation(reason=AvailabilityReason.NOT_AVAILABLE_DAY)

    candidates = partition_window(window.start_time, window.end_time, service.duration_minutes)
    if not candidates:
        return SlotComputation(reason=AvailabilityReason.EMPTY_WINDOW)

    booked = tuple(booked_intervals)
    free = [slot for slot in candidates if not any(slot.overlaps(busy) for busy in booked)]

    if now is not None and day <= now.date():
        free = [slot for slot in free if dt.datetime.combine(day, slot.start) >= now]

    return SlotComputation(slots=tuple(free))


__all__ = ["compute_slots", "is_slot_in_window", "partition_window"]
