"""Relógio injetável: "agora" no horário local do negócio (naive)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import datetime as dt


@runtime_checkable
class ClockProtocol(Protocol):
    def now(self) -> dt.datetime:
        """Data/hora local do negócio, sem tzinfo."""
        ...

    def today(self) -> dt.date:
        ...
