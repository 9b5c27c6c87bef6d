"""Execução fire-and-forget de chamadas a colaboradores externos.

Pagamento e notificação rodam fora do caminho da reserva: falhas são
apenas logadas e nunca desfazem o agendamento.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """Agenda coroutines com limite de concorrência e drena no shutdown."""

    def __init__(self, limit: int = 100) -> None:
        self._semaphore = asyncio.Semaphore(limit)
        self._active: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active)

    def schedule(self, coroutine: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        task = asyncio.create_task(self._run_with_limit(coroutine), name=name)
        self._active.add(task)
        task.add_done_callback(self._on_task_done)
        logger.debug(
            "background_task_scheduled",
            extra={"task_name": name, "active_tasks": len(self._active)},
        )
        return task

    async def _run_with_limit(self, coroutine: Coroutine[Any, Any, Any]) -> Any:
        async with self._semaphore:
            return await coroutine

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "background_task_failed",
                    extra={
                        "task_name": task.get_name(),
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes; cancela as que excederem o timeout."""
        if not self._active:
            return

        pending_now = list(self._active)
        logger.info(
            "background_tasks_shutdown_wait",
            extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "background_tasks_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
