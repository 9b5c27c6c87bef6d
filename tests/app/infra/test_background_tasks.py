"""Testes do BackgroundTaskRunner."""

from __future__ import annotations

import asyncio
import logging

import pytest

from app.infra.background_tasks import BackgroundTaskRunner


@pytest.mark.asyncio
async def test_drain_waits_for_scheduled_tasks() -> None:
    runner = BackgroundTaskRunner(limit=2)
    done: list[int] = []

    async def job(value: int) -> None:
        await asyncio.sleep(0.01)
        done.append(value)

    for value in range(3):
        runner.schedule(job(value), name=f"job:{value}")
    await runner.drain(timeout_seconds=1.0)

    assert sorted(done) == [0, 1, 2]
    assert runner.active_count == 0


@pytest.mark.asyncio
async def test_failure_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    runner = BackgroundTaskRunner()

    async def broken() -> None:
        raise RuntimeError("gateway offline")

    with caplog.at_level(logging.ERROR, logger="app.infra.background_tasks"):
        runner.schedule(broken(), name="payment:a1")
        await runner.drain(timeout_seconds=1.0)

    records = [record for record in caplog.records if record.getMessage() == "background_task_failed"]
    assert len(records) == 1
    assert records[0].task_name == "payment:a1"


@pytest.mark.asyncio
async def test_drain_cancels_tasks_over_timeout() -> None:
    runner = BackgroundTaskRunner()
    task = runner.schedule(asyncio.sleep(10), name="slow")

    await runner.drain(timeout_seconds=0.01)

    assert task.cancelled()
    assert runner.active_count == 0
