"""Testes do RecurrenceExpander: criação, materialização e status da série."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from unittest.mock import AsyncMock

import pytest

from app.domain import BookingRequest, SeriesDefinition, Weekday
from config.settings import SchedulingSettings
from fsm import ActorRole, AppointmentStatus, RecurrenceStatus
from tests.fakes.scheduling import build_memory_container, make_service
from utils.errors import (
    InvalidDayError,
    InvalidTransitionError,
    SeriesNotFoundError,
    ServiceDisabledError,
    StorageUnavailableError,
    ValidationError,
)

SUNDAY_BEFORE = datetime(2023, 12, 31, 8, 0)
ALL_DAYS = frozenset(Weekday)


def _definition(**overrides) -> SeriesDefinition:
    data = {
        "business_id": "biz-1",
        "service_id": "svc-1",
        "customer_id": "cus-1",
        "pattern": "weekly",
        "day_of_week": "wednesday",
        "start_date": date(2024, 1, 1),
        "start_time": time(10),
    }
    data.update(overrides)
    return SeriesDefinition(**data)


def _dates(appointments) -> list[date]:
    return [item.date for item in appointments]


class TestCreateSeries:
    @pytest.mark.asyncio
    async def test_weekly_january_creates_five_and_completes(self) -> None:
        container, _, _, notifier = build_memory_container(
            make_service(),
            now=SUNDAY_BEFORE,
            scheduling=SchedulingSettings(recurrence_horizon_days=31),
        )

        series = await container.expander.create_series(_definition(end_date=date(2024, 1, 31)))
        await container.tasks.drain()

        children = await container.appointments.get_many(list(series.appointment_ids))
        assert _dates(children) == [
            date(2024, 1, 3),
            date(2024, 1, 10),
            date(2024, 1, 17),
            date(2024, 1, 24),
            date(2024, 1, 31),
        ]
        assert all(child.recurring_id == series.id for child in children)
        assert all(child.start_time == time(10) for child in children)
        assert series.end_time == time(11)
        assert series.status == RecurrenceStatus.COMPLETED
        assert "series_created" in notifier.event_types()

    @pytest.mark.asyncio
    async def test_initial_run_stops_at_horizon(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)

        series = await container.expander.create_series(_definition(end_date=date(2024, 1, 31)))

        assert len(series.appointment_ids) == 4
        assert series.last_processed_date == date(2024, 1, 24)
        assert series.status == RecurrenceStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_weekday_not_offered(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        with pytest.raises(InvalidDayError):
            await container.expander.create_series(_definition(day_of_week="saturday"))

    @pytest.mark.asyncio
    async def test_start_time_outside_grid(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        with pytest.raises(ValidationError):
            await container.expander.create_series(_definition(start_time=time(10, 15)))

    @pytest.mark.asyncio
    async def test_series_without_dates_is_rejected(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        with pytest.raises(ValidationError):
            await container.expander.create_series(_definition(end_date=date(2024, 1, 2)))
        assert await container.expander.list_series("biz-1") == []

    @pytest.mark.asyncio
    async def test_conflicting_occurrence_is_skipped(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        await container.booking.create_appointment(
            BookingRequest(
                service_id="svc-1",
                business_id="biz-1",
                customer_id="cus-9",
                date=date(2024, 1, 10),
                start_time=time(10),
            )
        )

        series = await container.expander.create_series(_definition())

        children = await container.appointments.get_many(list(series.appointment_ids))
        assert _dates(children) == [date(2024, 1, 3), date(2024, 1, 17), date(2024, 1, 24)]
        assert series.skipped_dates == (date(2024, 1, 10),)


class TestMaterialization:
    @pytest.mark.asyncio
    async def test_monthly_day_31_skips_short_months(self) -> None:
        container, *_ = build_memory_container(make_service(days=ALL_DAYS), now=SUNDAY_BEFORE)
        definition = _definition(pattern="monthly", day_of_week=None, day_of_month=31, end_date=date(2024, 6, 30))
        series = await container.expander.create_series(definition)

        await container.expander.materialize_upcoming(series.id, horizon=date(2024, 6, 30))

        stored = await container.expander.get_series(series.id)
        children = await container.appointments.get_many(list(stored.appointment_ids))
        assert _dates(children) == [date(2024, 1, 31), date(2024, 3, 31), date(2024, 5, 31)]
        assert stored.skipped_dates == ()
        assert stored.status == RecurrenceStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_rerun_with_same_horizon_creates_nothing(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())

        again = await container.expander.materialize_upcoming(series.id, horizon=date(2024, 1, 28))
        extended = await container.expander.materialize_upcoming(series.id, horizon=date(2024, 2, 7))

        assert again == []
        assert _dates(extended) == [date(2024, 1, 31), date(2024, 2, 7)]
        stored = await container.expander.get_series(series.id)
        assert len(stored.appointment_ids) == 6

    @pytest.mark.asyncio
    async def test_max_instances_per_run_resumes_from_cursor(self) -> None:
        container, *_ = build_memory_container(
            make_service(days=ALL_DAYS),
            now=SUNDAY_BEFORE,
            scheduling=SchedulingSettings(recurrence_max_instances_per_run=2),
        )
        series = await container.expander.create_series(_definition(pattern="daily", day_of_week=None))
        assert len(series.appointment_ids) == 2

        next_batch = await container.expander.materialize_upcoming(series.id)

        assert _dates(next_batch) == [date(2024, 1, 3), date(2024, 1, 4)]

    @pytest.mark.asyncio
    async def test_materialize_all_active(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        first = await container.expander.create_series(_definition())
        await container.expander.create_series(_definition(day_of_week="friday", customer_id="cus-2"))
        await container.expander.apply_bulk_status(first.id, RecurrenceStatus.PAUSED)

        created = await container.expander.materialize_all_active(horizon=date(2024, 2, 9))

        # Apenas a série de sexta avança: 2 e 9 de fevereiro.
        assert created == 2

    @pytest.mark.asyncio
    async def test_materialization_with_info_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)

        series = await container.expander.create_series(_definition())

        assert len(series.appointment_ids) == 4
        metrics = [record for record in caplog.records if record.getMessage() == "metric_materialization"]
        assert len(metrics) == 1
        assert metrics[0].created_count == 4
        assert metrics[0].skipped_count == 0

    @pytest.mark.asyncio
    async def test_maintenance_continues_after_failing_series(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        container, *_ = build_memory_container(
            make_service(),
            make_service(service_id="svc-2"),
            now=SUNDAY_BEFORE,
        )
        healthy = await container.expander.create_series(_definition())
        broken = await container.expander.create_series(
            _definition(service_id="svc-2", day_of_week="friday", customer_id="cus-2")
        )
        container.catalog.put(make_service(service_id="svc-2", is_active=False))

        created = await container.expander.materialize_all_active(horizon=date(2024, 2, 9))

        # Série saudável ganha 31/01 e 07/02 mesmo com a outra falhando antes.
        assert created == 2
        stored = await container.expander.get_series(healthy.id)
        assert len(stored.appointment_ids) == 6
        failed = await container.expander.get_series(broken.id)
        assert failed.status == RecurrenceStatus.ACTIVE
        assert len(failed.appointment_ids) == 4
        failures = [record for record in caplog.records if record.getMessage() == "series_maintenance_failed"]
        assert [record.series_id for record in failures] == [broken.id]
        assert failures[0].error_code == "SERVICE_DISABLED"

    @pytest.mark.asyncio
    async def test_explicit_materialization_of_disabled_service_raises(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())
        container.catalog.put(make_service(is_active=False))

        with pytest.raises(ServiceDisabledError):
            await container.expander.materialize_upcoming(series.id, horizon=date(2024, 2, 9))

        stored = await container.expander.get_series(series.id)
        assert len(stored.appointment_ids) == 4

    @pytest.mark.asyncio
    async def test_unknown_series(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        with pytest.raises(SeriesNotFoundError):
            await container.expander.materialize_upcoming("missing")


class TestBulkStatus:
    @pytest.mark.asyncio
    async def test_cancel_cascades_only_to_future_active_children(self) -> None:
        container, clock, _, _ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())
        first_id, second_id, third_id, fourth_id = series.appointment_ids

        clock.set(datetime(2024, 1, 11, 9, 0))
        await container.update_status.execute(first_id, AppointmentStatus.COMPLETED, ActorRole.BUSINESS)

        cancelled = await container.expander.apply_bulk_status(series.id, RecurrenceStatus.CANCELLED)

        statuses = {
            item.id: item.status
            for item in await container.appointments.get_many(list(series.appointment_ids))
        }
        assert statuses == {
            first_id: AppointmentStatus.COMPLETED,
            second_id: AppointmentStatus.CONFIRMED,
            third_id: AppointmentStatus.CANCELLED,
            fourth_id: AppointmentStatus.CANCELLED,
        }
        assert cancelled.status == RecurrenceStatus.CANCELLED
        assert cancelled.appointment_ids == series.appointment_ids

    @pytest.mark.asyncio
    async def test_pause_then_resume_continues_from_today(self) -> None:
        container, clock, _, _ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())

        paused = await container.expander.apply_bulk_status(series.id, RecurrenceStatus.PAUSED)
        clock.set(datetime(2024, 2, 5, 8, 0))
        assert await container.expander.materialize_upcoming(series.id) == []

        resumed = await container.expander.apply_bulk_status(series.id, RecurrenceStatus.ACTIVE)

        assert paused.appointment_ids == series.appointment_ids
        children = await container.appointments.get_many(list(resumed.appointment_ids))
        assert _dates(children)[4:] == [
            date(2024, 2, 7),
            date(2024, 2, 14),
            date(2024, 2, 21),
            date(2024, 2, 28),
        ]
        assert resumed.status == RecurrenceStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_resume_with_disabled_service_stays_paused(self) -> None:
        container, clock, _, _ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())
        await container.expander.apply_bulk_status(series.id, RecurrenceStatus.PAUSED)
        container.catalog.put(make_service(is_active=False))
        clock.set(datetime(2024, 2, 5, 8, 0))

        with pytest.raises(ServiceDisabledError):
            await container.expander.apply_bulk_status(series.id, RecurrenceStatus.ACTIVE)

        stored = await container.expander.get_series(series.id)
        assert stored.status == RecurrenceStatus.PAUSED
        assert stored.appointment_ids == series.appointment_ids

    @pytest.mark.asyncio
    async def test_resume_failing_mid_run_restores_paused(self, monkeypatch: pytest.MonkeyPatch) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())
        await container.expander.apply_bulk_status(series.id, RecurrenceStatus.PAUSED)
        monkeypatch.setattr(
            container.expander,
            "materialize_upcoming",
            AsyncMock(side_effect=StorageUnavailableError("store offline")),
        )

        with pytest.raises(StorageUnavailableError):
            await container.expander.apply_bulk_status(series.id, RecurrenceStatus.ACTIVE)

        stored = await container.expander.get_series(series.id)
        assert stored.status == RecurrenceStatus.PAUSED

    @pytest.mark.asyncio
    async def test_terminal_series_rejects_changes(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        series = await container.expander.create_series(_definition())
        await container.expander.apply_bulk_status(series.id, RecurrenceStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError):
            await container.expander.apply_bulk_status(series.id, RecurrenceStatus.ACTIVE)


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_filters(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        mine = await container.expander.create_series(_definition())
        await container.expander.create_series(_definition(customer_id="cus-2", day_of_week="monday"))

        assert [item.id for item in await container.expander.list_series("biz-1", customer_id="cus-1")] == [mine.id]
        assert await container.expander.list_series("biz-1", status=RecurrenceStatus.PAUSED) == []
        assert len(await container.expander.list_customer_series("cus-2", business_id="biz-1")) == 1

    def test_preview_defaults_to_configured_limit(self) -> None:
        container, *_ = build_memory_container(make_service(), now=SUNDAY_BEFORE)
        assert container.expander.preview_dates(_definition()) == [
            date(2024, 1, 3),
            date(2024, 1, 10),
            date(2024, 1, 17),
            date(2024, 1, 24),
        ]
        assert len(container.expander.preview_dates(_definition(), limit=2)) == 2
