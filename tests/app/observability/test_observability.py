"""Testes de correlation id e métricas como logs."""

from __future__ import annotations

import logging

import pytest

from app.observability import (
    get_correlation_id,
    normalize_correlation_id,
    record_booking_conflict,
    record_materialization,
    reset_correlation_id,
    set_correlation_id,
)
from config.logging import configure_logging


class TestCorrelationId:
    def test_keeps_safe_header_value(self) -> None:
        token = set_correlation_id("pay-callback:42")
        try:
            assert get_correlation_id() == "pay-callback:42"
        finally:
            reset_correlation_id(token)
        assert get_correlation_id() == ""

    @pytest.mark.parametrize("raw", [None, "", "   ", "x" * 129, "quebra\nde-linha", "com espaço"])
    def test_unsafe_or_missing_value_is_replaced(self, raw: str | None) -> None:
        value = normalize_correlation_id(raw)

        assert value != raw
        assert len(value) == 32
        assert value.isalnum()

    def test_strips_surrounding_whitespace(self) -> None:
        assert normalize_correlation_id("  corr-7 ") == "corr-7"


class TestMetrics:
    def test_materialization_metric_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)

        record_materialization("series-1", 3, 1, "corr-1")

        (record,) = [item for item in caplog.records if item.getMessage() == "metric_materialization"]
        assert record.series_id == "series-1"
        assert record.created_count == 3
        assert record.skipped_count == 1
        assert record.correlation_id == "corr-1"

    def test_materialization_metric_with_configured_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        configure_logging(level="INFO", service_name="agenda_marketplace")
        caplog.set_level(logging.INFO)

        record_materialization("series-2", 0, 0)

        assert "metric_materialization" in caplog.messages

    def test_booking_conflict_metric(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)

        record_booking_conflict("store_constraint", "corr-9", {"attempt": 2})

        (record,) = [item for item in caplog.records if item.getMessage() == "metric_booking_conflict"]
        assert record.reason == "store_constraint"
        assert record.attempt == 2
