"""Testes HTTP das rotas de agendamento (TestClient + container em memória)."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from tests.fakes.scheduling import build_memory_container, make_service

BOOKING = {
    "service_id": "svc-1",
    "business_id": "biz-1",
    "customer_id": "cus-1",
    "date": "2024-01-03",
    "start_time": "10:00",
}


@pytest.fixture
def memory():
    container, clock, payments, notifier = build_memory_container(
        make_service(),
        make_service(service_id="svc-paid", price="60.00"),
        now=datetime(2023, 12, 31, 8, 0),
    )
    return container, clock, notifier


@pytest.fixture
def client(memory):
    container, _, _ = memory
    with TestClient(create_app(container)) as test_client:
        yield test_client


class TestSlots:
    def test_lists_free_slots(self, client: TestClient) -> None:
        response = client.get("/v1/services/svc-1/slots", params={"date": "2024-01-03"})

        assert response.status_code == 200
        body = response.json()
        assert [slot["start"] for slot in body["slots"]] == ["09:00:00", "10:00:00", "11:00:00"]
        assert body["reason"] is None

    def test_day_not_offered_is_empty_with_reason(self, client: TestClient) -> None:
        response = client.get("/v1/services/svc-1/slots", params={"date": "2024-01-06"})

        assert response.status_code == 200
        assert response.json()["slots"] == []
        assert response.json()["reason"] == "not_available_day"

    def test_unknown_service_is_404(self, client: TestClient) -> None:
        response = client.get("/v1/services/nope/slots", params={"date": "2024-01-03"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "SERVICE_NOT_FOUND"

    def test_missing_date_is_422(self, client: TestClient) -> None:
        response = client.get("/v1/services/svc-1/slots")

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert response.json()["details"]


class TestAppointments:
    def test_create_then_conflict(self, client: TestClient) -> None:
        created = client.post("/v1/appointments", json=BOOKING)
        duplicate = client.post("/v1/appointments", json={**BOOKING, "customer_id": "cus-2"})

        assert created.status_code == 201
        assert created.json()["status"] == "confirmed"
        assert created.json()["end_time"] == "11:00:00"
        assert duplicate.status_code == 409
        assert duplicate.json()["error_code"] == "SLOT_NO_LONGER_AVAILABLE"

    def test_invalid_day_is_422(self, client: TestClient) -> None:
        response = client.post("/v1/appointments", json={**BOOKING, "date": "2024-01-07"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_DAY"

    def test_series_link_is_not_accepted(self, client: TestClient) -> None:
        response = client.post("/v1/appointments", json={**BOOKING, "recurring_id": "series-x"})
        listed = client.get("/v1/businesses/biz-1/appointments")

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert listed.json() == []

    def test_staff_members_book_the_same_slot(self, client: TestClient) -> None:
        first = client.post("/v1/appointments", json={**BOOKING, "staff_id": "ana"})
        second = client.post("/v1/appointments", json={**BOOKING, "customer_id": "cus-2", "staff_id": "bia"})

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["staff_id"] == "ana"
        assert second.json()["recurring_id"] is None

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.post("/v1/appointments", json=BOOKING, headers={"X-Correlation-ID": "corr-42"})
        assert response.headers["X-Correlation-ID"] == "corr-42"

    def test_status_update_and_listing(self, client: TestClient) -> None:
        appointment_id = client.post("/v1/appointments", json=BOOKING).json()["id"]

        cancelled = client.patch(
            f"/v1/appointments/{appointment_id}/status",
            json={"status": "cancelled", "actor": "customer"},
        )
        again = client.patch(
            f"/v1/appointments/{appointment_id}/status",
            json={"status": "confirmed", "actor": "business"},
        )
        listed = client.get("/v1/customers/cus-1/appointments", params={"status": "cancelled"})

        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"
        assert again.status_code == 409
        assert again.json()["error_code"] == "INVALID_TRANSITION"
        assert [item["id"] for item in listed.json()] == [appointment_id]

    def test_system_actor_is_not_accepted_over_http(self, client: TestClient) -> None:
        appointment_id = client.post("/v1/appointments", json=BOOKING).json()["id"]

        response = client.patch(
            f"/v1/appointments/{appointment_id}/status",
            json={"status": "cancelled", "actor": "system"},
        )

        assert response.status_code == 422

    def test_unknown_appointment_is_404(self, client: TestClient) -> None:
        response = client.get("/v1/appointments/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "APPOINTMENT_NOT_FOUND"

    def test_inverted_range_is_422(self, client: TestClient) -> None:
        response = client.get(
            "/v1/businesses/biz-1/appointments",
            params={"date_from": "2024-02-01", "date_to": "2024-01-01"},
        )
        assert response.status_code == 422


class TestPayments:
    def test_paid_booking_confirmed_by_callback(self, client: TestClient) -> None:
        created = client.post("/v1/appointments", json={**BOOKING, "service_id": "svc-paid"}).json()
        assert created["status"] == "pending"

        confirmed = client.post(f"/v1/payments/callbacks/{created['id']}/confirmed")
        duplicate = client.post(f"/v1/payments/callbacks/{created['id']}/confirmed")

        assert confirmed.status_code == 200
        assert confirmed.json()["status"] == "confirmed"
        assert duplicate.status_code == 200

    def test_failed_payment_cancels(self, client: TestClient) -> None:
        created = client.post("/v1/appointments", json={**BOOKING, "service_id": "svc-paid"}).json()

        response = client.post(f"/v1/payments/callbacks/{created['id']}/failed")

        assert response.json()["status"] == "cancelled"


class TestRecurring:
    SERIES = {
        "business_id": "biz-1",
        "service_id": "svc-1",
        "customer_id": "cus-1",
        "pattern": "weekly",
        "day_of_week": 3,
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "start_time": "10:00",
    }

    def test_preview(self, client: TestClient) -> None:
        response = client.post("/v1/recurring-appointments/preview", json=self.SERIES, params={"limit": 2})

        assert response.status_code == 200
        assert response.json() == {"dates": ["2024-01-03", "2024-01-10"]}

    def test_create_materialize_and_cancel(self, client: TestClient) -> None:
        created = client.post("/v1/recurring-appointments", json=self.SERIES)
        assert created.status_code == 201
        series = created.json()
        assert series["day_of_week"] == "wednesday"
        assert len(series["appointment_ids"]) == 4

        materialized = client.post(
            f"/v1/recurring-appointments/{series['id']}/materialize",
            json={"horizon": "2024-01-31"},
        )
        assert materialized.status_code == 200
        assert [item["date"] for item in materialized.json()["created"]] == ["2024-01-31"]

        fetched = client.get(f"/v1/recurring-appointments/{series['id']}").json()
        assert fetched["status"] == "completed"

        rejected = client.patch(
            f"/v1/recurring-appointments/{series['id']}/status",
            json={"status": "active"},
        )
        assert rejected.status_code == 409

    def test_pause_and_list(self, client: TestClient) -> None:
        series_id = client.post("/v1/recurring-appointments", json=self.SERIES).json()["id"]

        paused = client.patch(f"/v1/recurring-appointments/{series_id}/status", json={"status": "paused"})
        by_business = client.get("/v1/businesses/biz-1/recurring-appointments", params={"status": "paused"})
        by_customer = client.get("/v1/customers/cus-1/recurring-appointments")

        assert paused.json()["status"] == "paused"
        assert [item["id"] for item in by_business.json()] == [series_id]
        assert [item["id"] for item in by_customer.json()] == [series_id]

    def test_invalid_pattern_fields_are_422(self, client: TestClient) -> None:
        response = client.post(
            "/v1/recurring-appointments",
            json={**self.SERIES, "pattern": "monthly", "day_of_week": None},
        )
        assert response.status_code == 422

    def test_unknown_series_is_404(self, client: TestClient) -> None:
        response = client.get("/v1/recurring-appointments/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "RECURRING_APPOINTMENT_NOT_FOUND"


def test_notifications_are_sent_for_created_appointment(memory) -> None:
    container, _, notifier = memory
    with TestClient(create_app(container)) as test_client:
        test_client.post("/v1/appointments", json=BOOKING)
    # O shutdown do lifespan drena as tasks pendentes.
    assert notifier.event_types() == ["appointment_created", "appointment_created"]
