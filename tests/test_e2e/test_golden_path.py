"""Teste E2E do golden path de agendamento via HTTP.

Negócio publica um serviço pago, cliente reserva, pagamento confirma,
série semanal é criada e depois cancelada preservando o histórico.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from tests.fakes.scheduling import build_memory_container, make_service


@pytest.mark.integration
def test_booking_payment_and_series_lifecycle() -> None:
    container, clock, payments, notifier = build_memory_container(
        make_service(service_id="svc-paid", price="90.00"),
        now=datetime(2023, 12, 31, 8, 0),
    )

    with TestClient(create_app(container)) as client:
        slots = client.get("/v1/services/svc-paid/slots", params={"date": "2024-01-02"}).json()
        first_slot = slots["slots"][0]["start"]

        booked = client.post(
            "/v1/appointments",
            json={
                "service_id": "svc-paid",
                "business_id": "biz-1",
                "customer_id": "cus-1",
                "date": "2024-01-02",
                "start_time": first_slot,
            },
        ).json()
        assert booked["status"] == "pending"

        confirmed = client.post(f"/v1/payments/callbacks/{booked['id']}/confirmed").json()
        assert confirmed["status"] == "confirmed"

        series = client.post(
            "/v1/recurring-appointments",
            json={
                "business_id": "biz-1",
                "service_id": "svc-paid",
                "customer_id": "cus-2",
                "pattern": "weekly",
                "day_of_week": "tuesday",
                "start_date": "2024-01-01",
                "start_time": first_slot,
            },
        ).json()
        # 2 de janeiro já está reservado pelo cliente avulso.
        assert series["skipped_dates"] == ["2024-01-02"]
        assert len(series["appointment_ids"]) == 3

        clock.set(datetime(2024, 1, 10, 8, 0))
        cancelled = client.patch(
            f"/v1/recurring-appointments/{series['id']}/status",
            json={"status": "cancelled"},
        ).json()
        assert cancelled["appointment_ids"] == series["appointment_ids"]

        children = client.get("/v1/customers/cus-2/appointments").json()
        assert [child["status"] for child in children] == ["pending", "cancelled", "cancelled"]

        # Reserva avulsa não pertence à série e não é afetada.
        solo = client.get(f"/v1/appointments/{booked['id']}").json()
        assert solo["status"] == "confirmed"
        assert solo["payment_reference"] is not None

    assert len(payments.calls) == 4
    assert "series_status_changed" in notifier.event_types()
